import math
from typing import Optional

def to_number(raw, default: float = 0.0) -> float:
    """
    Parses a form value into a float.
    Empty strings, None, NaN and infinities fall back to default (an empty field means 0).
    """
    if raw is None: return default
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".")
        if raw == "": return default
        try:
            value = float(raw)
        except ValueError:
            return default
    else:
        value = float(raw)
    if not math.isfinite(value): return default
    return value

def clamp_non_negative(raw) -> float:
    return max(0.0, to_number(raw))

def clamp_percent(raw, upper: float) -> float:
    return min(upper, clamp_non_negative(raw))

def to_quantity(raw) -> int:
    """Whole, non-negative item count."""
    return int(math.floor(clamp_non_negative(raw)))

# Locale -> (thousands separator, decimal separator, symbol, symbol first)
MONEY_LOCALES = {
    "sk-SK": ("\u00a0", ",", "€", False),
    "de-DE": (".", ",", "€", False),
    "en-IE": (",", ".", "€", True),
    "en-US": (",", ".", "$", True),
}

DEFAULT_MONEY_LOCALE = "sk-SK"

def format_money(value: float, locale: Optional[str] = None) -> str:
    """Two-decimal currency string, e.g. 1234.5 -> '1 234,50 €' for sk-SK."""
    thousands, decimal, symbol, prefix = MONEY_LOCALES.get(
        locale or DEFAULT_MONEY_LOCALE, MONEY_LOCALES[DEFAULT_MONEY_LOCALE]
    )
    sign = "-" if value < 0 and round(abs(value), 2) != 0 else ""
    digits = f"{abs(value):,.2f}"
    # Swap through a placeholder so "," and "." can trade places
    digits = digits.replace(",", "\0").replace(".", decimal).replace("\0", thousands)
    if prefix:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{digits}\u00a0{symbol}"

def format_number(value: float, locale: Optional[str] = None) -> str:
    """Plain number for quantities like km, without trailing zeros."""
    _, decimal, _, _ = MONEY_LOCALES.get(
        locale or DEFAULT_MONEY_LOCALE, MONEY_LOCALES[DEFAULT_MONEY_LOCALE]
    )
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text.replace(".", decimal)
