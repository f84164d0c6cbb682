from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from core.converters import clamp_non_negative, clamp_percent, to_quantity

class SystemType(Enum):
    DC = "DC"
    SINGLE_PHASE = "1F"
    THREE_PHASE = "3F"

class ConductorMaterial(Enum):
    COPPER = "Cu"
    ALUMINUM = "Al"

class DropStatus(Enum):
    OK = "ok"
    WARNING = "warning"
    EXCESSIVE = "excessive"

@dataclass
class CircuitInput:
    system: SystemType = SystemType.SINGLE_PHASE
    material: ConductorMaterial = ConductorMaterial.COPPER
    voltage_v: float = 230.0
    current_a: float = 16.0
    length_m: float = 25.0  # One-way conductor length
    cross_section_mm2: float = 2.5
    target_drop_pct: float = 3.0

@dataclass
class ComparisonRow:
    cross_section_mm2: float
    drop_volts: float
    drop_percent: float
    ampacity_hint: str = "–"

@dataclass
class VoltageDropResult:
    drop_volts: float
    drop_percent: float
    status: DropStatus
    status_label: str
    recommended_section_mm2: float
    comparison: List[ComparisonRow] = field(default_factory=list)

@dataclass(frozen=True)
class PriceLineItem:
    key: str
    label: str
    unit: str
    unit_price: float

class OutletKind(Enum):
    NONE = "none"
    CIRCUIT = "circuit"   # Complete socket circuit package
    SOCKETS = "socket"    # Individually priced sockets

@dataclass(frozen=True)
class OutletSelection:
    kind: OutletKind = OutletKind.NONE
    quantity: int = 0

    def quantity_for(self, key: str) -> int:
        return self.quantity if self.kind.value == key else 0

OUTLET_KEYS = (OutletKind.CIRCUIT.value, OutletKind.SOCKETS.value)

DEFAULT_RATE_PER_KM = 0.45
DEFAULT_VAT_PCT = 20.0
MAX_DISCOUNT_PCT = 100.0
MAX_VAT_PCT = 99.0

@dataclass
class QuoteState:
    """Mutable form state of the price calculator.

    The circuit package and individual sockets share one ``OutletSelection``,
    so at most one of them carries a positive quantity. All setters clamp
    their input; nothing downstream re-validates.
    """
    quantities: Dict[str, int] = field(default_factory=dict)
    outlets: OutletSelection = field(default_factory=OutletSelection)
    materials_cost: float = 0.0
    distance_km: float = 0.0
    rate_per_km: float = DEFAULT_RATE_PER_KM
    callout_fee: float = 0.0
    discount_pct: float = 0.0
    vat_pct: float = DEFAULT_VAT_PCT
    item_keys: Optional[List[str]] = None

    def _check_key(self, key: str):
        if self.item_keys is not None and key not in self.item_keys:
            raise KeyError(key)

    def quantity(self, key: str) -> int:
        self._check_key(key)
        if key in OUTLET_KEYS:
            return self.outlets.quantity_for(key)
        return self.quantities.get(key, 0)

    def set_quantity(self, key: str, value: float):
        self._check_key(key)
        qty = to_quantity(value)
        if key in OUTLET_KEYS:
            if qty > 0:
                self.outlets = OutletSelection(OutletKind(key), qty)
            elif self.outlets.kind.value == key:
                # Clearing the active side; the other side was already zero
                self.outlets = OutletSelection()
            return
        self.quantities[key] = qty

    def set_circuit_package(self, enabled: bool):
        self.set_quantity(OutletKind.CIRCUIT.value, 1 if enabled else 0)

    def set_materials_cost(self, value: float):
        self.materials_cost = clamp_non_negative(value)

    def set_distance_km(self, value: float):
        self.distance_km = clamp_non_negative(value)

    def set_rate_per_km(self, value: float):
        self.rate_per_km = round(clamp_non_negative(value), 2)

    def set_callout_fee(self, value: float):
        self.callout_fee = clamp_non_negative(value)

    def set_discount_pct(self, value: float):
        self.discount_pct = clamp_percent(value, MAX_DISCOUNT_PCT)

    def set_vat_pct(self, value: float):
        self.vat_pct = clamp_percent(value, MAX_VAT_PCT)

    def reset_all(self):
        self.quantities = {}
        self.outlets = OutletSelection()
        self.materials_cost = 0.0
        self.distance_km = 0.0
        self.rate_per_km = DEFAULT_RATE_PER_KM
        self.callout_fee = 0.0
        self.discount_pct = 0.0
        self.vat_pct = DEFAULT_VAT_PCT

@dataclass
class QuoteLine:
    key: str
    label: str
    quantity: int
    unit: str
    unit_price: float
    line_total: float

@dataclass
class QuoteBreakdown:
    lines: List[QuoteLine]
    labor_sum: float
    materials_cost: float
    travel_sum: float
    callout_fee: float
    sub_total: float
    discount_amount: float
    net_amount: float
    vat_amount: float
    grand_total: float
