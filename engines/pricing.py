import logging
from typing import List, Optional, Sequence

from core.catalog import PRICE_CATALOG
from core.converters import format_money, format_number
from core.models import PriceLineItem, QuoteBreakdown, QuoteLine, QuoteState

logger = logging.getLogger(__name__)

BREAKDOWN_TITLE = "Price estimate"
ITEMS_HEADER = "— Items —"

class PriceLogic:
    @staticmethod
    def new_state(catalog: Sequence[PriceLineItem] = PRICE_CATALOG) -> QuoteState:
        return QuoteState(item_keys=[item.key for item in catalog])

    @staticmethod
    def line_items(state: QuoteState, catalog: Sequence[PriceLineItem] = PRICE_CATALOG) -> List[QuoteLine]:
        lines = []
        for item in catalog:
            qty = state.quantity(item.key)
            if not qty:
                continue
            lines.append(QuoteLine(
                key=item.key,
                label=item.label,
                quantity=qty,
                unit=item.unit,
                unit_price=item.unit_price,
                line_total=qty * item.unit_price,
            ))
        return lines

    @staticmethod
    def labor_sum(state: QuoteState, catalog: Sequence[PriceLineItem] = PRICE_CATALOG) -> float:
        return sum(state.quantity(item.key) * item.unit_price for item in catalog)

    @staticmethod
    def travel_sum(state: QuoteState) -> float:
        return state.distance_km * state.rate_per_km

    @staticmethod
    def calculate(state: QuoteState, catalog: Sequence[PriceLineItem] = PRICE_CATALOG) -> QuoteBreakdown:
        labor = PriceLogic.labor_sum(state, catalog)
        travel = PriceLogic.travel_sum(state)
        sub_total = labor + state.materials_cost + travel + state.callout_fee

        # Discount first, VAT on the discounted amount
        discount = sub_total * state.discount_pct / 100.0
        net = max(0.0, sub_total - discount)
        vat = net * state.vat_pct / 100.0

        return QuoteBreakdown(
            lines=PriceLogic.line_items(state, catalog),
            labor_sum=labor,
            materials_cost=state.materials_cost,
            travel_sum=travel,
            callout_fee=state.callout_fee,
            sub_total=sub_total,
            discount_amount=discount,
            net_amount=net,
            vat_amount=vat,
            grand_total=net + vat,
        )

    @staticmethod
    def breakdown_text(
        state: QuoteState,
        catalog: Sequence[PriceLineItem] = PRICE_CATALOG,
        locale: Optional[str] = None,
    ) -> str:
        """
        Plain-text quote for the clipboard.
        Zero-quantity items are skipped; callout and discount lines only appear when set.
        """
        b = PriceLogic.calculate(state, catalog)

        def fmt(value: float) -> str:
            return format_money(value, locale)

        lines = [BREAKDOWN_TITLE, ITEMS_HEADER]
        for line in b.lines:
            lines.append(
                f"{line.label}: {line.quantity} {line.unit} × {fmt(line.unit_price)} = {fmt(line.line_total)}"
            )
        lines.append(f"Materials: {fmt(state.materials_cost)}")
        lines.append(
            f"Travel: {format_number(state.distance_km, locale)} km × {fmt(state.rate_per_km)} = {fmt(b.travel_sum)}"
        )
        if state.callout_fee:
            lines.append(f"Callout (flat): {fmt(state.callout_fee)}")
        if state.discount_pct:
            lines.append(f"Discount {format_number(state.discount_pct, locale)}%: −{fmt(b.discount_amount)}")
        lines.append(f"Subtotal: {fmt(b.net_amount)}")
        lines.append(f"VAT {format_number(state.vat_pct, locale)}%: {fmt(b.vat_amount)}")
        lines.append(f"Total: {fmt(b.grand_total)}")

        logger.debug("Rendered quote breakdown with %d item lines", len(b.lines))
        return "\n".join(lines)
