import io
from typing import Sequence

import pandas as pd
from openpyxl.styles import Font, PatternFill

from core.catalog import PRICE_CATALOG
from core.models import PriceLineItem, QuoteBreakdown, QuoteState, VoltageDropResult
from engines.pricing import PriceLogic

HEADER_FILL = PatternFill(start_color="D1FAE5", end_color="D1FAE5", fill_type="solid")

def comparison_frame(result: VoltageDropResult) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Section (mm²)": row.cross_section_mm2,
            "ΔU (V)": round(row.drop_volts, 2),
            "ΔU (%)": round(row.drop_percent, 2),
            "Ampacity Cu ~": row.ampacity_hint,
        }
        for row in result.comparison
    ])

def quote_frame(breakdown: QuoteBreakdown) -> pd.DataFrame:
    columns = ["Item", "Qty", "Unit", "Unit price", "Line total"]
    rows = [
        {
            "Item": line.label,
            "Qty": line.quantity,
            "Unit": line.unit,
            "Unit price": line.unit_price,
            "Line total": line.line_total,
        }
        for line in breakdown.lines
    ]
    return pd.DataFrame(rows, columns=columns)

def totals_frame(state: QuoteState, breakdown: QuoteBreakdown) -> pd.DataFrame:
    rows = [
        ("Labour", breakdown.labor_sum),
        ("Materials", breakdown.materials_cost),
        ("Travel", breakdown.travel_sum),
        ("Callout", breakdown.callout_fee),
        ("Subtotal before discount", breakdown.sub_total),
        (f"Discount {state.discount_pct:g}%", -breakdown.discount_amount),
        ("Subtotal", breakdown.net_amount),
        (f"VAT {state.vat_pct:g}%", breakdown.vat_amount),
        ("Total", breakdown.grand_total),
    ]
    return pd.DataFrame([{"Parameter": k, "Value": round(v, 2)} for k, v in rows])

def _style_header(ws):
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

def quote_to_excel(state: QuoteState, catalog: Sequence[PriceLineItem] = PRICE_CATALOG) -> bytes:
    """Printable quote workbook: sheet 'Items' with the lines, sheet 'Totals' with the sums."""
    breakdown = PriceLogic.calculate(state, catalog)
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        quote_frame(breakdown).to_excel(writer, index=False, sheet_name="Items")
        totals_frame(state, breakdown).to_excel(writer, index=False, sheet_name="Totals")
        for ws in writer.book.worksheets:
            _style_header(ws)
            ws.column_dimensions["A"].width = 45
    return output.getvalue()

def comparison_to_excel(result: VoltageDropResult) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        comparison_frame(result).to_excel(writer, index=False, sheet_name="Comparison")
        _style_header(writer.book["Comparison"])
    return output.getvalue()
