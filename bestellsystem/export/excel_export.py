"""Excel export of the printable order form with German column names."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from ..models.order_snapshot import OrderSnapshot

logger = logging.getLogger(__name__)

ITEMS_SHEET = "Bestellung"
TOTALS_SHEET = "Summen"

ITEM_COLUMNS = ["Pos", "Artikelnummer", "Beschreibung", "Menge", "Einzelpreis", "Gesamtpreis"]
AMOUNT_COLUMNS = ("Einzelpreis", "Gesamtpreis")


def _item_rows(snapshot: OrderSnapshot) -> List[Dict[str, Any]]:
    rows = []
    for position, item in enumerate(snapshot.items, start=1):
        rows.append({
            "Pos": position,
            "Artikelnummer": item.article_number,
            "Beschreibung": item.description,
            "Menge": item.quantity,
            # Excel has no decimal type; values are rounded for display only
            "Einzelpreis": float(item.unit_price),
            "Gesamtpreis": float(item.line_total),
        })
    return rows


def _total_rows(snapshot: OrderSnapshot) -> List[Dict[str, Any]]:
    totals = snapshot.totals
    details = snapshot.details
    rows = [
        {"Bezeichnung": "Auftragsnummer", "Wert": snapshot.order_number},
        {"Bezeichnung": "Lieferant", "Wert": details.supplier_name},
        {"Bezeichnung": "Adresse", "Wert": details.supplier_address},
        {"Bezeichnung": "Zwischensumme", "Wert": float(totals.subtotal)},
        {"Bezeichnung": "Versandkosten", "Wert": float(totals.shipping_cost)},
        {"Bezeichnung": "MwSt.-Satz (%)", "Wert": float(totals.tax_rate)},
        {"Bezeichnung": "MwSt.", "Wert": float(totals.tax_amount)},
        {"Bezeichnung": "Gesamtsumme", "Wert": float(totals.gross_total)},
    ]
    if totals.discount_applies:
        rows.extend([
            {"Bezeichnung": "Skonto (%)", "Wert": float(totals.discount_rate)},
            {"Bezeichnung": "Skontofrist (Tage)", "Wert": totals.discount_window_days},
            {"Bezeichnung": "Skonto", "Wert": float(totals.discount_amount)},
            {"Bezeichnung": "Betrag nach Skonto", "Wert": float(totals.net_after_discount)},
        ])
    # Excel cannot store tz-aware datetimes
    rows.append({"Bezeichnung": "Erstellt", "Wert": snapshot.timestamp.strftime("%Y-%m-%d %H:%M:%S")})
    return rows


def export_order_to_excel(snapshot: OrderSnapshot, output_path: Union[str, Path]) -> str:
    """Export an order snapshot to an Excel workbook.

    Args:
        snapshot: Submitted (or previewed) order
        output_path: Path to output .xlsx file (parent directories are created)

    Returns:
        Path to created Excel file

    Excel structure:
    - Sheet "Bestellung": one row per line item (Pos, Artikelnummer,
      Beschreibung, Menge, Einzelpreis, Gesamtpreis)
    - Sheet "Summen": order number, supplier and totals as label/value rows
    - Amounts formatted with two decimals
    """
    from openpyxl.styles.numbers import FORMAT_NUMBER_00

    items_df = pd.DataFrame(_item_rows(snapshot), columns=ITEM_COLUMNS)
    totals_df = pd.DataFrame(_total_rows(snapshot), columns=["Bezeichnung", "Wert"])

    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path_obj, engine='openpyxl') as writer:
        items_df.to_excel(writer, index=False, sheet_name=ITEMS_SHEET)
        totals_df.to_excel(writer, index=False, sheet_name=TOTALS_SHEET)

        items_sheet = writer.sheets[ITEMS_SHEET]
        amount_indices = [items_df.columns.get_loc(name) for name in AMOUNT_COLUMNS]
        for row in items_sheet.iter_rows(min_row=2, max_row=items_sheet.max_row):
            for idx in amount_indices:
                row[idx].number_format = FORMAT_NUMBER_00

        totals_sheet = writer.sheets[TOTALS_SHEET]
        for row in totals_sheet.iter_rows(min_row=2, max_row=totals_sheet.max_row):
            if isinstance(row[1].value, float):
                row[1].number_format = FORMAT_NUMBER_00

        items_sheet.column_dimensions["C"].width = 50
        totals_sheet.column_dimensions["A"].width = 22
        totals_sheet.column_dimensions["B"].width = 40

    logger.info("Exported order %s to %s", snapshot.order_number or "(no order number)", output_path_obj)
    return str(output_path_obj)
