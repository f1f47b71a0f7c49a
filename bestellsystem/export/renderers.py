"""Screen and print renderers over the same order snapshot."""

from typing import Any, Dict, List

from ..config.category_loader import find_expense_category
from ..engine.totals import format_amount
from ..models.order_snapshot import OrderSnapshot

TOTAL_LABELS = [
    ("subtotal", "Zwischensumme"),
    ("shipping_cost", "Versandkosten"),
    ("tax_amount", "MwSt."),
    ("gross_total", "Gesamtsumme"),
]

DISCOUNT_LABELS = [
    ("discount_amount", "Skonto"),
    ("net_after_discount", "Betrag nach Skonto"),
]

PRINT_WIDTH = 78


def _format_percent(value) -> str:
    return f"{format(value.normalize(), 'f')}%"


def _cost_type_label(code: str) -> str:
    if not code:
        return ""
    category = find_expense_category(code)
    return category.label if category else code


class ScreenRenderer:
    """Render a snapshot as a structured dict for the UI and the API."""

    def render(self, snapshot: OrderSnapshot) -> Dict[str, Any]:
        totals = snapshot.totals
        data = snapshot.to_dict()
        data["totals_display"] = [
            {"key": key, "label": label, "value": totals.formatted()[key]}
            for key, label in self._total_rows(snapshot)
        ]
        data["tax_rate_display"] = _format_percent(totals.tax_rate)
        data["discount_applies"] = totals.discount_applies
        data["cost_type_label"] = _cost_type_label(snapshot.details.cost_type)
        return data

    @staticmethod
    def _total_rows(snapshot: OrderSnapshot) -> List[tuple]:
        rows = list(TOTAL_LABELS)
        if snapshot.totals.discount_applies:
            rows.extend(DISCOUNT_LABELS)
        return rows


class PrintRenderer:
    """Render a snapshot as a plain-text order sheet (Bestellschein)."""

    def __init__(self, width: int = PRINT_WIDTH):
        self.width = width

    def render(self, snapshot: OrderSnapshot) -> str:
        lines: List[str] = []
        lines.extend(self._header(snapshot))
        lines.extend(self._items(snapshot))
        lines.extend(self._totals(snapshot))
        lines.extend(self._funding(snapshot))
        lines.extend(self._signatures())
        return "\n".join(lines) + "\n"

    def _rule(self, char: str = "-") -> str:
        return char * self.width

    def _header(self, snapshot: OrderSnapshot) -> List[str]:
        details = snapshot.details
        lines = [
            "BESTELLUNG".center(self.width),
            self._rule("="),
            f"Auftragsnummer: {snapshot.order_number or '-'}",
            f"Datum:          {(details.order_date or snapshot.timestamp.date()).strftime('%d.%m.%Y')}",
            "",
            "Lieferant:",
            f"  {details.supplier_name}",
        ]
        lines.extend(f"  {part.strip()}" for part in details.supplier_address.split(",") if part.strip())
        if details.supplier_fax:
            lines.append(f"  Fax: {details.supplier_fax}")
        lines.append("")
        lines.append(f"Lieferanschrift: Gebäude/Raum {details.delivery_building}")
        if details.contact_person:
            lines.append(f"Ansprechpartner: {details.contact_person}")
        if details.contact_phone:
            lines.append(f"Telefon:         {details.contact_phone}")
        if details.contact_fax:
            lines.append(f"Fax:             {details.contact_fax}")
        lines.append("")
        return lines

    def _items(self, snapshot: OrderSnapshot) -> List[str]:
        header = f"{'Pos':>3}  {'Art.-Nr.':<10} {'Beschreibung':<32} {'Menge':>5} {'Preis':>10} {'Gesamt':>10}"
        lines = [header, self._rule()]
        for position, item in enumerate(snapshot.items, start=1):
            lines.append(
                f"{position:>3}  {item.article_number[:10]:<10} {item.description[:32]:<32} "
                f"{item.quantity:>5} {format_amount(item.unit_price):>10} "
                f"{format_amount(item.line_total):>10}"
            )
        lines.append(self._rule())
        return lines

    def _totals(self, snapshot: OrderSnapshot) -> List[str]:
        totals = snapshot.totals
        formatted = totals.formatted()
        labels = dict(TOTAL_LABELS)
        labels["tax_amount"] = f"MwSt. ({_format_percent(totals.tax_rate)})"
        rows = [key for key, _ in TOTAL_LABELS]
        if totals.discount_applies:
            labels["discount_amount"] = (
                f"Skonto ({_format_percent(totals.discount_rate)} "
                f"bei Zahlung in {totals.discount_window_days} Tagen)"
            )
            labels["net_after_discount"] = dict(DISCOUNT_LABELS)["net_after_discount"]
            rows.extend(key for key, _ in DISCOUNT_LABELS)
        return [f"{labels[key]:>{self.width - 16}} {formatted[key]:>11} EUR" for key in rows] + [""]

    def _funding(self, snapshot: OrderSnapshot) -> List[str]:
        details = snapshot.details
        lines = [
            "Mittelherkunft:",
            f"  Kapitel: {details.chapter}   Titel/TG: {details.title_tg}",
            f"  Kostenstelle: {details.cost_center}   Kostenträger: {details.cost_bearer}",
            f"  Ausgabeart: {details.expenditure_type}",
            f"  Kostenart: {_cost_type_label(details.cost_type)}",
        ]
        if details.funds_amount is not None:
            lines.append(f"  Betrag: {format_amount(details.funds_amount)} EUR")
        if details.business_use:
            lines.append(f"  Betrieblicher Anteil: {details.business_use_percent}%")
        if details.notes:
            lines.extend(["", "Bemerkungen:", f"  {details.notes}"])
        lines.append("")
        return lines

    def _signatures(self) -> List[str]:
        signature = "_" * 30
        return [
            "",
            f"{signature}    {signature}",
            f"{'Datum, Unterschrift Besteller':<30}    {'Sachlich richtig':<30}",
        ]
