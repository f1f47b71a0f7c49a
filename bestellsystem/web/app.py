"""Streamlit web application for the ordering system."""

import tempfile
from pathlib import Path

import pandas as pd
import streamlit as st

from bestellsystem.config import get_app_name
from bestellsystem.config.category_loader import cost_type_choices
from bestellsystem.engine.order_number import OrderNumberScheme
from bestellsystem.engine.totals import format_amount
from bestellsystem.engine.validation import FormValidationError
from bestellsystem.export.excel_export import export_order_to_excel
from bestellsystem.export.renderers import PrintRenderer, ScreenRenderer
from bestellsystem.models.credit_card_request import DELIVERY_COUNTRIES
from bestellsystem.session.ordering_system import TAB_LABELS, TABS, OrderingSystem

DELIVERY_COUNTRY_LABELS = {
    "deutschland": "Deutschland",
    "eu-land": "EU-Land",
    "drittland": "Drittland",
}


def _system() -> OrderingSystem:
    if "system" not in st.session_state:
        st.session_state.system = OrderingSystem()
    return st.session_state.system


def main():
    """Main Streamlit application."""
    st.set_page_config(
        page_title=get_app_name(),
        page_icon="🧾",
        layout="wide"
    )

    st.title(get_app_name())
    system = _system()

    if system.order_number.get():
        st.info(f"Auftragsnummer: **{system.order_number.get()}**")

    order_tab, credit_card_tab, order_number_tab = st.tabs([TAB_LABELS[tab] for tab in TABS])
    with order_tab:
        render_order_form(system)
    with credit_card_tab:
        render_credit_card_form(system)
    with order_number_tab:
        render_order_number_generator(system)

    with st.sidebar:
        if st.button("Probebestellung laden"):
            system.order_form.load_sample()
            st.rerun()
        if st.button("Alles zurücksetzen", type="secondary"):
            system.reset()
            st.rerun()


def render_order_form(system: OrderingSystem) -> None:
    """Order form: supplier, line items, totals and funding."""
    form = system.order_form
    details = form.details

    st.header("Lieferant")
    col1, col2 = st.columns(2)
    with col1:
        supplier_name = st.text_input("Firmenname *", value=details.supplier_name)
        supplier_address = st.text_area("Adresse *", value=details.supplier_address)
    with col2:
        supplier_fax = st.text_input("Fax", value=details.supplier_fax)
        contact_person = st.text_input("Ansprechpartner", value=details.contact_person)
        delivery_building = st.text_input("Gebäude/Raum", value=details.delivery_building)
    form.update_details(
        supplier_name=supplier_name,
        supplier_address=supplier_address,
        supplier_fax=supplier_fax,
        contact_person=contact_person,
        delivery_building=delivery_building,
    )

    st.header("Positionen")
    for position, item in enumerate(form.items, start=1):
        cols = st.columns([1, 2, 5, 1, 2, 2, 1])
        cols[0].markdown(f"**{position}**")
        article_number = cols[1].text_input("Art.-Nr.", value=item.article_number, key=f"art_{item.id}")
        description = cols[2].text_input("Beschreibung", value=item.description, key=f"desc_{item.id}")
        quantity = cols[3].text_input("Menge", value=str(item.quantity), key=f"qty_{item.id}")
        unit_price = cols[4].text_input("Einzelpreis", value=format_amount(item.unit_price), key=f"price_{item.id}")
        for field, value in [
            ("article_number", article_number),
            ("description", description),
            ("quantity", quantity),
            ("unit_price", unit_price),
        ]:
            form.update_item(item.id, field, value)
        cols[5].metric("Gesamt", f"{format_amount(form.get_item(item.id).line_total)} €")
        if cols[6].button("🗑", key=f"del_{item.id}", disabled=len(form.items) <= 1):
            form.remove_item(item.id)
            st.rerun()

    if st.button("➕ Position hinzufügen"):
        form.add_item()
        st.rerun()

    st.header("Versand, MwSt. und Skonto")
    adjustments = form.adjustments
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        shipping = st.text_input("Versandkosten (€)", value=format_amount(adjustments["shipping_cost"]))
    with col2:
        tax_rate = st.text_input("MwSt. (%)", value=str(adjustments["tax_rate"]))
    with col3:
        discount_rate = st.text_input("Skonto (%)", value=str(adjustments["discount_rate"]))
    with col4:
        discount_days = st.text_input("Skontofrist (Tage)", value=str(adjustments["discount_window_days"]))
    form.set_adjustments(
        shipping_cost=shipping,
        tax_rate=tax_rate,
        discount_rate=discount_rate,
        discount_window_days=discount_days,
    )

    display_totals(form.totals)

    st.header("Mittelherkunft")
    col1, col2, col3 = st.columns(3)
    with col1:
        chapter = st.text_input("Kapitel", value=details.chapter)
        title_tg = st.text_input("Titel/TG", value=details.title_tg)
    with col2:
        cost_center = st.text_input("Kostenstelle", value=details.cost_center)
        cost_bearer = st.text_input("Kostenträger", value=details.cost_bearer)
    with col3:
        codes, labels = cost_type_choices(details.cost_type)
        cost_type = st.selectbox(
            "Kostenart",
            options=codes,
            index=codes.index(details.cost_type),
            format_func=lambda code: labels.get(code, "Bitte wählen"),
        )
    form.update_details(chapter=chapter, title_tg=title_tg, cost_center=cost_center, cost_bearer=cost_bearer)
    category = form.select_cost_type(cost_type)
    if category and category.description:
        st.caption(category.description)

    st.header("Absenden")
    print_view = st.toggle("Druckansicht")
    if st.button("Bestellung absenden", type="primary"):
        try:
            snapshot = form.submit()
        except FormValidationError as e:
            for message in e.result.errors.values():
                st.error(message)
        else:
            st.session_state.last_snapshot = snapshot
            st.success("✅ Bestellung erstellt")

    snapshot = st.session_state.get("last_snapshot")
    if snapshot is not None:
        if print_view:
            st.code(PrintRenderer().render(snapshot), language=None)
        generate_excel_download(snapshot)


def display_totals(totals) -> None:
    """Totals panel (Zwischensumme, MwSt., Gesamtsumme, Skonto)."""
    formatted = totals.formatted()
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Zwischensumme", f"{formatted['subtotal']} €")
    with col2:
        st.metric("Versandkosten", f"{formatted['shipping_cost']} €")
    with col3:
        st.metric(f"MwSt. ({totals.tax_rate}%)", f"{formatted['tax_amount']} €")
    with col4:
        st.metric("Gesamtsumme", f"{formatted['gross_total']} €")
    if totals.discount_applies:
        st.info(
            f"Bei Zahlung innerhalb von {totals.discount_window_days} Tagen: "
            f"Skonto {formatted['discount_amount']} €, zu zahlen {formatted['net_after_discount']} €"
        )


def generate_excel_download(snapshot) -> None:
    """Offer the submitted order as Excel download."""
    with tempfile.NamedTemporaryFile(delete=False, suffix=".xlsx") as tmp_file:
        tmp_path = tmp_file.name

    try:
        export_order_to_excel(snapshot, tmp_path)
        with open(tmp_path, "rb") as f:
            excel_data = f.read()
        st.download_button(
            label="📥 Excel-Datei herunterladen",
            data=excel_data,
            file_name=f"bestellung_{snapshot.order_number or 'neu'}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
    finally:
        Path(tmp_path).unlink(missing_ok=True)

    screen = ScreenRenderer().render(snapshot)
    st.dataframe(pd.DataFrame(screen["items"]), use_container_width=True, hide_index=True)


def render_credit_card_form(system: OrderingSystem) -> None:
    """Virtual credit card request form."""
    form = system.credit_card_form
    request = form.request

    st.header("Antrag virtuelle Kreditkarte")
    col1, col2 = st.columns(2)
    with col1:
        organization_unit = st.text_input("Organisationseinheit *", value=request.organization_unit)
        cost_center = st.text_input("Kostenstelle *", value=request.cost_center, key="cc_cost_center")
        supplier = st.text_input("Lieferant *", value=request.supplier)
        amount = st.text_input(
            "Auftragswert (€, max. 5000) *",
            value=str(request.estimated_amount) if request.estimated_amount is not None else "",
        )
    with col2:
        service_description = st.text_area("Leistungsbeschreibung *", value=request.service_description)
        delivery_country = st.radio(
            "Lieferland *",
            options=list(DELIVERY_COUNTRIES),
            index=DELIVERY_COUNTRIES.index(request.delivery_country)
            if request.delivery_country in DELIVERY_COUNTRIES else 0,
            format_func=DELIVERY_COUNTRY_LABELS.get,
            horizontal=True,
        )
        request_date = st.date_input("Antragsdatum *", value=request.request_date)
        st.text_input("Auftragsnummer", value=request.order_number, disabled=True)

    notes = st.text_area("Bemerkungen", value=request.notes, key="cc_notes")
    eu_agreement = st.checkbox(
        "Bei Lieferung aus EU-/Drittländern wird die Umsatzsteuer selbst abgeführt",
        value=request.eu_regulation_agreement,
    )
    ordering_agreement = st.checkbox(
        "Die Bestellung wird verbindlich ausgelöst",
        value=request.ordering_agreement,
    )

    form.update(
        organization_unit=organization_unit,
        cost_center=cost_center,
        supplier=supplier,
        estimated_amount=amount or None,
        service_description=service_description,
        delivery_country=delivery_country,
        request_date=request_date,
        notes=notes,
        eu_regulation_agreement=eu_agreement,
        ordering_agreement=ordering_agreement,
    )
    for warning in form.validate().warnings:
        st.warning(warning)

    if st.button("Antrag absenden", type="primary"):
        try:
            submission = form.submit()
        except FormValidationError as e:
            for message in e.result.errors.values():
                st.error(message)
        else:
            st.success(f"✅ Antrag eingereicht (Status: {submission.status})")


def render_order_number_generator(system: OrderingSystem) -> None:
    """Order number generator: components, preview and generation."""
    generator = system.order_number_generator

    st.header("Auftragsnummer erzeugen")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        generator.set_year(st.text_input("Jahr", value=generator.year, max_chars=2))
    with col2:
        generator.set_department(st.text_input("Abteilung", value=generator.department, max_chars=5))
    with col3:
        generator.set_user_initials(st.text_input("Initialen", value=generator.user_initials, max_chars=3))
    with col4:
        generator.set_sequence(st.text_input("Laufnummer", value=generator.sequence, max_chars=3))

    st.markdown(f"Vorschau: `{generator.preview()}`")

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Erzeugen", type="primary"):
            try:
                generator.generate()
            except ValueError as e:
                st.error(str(e))
            else:
                st.rerun()
    with col2:
        if st.button("Laufnummer +1"):
            generator.increment_sequence()
            st.rerun()
    with col3:
        if st.button("Eindeutige Nummer"):
            system.order_form.generate_order_number(OrderNumberScheme.UNIQUE)
            st.rerun()


if __name__ == "__main__":
    main()
