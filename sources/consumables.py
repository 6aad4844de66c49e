# sources/consumables.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.records import (
    MONTHS,
    LogisticsConsumableRecord,
    OfficeConsumableRecord,
)

from .source_utils import (
    add_record,
    load_page_state,
    page_header,
    render_attachments,
    render_emission_total,
    render_records_table,
    render_status_panel,
    upload_widget,
)


def render_logistics_consumables():
    _render_consumables(
        record_cls=LogisticsConsumableRecord,
        key="logistics",
        page="Upstream logistics consumables",
        title="📦 Upstream Transport • Logistics Consumables",
        csv_name="upstream-logistics-consumables.csv",
        caption="Freight of boxes, pallets and packing material to our depots.",
    )


def render_office_consumables():
    _render_consumables(
        record_cls=OfficeConsumableRecord,
        key="office",
        page="Upstream office consumables",
        title="🗂️ Upstream Transport • Office Consumables",
        csv_name="upstream-office-consumables.csv",
        caption="Freight of paper, toner and office supplies.",
    )


def _render_consumables(record_cls, key: str, page: str, title: str, csv_name: str, caption: str):
    page_header(title, "3.1", caption)
    state = load_page_state(
        key, page, csv_name, lambda base_url: lambda row: record_cls.from_row(row, base_url)
    )

    render_status_panel(state, key)
    st.divider()
    render_emission_total(state)
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add shipment", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state, record_cls, key)

    render_attachments(state, key, editable=not locked)


def _render_add_form(state, record_cls, key: str):
    catalog = record_cls.catalog

    # Picking an item pre-fills its unit weight, so it lives outside the form
    item = st.selectbox(
        "Consumable item",
        [entry.name for entry in catalog.items],
        format_func=lambda name: f"{name} ({catalog.item_weight(name)} kg/unit)",
        key=f"{key}_item",
    )

    with st.form(f"{key}_add_form", clear_on_submit=True):
        c1, c2, c3 = st.columns(3)
        with c1:
            location = st.selectbox("Depot", catalog.depots)
            month = st.selectbox("Month", MONTHS)
            vehicle = st.selectbox("Vehicle", catalog.vehicles)
            fuel_type = st.selectbox("Fuel type", catalog.fuels)
        with c2:
            origin = st.text_input("Origin")
            destination = st.text_input("Destination")
            data_source = st.text_input("Data source")
        with c3:
            quantity = st.number_input("Item quantity", min_value=0.0, value=0.0)
            unit_weight = st.number_input(
                "Unit weight (kg)",
                min_value=0.0,
                value=float(catalog.item_weight(item) or 0.0),
                key=f"{key}_unit_weight_{item}",
            )
            distance = st.number_input("Transport distance (km)", min_value=0.0, value=0.0)
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{key}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = record_cls.from_form(
                    location=location,
                    month=month,
                    item=item,
                    vehicle=vehicle,
                    fuel_type=fuel_type,
                    origin=origin,
                    destination=destination,
                    quantity=quantity,
                    unit_weight_kg=unit_weight,
                    distance_km=distance,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                state.message = f"{record.item} added to the activity data."
                st.rerun()
