# sources/mobile_sources.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.factors import FUEL_TYPES
from inventory.records import (
    MOBILE_DEPOTS,
    MONTHS,
    MobileSourceRecord,
    vehicles_for_depot,
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

KEY = "mobile"
PAGE = "Mobile sources"


def _parser(base_url: str):
    return lambda row: MobileSourceRecord.from_row(row, base_url)


def render_mobile_sources():
    page_header("🚚 Mobile Sources", "1.2", "Fuel used by the company fleet.")
    state = load_page_state(KEY, PAGE, "mobile-combustion-activities.csv", _parser)

    render_status_panel(state, KEY)
    st.divider()
    render_emission_total(state)
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add refuelling record", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state)

    render_attachments(state, KEY, editable=not locked)


def _render_add_form(state):
    depot = st.selectbox("Depot", [d.name for d in MOBILE_DEPOTS], key=f"{KEY}_depot")

    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            vehicle = st.selectbox("Vehicle", vehicles_for_depot(depot))
            fuel_type = st.selectbox("Fuel type", FUEL_TYPES)
            month = st.selectbox("Month", MONTHS)
        with c2:
            volume = st.number_input("Fuel volume (L)", min_value=0.0, value=0.0)
            data_source = st.text_input("Data source (required)")
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = MobileSourceRecord.from_form(
                    depot=depot,
                    vehicle=vehicle,
                    fuel_type=fuel_type,
                    month=month,
                    volume=volume,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                st.rerun()
