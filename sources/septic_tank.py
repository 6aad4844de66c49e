# sources/septic_tank.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.calculations import actual_person_days, septic_emissions
from inventory.exceptions import RecordValidationError
from inventory.formatting import format_emission
from inventory.records import MONTHS, SEPTIC_DEPOTS, SepticTankRecord

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

KEY = "septic"
PAGE = "Septic tank"


def _parser(base_url: str):
    return lambda row: SepticTankRecord.from_row(row, base_url)


def render_septic_tank():
    page_header(
        "🚽 Septic Tank",
        "1.4",
        "Methane from staff wastewater, estimated from person-days.",
    )
    state = load_page_state(KEY, PAGE, "septic-tank-activities.csv", _parser)

    render_status_panel(state, KEY)
    st.divider()
    render_emission_total(state)
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add monthly headcount", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state)

    render_attachments(state, KEY, editable=not locked)


def _render_add_form(state):
    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            depot = st.selectbox("Depot", SEPTIC_DEPOTS)
            month = st.selectbox("Month", MONTHS)
            data_source = st.text_input("Data source (required)")
        with c2:
            employees = st.number_input("Employees", min_value=0, value=0, step=1)
            workdays = st.number_input("Workdays", min_value=0, value=0, step=1)
            leave_days = st.number_input("Leave days", min_value=0.0, value=0.0, step=0.5)
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        person_days = actual_person_days(employees, workdays, leave_days)
        st.caption(
            f"Person-days: {format_emission(person_days)} • "
            f"estimated emissions: {format_emission(septic_emissions(person_days))} kg CO₂e"
        )

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = SepticTankRecord.from_form(
                    depot=depot,
                    month=month,
                    employees=employees,
                    workdays=workdays,
                    leave_days=leave_days,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                st.rerun()
