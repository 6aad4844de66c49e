# sources/stationary_combustion.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.records import (
    MONTHS,
    QUANTITY_UNITS,
    STATIONARY_ACTIVITIES,
    STATIONARY_DEPOTS,
    StationaryCombustionRecord,
    find_activity,
    fuels_for_activity,
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

KEY = "stationary"
PAGE = "Stationary combustion"


def _parser(base_url: str):
    return lambda row: StationaryCombustionRecord.from_row(row, base_url)


def render_stationary_combustion():
    page_header(
        "🔥 Stationary Combustion",
        "1.1",
        "Fuel burned in generators, boilers and other fixed equipment.",
    )
    state = load_page_state(KEY, PAGE, "stationary-combustion.csv", _parser)

    render_status_panel(state, KEY)
    st.divider()
    render_emission_total(state)
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add activity record", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state)

    render_attachments(state, KEY, editable=not locked)


def _render_add_form(state):
    # Fuel options depend on the activity, so it is picked outside the form
    activity_id = st.selectbox(
        "Activity",
        options=[None] + [activity.id for activity in STATIONARY_ACTIVITIES],
        format_func=lambda value: "Select an activity" if value is None
        else f"{find_activity(value).name} ({value})",
        key=f"{KEY}_activity",
    )

    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            depot = st.selectbox("Depot", STATIONARY_DEPOTS)
            fuel_type = st.selectbox("Fuel type", fuels_for_activity(activity_id))
            month = st.selectbox("Month", MONTHS)
        with c2:
            quantity = st.number_input("Fuel quantity", min_value=0.0, value=0.0)
            unit = st.selectbox("Unit", QUANTITY_UNITS)
            data_source = st.text_input("Data source (required)")
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = StationaryCombustionRecord.from_form(
                    depot=depot,
                    activity_id=activity_id,
                    fuel_type=fuel_type,
                    month=month,
                    quantity=quantity,
                    unit=unit,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                st.rerun()
