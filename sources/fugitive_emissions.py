# sources/fugitive_emissions.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.factors import CONTENT_FACTORS
from inventory.records import (
    FUGITIVE_ACTIVITIES,
    FUGITIVE_DEPOTS,
    FugitiveRecord,
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

KEY = "fugitive"
PAGE = "Fugitive emissions"


def _parser(base_url: str):
    return lambda row: FugitiveRecord.from_row(row, base_url)


def render_fugitive_emissions():
    page_header(
        "💨 Fugitive Emissions",
        "1.4",
        "Refrigerant top-ups and extinguisher refills.",
    )
    state = load_page_state(KEY, PAGE, "fugitive-emissions-activities.csv", _parser)

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
    activities = {activity.id: activity for activity in FUGITIVE_ACTIVITIES}

    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            activity_id = st.selectbox(
                "Activity",
                list(activities),
                format_func=lambda value: f"{activities[value].name} ({activities[value].model})",
            )
            depot = st.selectbox("Depot", FUGITIVE_DEPOTS)
            content_type = st.selectbox("Content type", list(CONTENT_FACTORS))
        with c2:
            quantity = st.number_input("Quantity (kg)", min_value=0.0, value=0.0, step=0.1)
            data_source = st.text_input("Data source")
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = FugitiveRecord.from_form(
                    activity_id=activity_id,
                    content_type=content_type,
                    quantity_kg=quantity,
                    depot=depot,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                st.rerun()
