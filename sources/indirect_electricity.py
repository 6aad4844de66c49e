# sources/indirect_electricity.py
import itertools

import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.formatting import format_number
from inventory.records import SITE_OPTIONS, ElectricityRecord, electricity_id

from .source_utils import (
    add_record,
    load_page_state,
    page_header,
    render_attachments,
    render_records_table,
    render_status_panel,
    upload_widget,
)

KEY = "electricity"
PAGE = "Indirect electricity"


def _parser(base_url: str):
    counter = itertools.count(1)
    return lambda row: ElectricityRecord.from_row(row, next(counter), base_url)


def render_indirect_electricity():
    page_header(
        "⚡ Indirect Emissions from Imported Electricity",
        "2.1",
        "Office electricity bills, self-use and shared meters.",
    )
    state = load_page_state(KEY, PAGE, "purchased-electricity-activities.csv", _parser)
    state.extra.setdefault("counter", len(state.store))

    render_status_panel(state, KEY)
    st.divider()

    c1, c2 = st.columns(2)
    c1.metric("Bills", len(state.store))
    c2.metric(
        "Total usage (kWh)",
        format_number(sum(record.total_usage for record in state.store), 0, 1),
    )
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add electricity bill", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state)

    render_attachments(state, KEY, editable=not locked)


def _render_add_form(state):
    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        site = st.selectbox("Site", SITE_OPTIONS)
        c1, c2 = st.columns(2)
        with c1:
            start_date = st.date_input("Billing start", value=None)
            usage_self = st.number_input("Self-use (kWh)", min_value=0.0, value=0.0)
        with c2:
            end_date = st.date_input("Billing end", value=None)
            usage_shared = st.number_input("Shared (kWh)", min_value=0.0, value=0.0)
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = ElectricityRecord.from_form(
                    record_id=electricity_id(state.extra["counter"] + 1),
                    site=site,
                    start_date=start_date,
                    end_date=end_date,
                    usage_self=usage_self,
                    usage_shared=usage_shared,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record, prepend=True):
                state.extra["counter"] += 1
                st.rerun()
