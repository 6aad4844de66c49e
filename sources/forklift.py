# sources/forklift.py
import streamlit as st

from inventory.calculations import total_emissions_t
from inventory.formatting import format_number
from inventory.records import ForkliftRecord

from .source_utils import (
    load_page_state,
    page_header,
    render_attachments,
    render_records_table,
    render_status_panel,
)

KEY = "forklift"
PAGE = "Purchased goods & services (forklifts)"


def _parser(base_url: str):
    return lambda row: ForkliftRecord.from_row(row, base_url)


def render_forklift():
    page_header(
        "🏗️ Purchased Goods & Services • Forklifts",
        "4.1",
        "Warehouse forklift energy use reported by the fleet supplier.",
    )
    state = load_page_state(KEY, PAGE, "purchased-forklift-activities.csv", _parser)

    render_status_panel(state, KEY)
    st.divider()

    c1, c2 = st.columns(2)
    c1.metric("Forklifts", len(state.store))
    c2.metric(
        "Reported emissions (tCO₂e)",
        format_number(total_emissions_t(record.emissions for record in state.store), 0, 3),
    )
    st.caption("Rows come from the supplier report and are read-only. Attachments can still be managed.")
    render_records_table(state)
    render_attachments(state, KEY, editable=not state.workflow.is_locked)
