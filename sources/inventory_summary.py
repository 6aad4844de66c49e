# sources/inventory_summary.py
import logging

import altair as alt
import streamlit as st

from inventory.config import get_settings
from inventory.csv_loader import load_csv_rows
from inventory.exceptions import CsvLoadError
from inventory.store import RecordStore
from inventory.summary import (
    InventorySummaryRecord,
    SummaryFilters,
    apply_filters,
    default_year,
    emission_source_page,
    format_status,
    status_counts,
    summary_frame,
    to_csv,
    unique_values,
)
from inventory.workflow import AuditStatus

from .source_utils import LOAD_FAILED_MESSAGE, ensure_logging

logger = logging.getLogger(__name__)

ALL = "All"


@st.cache_data
def load_summary_records():
    store = RecordStore("Inventory summary")
    store.seed(
        load_csv_rows(get_settings().data_path("inventory-summary.csv")),
        InventorySummaryRecord.from_row,
    )
    return store.records


def _choice(label: str, options, index: int = 0, format_func=str):
    value = st.selectbox(
        label,
        [ALL] + list(options),
        index=index,
        format_func=lambda v: ALL if v == ALL else format_func(v),
    )
    return None if value == ALL else value


def render_inventory_summary():
    ensure_logging()
    st.title("📋 Inventory Summary")
    st.caption("Every site's inventory with its emission sources and approval progress.")

    try:
        records = load_summary_records()
    except CsvLoadError as e:
        logger.error("Inventory summary: %s", e)
        st.error(LOAD_FAILED_MESSAGE)
        return

    if not records:
        st.info("No inventories found.")
        return

    years = unique_values(records, "year")
    preferred = default_year(years)

    c1, c2, c3, c4, c5 = st.columns(5)
    with c1:
        year = _choice("Year", years, index=years.index(preferred) + 1)
    with c2:
        country = _choice("Country", unique_values(records, "country"))
    with c3:
        region = _choice("Region", unique_values(records, "region"))
    with c4:
        site = _choice("Site", unique_values(records, "site"))
    with c5:
        status = _choice("Status", list(AuditStatus), format_func=format_status)

    filtered = apply_filters(
        records,
        SummaryFilters(year=year, country=country, region=region, site=site, status=status),
    )

    st.markdown("#### Inventories by approval status")
    df_status = status_counts(filtered)
    chart = (
        alt.Chart(df_status)
        .mark_bar()
        .encode(
            x=alt.X("Status", sort=None),
            y="Inventories",
            tooltip=["Status", "Inventories"],
        )
    )
    st.altair_chart(chart, use_container_width=True)

    st.markdown(f"#### Inventories ({len(filtered)})")
    if not filtered:
        st.info("No inventories match the selected filters.")
        return

    st.dataframe(summary_frame(filtered), use_container_width=True, hide_index=True)
    st.download_button(
        "⬇️ Download CSV",
        data=to_csv(filtered),
        file_name="inventory-summary.csv",
        mime="text/csv",
    )

    st.markdown("#### Open an emission source")
    sources = sorted({name for record in filtered for name in record.emission_sources})
    cols = st.columns(3)
    for idx, name in enumerate(sources):
        page = emission_source_page(name)
        with cols[idx % 3]:
            if page:
                st.page_link(page, label=name)
            else:
                st.caption(f"{name} (no data-entry page)")
