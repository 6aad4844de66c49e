# sources/business_travel.py
import streamlit as st

from inventory.attachments import attachments_from_uploads
from inventory.exceptions import RecordValidationError
from inventory.factors import travel_factor
from inventory.records import (
    CABIN_OPTIONS,
    SITE_OPTIONS,
    TRANSPORT_OPTIONS,
    BusinessTravelRecord,
    max_travel_index,
    travel_id,
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

KEY = "travel"
PAGE = "Business travel"


def _parser(base_url: str):
    return lambda row: BusinessTravelRecord.from_row(row, base_url)


def render_business_travel():
    page_header("✈️ Business Travel", "3.5", "Staff trips by plane, rail, car and metro.")
    state = load_page_state(KEY, PAGE, "business-travel.csv", _parser)
    # ids continue after the highest rec-N loaded from the CSV
    state.extra.setdefault("counter", max_travel_index(state.store))

    render_status_panel(state, KEY)
    st.divider()
    render_emission_total(state)
    render_records_table(state)

    locked = state.workflow.is_locked
    with st.expander("➕ Add trip", expanded=False):
        if locked:
            st.info("The record set is fully approved. New records cannot be added.")
        else:
            _render_add_form(state)

    render_attachments(state, KEY, editable=not locked)


def _render_add_form(state):
    transportation = st.selectbox(
        "Transport mode",
        [None] + list(TRANSPORT_OPTIONS),
        format_func=lambda value: "Select a transport mode" if value is None else TRANSPORT_OPTIONS[value],
        key=f"{KEY}_transport",
    )
    # Cabin class feeds the factor caption, so it is picked outside the form too
    cabin_class = st.selectbox(
        "Cabin class",
        [None] + list(CABIN_OPTIONS),
        format_func=lambda value: "—" if value is None else CABIN_OPTIONS[value],
        disabled=transportation != "plane",
        key=f"{KEY}_cabin",
    )
    if transportation:
        factor = travel_factor(transportation, cabin_class)
        st.caption(f"Emission factor: {factor.factor} kg CO₂e / pkm • {factor.source}")

    with st.form(f"{KEY}_add_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            site = st.selectbox("Site", SITE_OPTIONS)
            departure_date = st.date_input("Departure date", value=None)
            origin = st.text_input("Origin")
            destination = st.text_input("Destination")
        with c2:
            daily_trips = st.number_input("Daily trips", min_value=0, value=0, step=1)
            passengers = st.number_input("Passengers", min_value=0, value=1, step=1)
            distance = st.number_input("Distance (km)", min_value=0.0, value=0.0)
            data_source = st.text_input("Data source")
        notes = st.text_area("Notes (optional)")
        files = upload_widget(f"{KEY}_add_files")

        if st.form_submit_button("Add record", use_container_width=True):
            try:
                record = BusinessTravelRecord.from_form(
                    record_id=travel_id(state.extra["counter"] + 1),
                    transportation=transportation,
                    site=site,
                    departure_date=departure_date,
                    cabin_class=cabin_class,
                    origin=origin,
                    destination=destination,
                    daily_trips=daily_trips,
                    passengers=passengers,
                    distance_km=distance,
                    data_source=data_source,
                    notes=notes,
                    attachments=attachments_from_uploads(files),
                )
            except RecordValidationError as e:
                st.error(str(e))
                return
            if add_record(state, record):
                state.extra["counter"] += 1
                st.rerun()
