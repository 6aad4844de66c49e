# sources/source_utils.py
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import pandas as pd
import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from inventory import crud
from inventory.attachments import attachments_from_uploads
from inventory.calculations import total_emissions_t
from inventory.config import get_settings
from inventory.csv_loader import load_csv_rows
from inventory.database import SessionLocal
from inventory.exceptions import CsvLoadError, InventoryError
from inventory.formatting import format_number
from inventory.logging_conf import setup_logging
from inventory.records import table_rows
from inventory.store import RecordStore, RowParser
from inventory.workflow import (
    ACTION_LABELS,
    APPROVE,
    RETURN,
    SUBMIT,
    ApprovalWorkflow,
    AuditStatus,
    Transition,
)

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Initial data failed to load"


@dataclass
class PageState:
    """Everything one page keeps in ``st.session_state`` between reruns."""

    store: RecordStore
    workflow: ApprovalWorkflow
    load_error: Optional[str] = None
    message: Optional[str] = None
    extra: dict = field(default_factory=dict)


# -------------------------------------------------------------------
# Page setup
# -------------------------------------------------------------------

def ensure_logging() -> None:
    if st.session_state.get("_logging_ready"):
        return
    settings = get_settings()
    setup_logging(console_level=settings.log_level, file_path=settings.log_file)
    st.session_state["_logging_ready"] = True


def page_header(title: str, ghg_code: str, caption: str) -> None:
    ensure_logging()
    st.title(title)
    st.caption(f"GHG category {ghg_code} • Inventory year {get_settings().inventory_year} • {caption}")

    st.session_state.setdefault("actor_name", "Reviewer")
    with st.sidebar:
        st.text_input("Actor (for audit logs)", key="actor_name")


def actor_name() -> str:
    return st.session_state.get("actor_name", "unknown")


def record_transition(transition: Transition) -> None:
    with SessionLocal() as session:
        crud.log_transition(session, transition, actor=actor_name())


def load_page_state(
    key: str,
    page: str,
    csv_name: str,
    parser_factory: Callable[[str], RowParser],
) -> PageState:
    """
    Build the page state once per session: seed the store from the CSV and
    attach the audit-trail listener to a fresh Draft workflow.
    """
    state_key = f"page_state_{key}"
    if state_key in st.session_state:
        return st.session_state[state_key]

    settings = get_settings()
    store = RecordStore(page)
    load_error = None
    try:
        rows = load_csv_rows(settings.data_path(csv_name))
        store.seed(rows, parser_factory(settings.attachment_base_url))
    except CsvLoadError as e:
        logger.error("%s: %s", page, e)
        load_error = LOAD_FAILED_MESSAGE

    workflow = ApprovalWorkflow(page)
    workflow.add_listener(record_transition)

    state = PageState(store=store, workflow=workflow, load_error=load_error)
    st.session_state[state_key] = state
    return state


# -------------------------------------------------------------------
# Approval status
# -------------------------------------------------------------------

def render_status_panel(state: PageState, key: str) -> None:
    workflow = state.workflow
    display = workflow.display

    c1, c2 = st.columns([1, 3])
    with c1:
        st.markdown(f"**Audit status:** :{display.badge}[**{display.label}**]")
    with c2:
        st.progress(display.progress / 100.0, text=f"{display.progress}%")

    st.caption(workflow.status_message())
    if state.message:
        st.success(state.message)
        state.message = None

    if workflow.status == AuditStatus.DRAFT and not workflow.last_return_reason:
        with SessionLocal() as session:
            previous = crud.latest_return_reason(session, workflow.page)
        if previous:
            st.caption(f"Last return reason on record: {previous}")

    actions = workflow.available_actions()
    if not actions:
        st.info("All approval steps are complete. This page is locked.")
        return

    buttons = [action for action in actions if action != RETURN]
    cols = st.columns(len(buttons))
    for col, action in zip(cols, buttons):
        with col:
            if st.button(ACTION_LABELS[action], key=f"{key}_{action}", use_container_width=True):
                _perform(state, action)

    if RETURN in actions:
        with st.expander("↩️ Return to draft"):
            with st.form(f"{key}_return_form", clear_on_submit=True):
                reason = st.text_area("Reason for returning (required)")
                if st.form_submit_button("Return", use_container_width=True):
                    _perform(state, RETURN, reason)


def _perform(state: PageState, action: str, reason: Optional[str] = None) -> None:
    try:
        transition = state.workflow.perform(action, reason)
    except InventoryError as e:
        st.error(str(e))
        return
    except SQLAlchemyError as e:
        logger.error("%s: audit trail write failed for %s: %s", state.workflow.page, action, e)
        st.error("The approval could not be recorded in the audit trail. The status was not changed.")
        return

    messages = {
        SUBMIT: "Data submitted for review.",
        APPROVE: f"Approved. Status is now {state.workflow.display.label}.",
        RETURN: f"Data returned to draft. Reason: {transition.reason}",
    }
    state.message = messages[action]
    st.rerun()


# -------------------------------------------------------------------
# Records table
# -------------------------------------------------------------------

def render_records_table(state: PageState, empty_text: str = "No activity data yet. Add a record to get started.") -> None:
    if state.load_error:
        st.error(state.load_error)

    records = state.store.records
    if not records:
        st.info(empty_text)
        return

    df = pd.DataFrame(table_rows(records))
    st.dataframe(df, use_container_width=True, hide_index=True)


def render_emission_total(state: PageState) -> None:
    emissions = [record.emissions_kg for record in state.store if record.emissions_kg is not None]
    c1, c2 = st.columns(2)
    c1.metric("Records", len(state.store))
    c2.metric("Total emissions (tCO₂e)", format_number(total_emissions_t(emissions), 0, 3))


def add_record(state: PageState, record, prepend: bool = False) -> bool:
    """Add a validated record unless the page is locked. Returns True on success."""
    try:
        state.workflow.ensure_editable()
    except InventoryError as e:
        st.error(str(e))
        return False

    if prepend:
        state.store.prepend(record)
    else:
        state.store.add(record)
    state.message = "Record added to the activity data."
    return True


def upload_widget(key: str, label: str = "Attachments"):
    return st.file_uploader(label, accept_multiple_files=True, key=key)


# -------------------------------------------------------------------
# Attachments
# -------------------------------------------------------------------

def record_label(index: int, record) -> str:
    row = record.table_row()
    parts = [str(value) for value in list(row.values())[:3]]
    return f"#{index + 1} • " + " • ".join(parts)


def render_attachments(state: PageState, key: str, editable: bool = True) -> None:
    store = state.store
    if not len(store):
        return

    st.markdown("#### 📎 Attachments")
    labels: List[str] = [record_label(i, record) for i, record in enumerate(store)]
    index = st.selectbox(
        "Record",
        options=list(range(len(labels))),
        format_func=lambda i: labels[i],
        key=f"{key}_attach_record",
    )
    record = store[index]

    if not record.attachments:
        st.caption("No attachments for this record.")
    for position, attachment in enumerate(record.attachments):
        c1, c2 = st.columns([4, 1])
        with c1:
            if attachment.is_local:
                st.download_button(
                    f"⬇️ {attachment.name}",
                    data=attachment.data,
                    file_name=attachment.name,
                    key=f"{key}_dl_{index}_{position}",
                )
            else:
                st.markdown(f"[{attachment.name}]({attachment.url})")
        with c2:
            if editable and st.button("Remove", key=f"{key}_rm_{index}_{position}"):
                store.remove_attachment(index, position)
                st.rerun()

    if not editable:
        return

    with st.form(f"{key}_attach_form", clear_on_submit=True):
        files = upload_widget(f"{key}_attach_files", "Add supporting files")
        if st.form_submit_button("Upload"):
            new = attachments_from_uploads(files)
            if not new:
                st.warning("Choose at least one non-empty file.")
            else:
                store.attach(index, new)
                state.message = f"{len(new)} attachment(s) added."
                st.rerun()
