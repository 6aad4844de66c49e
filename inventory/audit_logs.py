# inventory/audit_logs.py
import pandas as pd
import streamlit as st

from .database import SessionLocal
from . import crud


def logs_frame(logs) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Timestamp": log.timestamp,
                "Page": log.page,
                "Action": log.action,
                "From": log.from_status,
                "To": log.to_status,
                "Reason": log.reason,
                "Actor": log.actor,
            }
            for log in logs
        ],
        columns=["Timestamp", "Page", "Action", "From", "To", "Reason", "Actor"],
    )


def render_audit_logs():
    st.markdown("### 📝 Approval audit trail")

    with SessionLocal() as session:
        pages = crud.list_pages(session)
        page = st.selectbox("Page", ["All pages"] + pages)
        logs = crud.list_logs(session, page=None if page == "All pages" else page)

    if not logs:
        st.info("No approval actions recorded yet.")
        return

    st.dataframe(logs_frame(logs), use_container_width=True)
