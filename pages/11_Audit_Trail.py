# pages/11_Audit_Trail.py
import streamlit as st
from inventory.audit_logs import render_audit_logs
from sources.source_utils import ensure_logging


def main():
    st.set_page_config(page_title="Audit Trail", layout="wide")
    ensure_logging()
    st.title("📝 Audit Trail")
    st.caption("Every submit, approval and return, with who did it and why.")
    render_audit_logs()


if __name__ == "__main__":
    main()
