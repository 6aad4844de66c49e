# pages/2_Mobile_Sources.py
import streamlit as st
from sources.mobile_sources import render_mobile_sources


def main():
    st.set_page_config(page_title="Mobile Sources", layout="wide")
    render_mobile_sources()


if __name__ == "__main__":
    main()
