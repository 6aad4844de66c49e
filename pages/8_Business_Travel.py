# pages/8_Business_Travel.py
import streamlit as st
from sources.business_travel import render_business_travel


def main():
    st.set_page_config(page_title="Business Travel", layout="wide")
    render_business_travel()


if __name__ == "__main__":
    main()
