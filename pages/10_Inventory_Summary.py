# pages/10_Inventory_Summary.py
import streamlit as st
from sources.inventory_summary import render_inventory_summary


def main():
    st.set_page_config(page_title="Inventory Summary", layout="wide")
    render_inventory_summary()


if __name__ == "__main__":
    main()
