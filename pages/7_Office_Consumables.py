# pages/7_Office_Consumables.py
import streamlit as st
from sources.consumables import render_office_consumables


def main():
    st.set_page_config(page_title="Office Consumables", layout="wide")
    render_office_consumables()


if __name__ == "__main__":
    main()
