# pages/6_Logistics_Consumables.py
import streamlit as st
from sources.consumables import render_logistics_consumables


def main():
    st.set_page_config(page_title="Logistics Consumables", layout="wide")
    render_logistics_consumables()


if __name__ == "__main__":
    main()
