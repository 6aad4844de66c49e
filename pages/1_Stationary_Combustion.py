# pages/1_Stationary_Combustion.py
import streamlit as st
from sources.stationary_combustion import render_stationary_combustion


def main():
    st.set_page_config(page_title="Stationary Combustion", layout="wide")
    render_stationary_combustion()


if __name__ == "__main__":
    main()
