# pages/3_Fugitive_Emissions.py
import streamlit as st
from sources.fugitive_emissions import render_fugitive_emissions


def main():
    st.set_page_config(page_title="Fugitive Emissions", layout="wide")
    render_fugitive_emissions()


if __name__ == "__main__":
    main()
