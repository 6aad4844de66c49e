# pages/4_Septic_Tank.py
import streamlit as st
from sources.septic_tank import render_septic_tank


def main():
    st.set_page_config(page_title="Septic Tank", layout="wide")
    render_septic_tank()


if __name__ == "__main__":
    main()
