# pages/9_Forklift.py
import streamlit as st
from sources.forklift import render_forklift


def main():
    st.set_page_config(page_title="Forklifts", layout="wide")
    render_forklift()


if __name__ == "__main__":
    main()
