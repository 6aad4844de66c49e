# pages/5_Indirect_Electricity.py
import streamlit as st
from sources.indirect_electricity import render_indirect_electricity


def main():
    st.set_page_config(page_title="Indirect Electricity", layout="wide")
    render_indirect_electricity()


if __name__ == "__main__":
    main()
