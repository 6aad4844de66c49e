"""Streamlit views for each emission source page."""
