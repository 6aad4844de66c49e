"""Core domain for the carbon inventory workbench.

Loading CSV seed data, emission factor tables, activity records, the
approval workflow and the audit trail live here. Streamlit rendering lives
in the ``sources`` package.
"""

__version__ = "0.2.0"
