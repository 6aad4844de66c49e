import streamlit as st
from streamlit.errors import StreamlitAPIException

from inventory import __version__
from inventory.config import get_settings
from sources.source_utils import ensure_logging

# ---------------------------------------------------------
# CONFIG
# ---------------------------------------------------------
APP_TITLE = "Carbon Inventory"
APP_ICON = "🌍"
APP_VERSION = f"v{__version__} (beta)"

NAV_ITEMS = [
    {
        "col": 0,
        "card_title": "🔥 Stationary Combustion",
        "desc": "Generators, boilers and other fixed fuel-burning equipment.",
        "button": "Open Stationary Combustion",
        "page": "pages/1_Stationary_Combustion.py",
        "badge": "1.1",
    },
    {
        "col": 1,
        "card_title": "🚚 Mobile Sources",
        "desc": "Fuel used by the company fleet, per depot and vehicle.",
        "button": "Open Mobile Sources",
        "page": "pages/2_Mobile_Sources.py",
        "badge": "1.2",
    },
    {
        "col": 2,
        "card_title": "💨 Fugitive Emissions",
        "desc": "Refrigerant top-ups and extinguisher refills.",
        "button": "Open Fugitive Emissions",
        "page": "pages/3_Fugitive_Emissions.py",
        "badge": "1.4",
    },
    {
        "col": 0,
        "card_title": "🚽 Septic Tank",
        "desc": "Methane from staff wastewater, from monthly person-days.",
        "button": "Open Septic Tank",
        "page": "pages/4_Septic_Tank.py",
        "badge": "1.4",
    },
    {
        "col": 1,
        "card_title": "⚡ Indirect Electricity",
        "desc": "Office electricity bills with self-use and shared meters.",
        "button": "Open Indirect Electricity",
        "page": "pages/5_Indirect_Electricity.py",
        "badge": "2.1",
    },
    {
        "col": 2,
        "card_title": "📦 Logistics Consumables",
        "desc": "Upstream freight of boxes, pallets and packing material.",
        "button": "Open Logistics Consumables",
        "page": "pages/6_Logistics_Consumables.py",
        "badge": "3.1",
    },
    {
        "col": 0,
        "card_title": "🗂️ Office Consumables",
        "desc": "Upstream freight of paper, toner and office supplies.",
        "button": "Open Office Consumables",
        "page": "pages/7_Office_Consumables.py",
        "badge": "3.1",
    },
    {
        "col": 1,
        "card_title": "✈️ Business Travel",
        "desc": "Staff trips by plane, rail, car and metro.",
        "button": "Open Business Travel",
        "page": "pages/8_Business_Travel.py",
        "badge": "3.5",
    },
    {
        "col": 2,
        "card_title": "🏗️ Forklifts",
        "desc": "Purchased goods & services: warehouse forklift energy use.",
        "button": "Open Forklifts",
        "page": "pages/9_Forklift.py",
        "badge": "4.1",
    },
]

REPORT_ITEMS = [
    {"label": "📋 Inventory Summary", "page": "pages/10_Inventory_Summary.py"},
    {"label": "📝 Audit Trail", "page": "pages/11_Audit_Trail.py"},
]


def safe_switch_page(page_path: str):
    """Switch pages with a friendly error if the target can't be opened."""
    try:
        st.switch_page(page_path)
    except StreamlitAPIException as e:
        st.error("Navigation failed. The target page may have been renamed or moved.")
        st.caption(f"Details: {e}")

# ---------------------------------------------------------
# PAGE SETUP (must be first Streamlit call)
# ---------------------------------------------------------
st.set_page_config(page_title=APP_TITLE, page_icon=APP_ICON, layout="wide")
ensure_logging()

# ---------------------------------------------------------
# SIDEBAR
# ---------------------------------------------------------
with st.sidebar:
    st.markdown(f"## {APP_ICON} {APP_TITLE}")
    st.caption(APP_VERSION)
    st.divider()

    for i, item in enumerate(REPORT_ITEMS):
        if st.button(item["label"], key=f"side_report_{i}", use_container_width=True):
            safe_switch_page(item["page"])

# ---------------------------------------------------------
# HOME HERO
# ---------------------------------------------------------
st.title("🌱 Carbon Inventory Workbench")
st.write(
    "Enter activity data for each emission source, attach the evidence and move "
    "every record set through review: Draft → Submitted → L1 approved → L2 approved."
)
st.caption(f"Inventory year: {get_settings().inventory_year} • Version: {APP_VERSION}")

st.write("")  # spacing

# ---------------------------------------------------------
# NAVIGATION CARDS
# ---------------------------------------------------------
cols = st.columns(3)

for idx, item in enumerate(NAV_ITEMS):
    with cols[item["col"]]:
        with st.container(border=True):
            st.markdown(f"### {item['card_title']}")
            st.caption(f"GHG category {item['badge']}")
            st.write(item["desc"])
            if st.button(item["button"], key=f"nav_btn_{idx}", use_container_width=True):
                safe_switch_page(item["page"])

# ---------------------------------------------------------
# DISCLAIMER
# ---------------------------------------------------------
st.divider()
st.caption(
    "Approval status lives in your browser session. Reloading the page starts again in "
    "Draft with the seed data; approval actions stay in the audit trail."
)
st.caption(f"{APP_TITLE} • {APP_VERSION}")
