"""
Streamlit entrypoint for the North Admin console.

Run from project root:
    streamlit run app.py

Configuration (environment or .streamlit/secrets.toml):
- NORTH_API_URL (required)
- AUTHOR_ID / AUTHOR_NAME / AUTHOR_EMAIL (optional default product author)
- DEFAULT_LOCALE, NORTH_API_TIMEOUT, LOG_LEVEL (optional)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path so "admin" and "services" imports resolve
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import streamlit as st

from services import Catalog, ConfigError, NorthConfig, build_catalog, load_config
from services.config_manager import configure_logging

# -----------------------------------------------------------------------------
# Page setup
# -----------------------------------------------------------------------------
st.set_page_config(page_title="North Admin", page_icon="🛠️", layout="wide")


@st.cache_resource
def get_catalog(_config: NorthConfig) -> Catalog:
    """One API client and route cache shared by every session."""
    return build_catalog(_config)


# -----------------------------------------------------------------------------
# Configuration (fatal when missing)
# -----------------------------------------------------------------------------
try:
    config = load_config()
except ConfigError as e:
    st.title("🛠️ North Admin")
    st.error(f"Configuration error: {e}")
    st.stop()

configure_logging(config.log_level)
catalog = get_catalog(config)

# Router import (kept in try/except so a broken page does not hide the error)
try:
    from admin.views import NAV_KEY, PAGES, admin_router
except Exception as e:
    st.exception(e)
    st.error(
        "Failed to import admin.views.admin_router.\n"
        "Ensure files exist: admin/__init__.py, admin/views/__init__.py, admin/views/*.py "
        "and launch Streamlit from the project root."
    )
    st.stop()

# -----------------------------------------------------------------------------
# Sidebar navigation
# -----------------------------------------------------------------------------
st.sidebar.markdown("### 🛠️ Admin Panel")
choice = st.sidebar.radio("Admin Pages", options=PAGES, key=NAV_KEY)

# Route
try:
    admin_router(choice, catalog)
except Exception as e:
    st.exception(e)
    st.error("admin_router(choice) raised an error. Please check admin/views/*.py.")
