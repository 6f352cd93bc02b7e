# admin/views/dashboard.py
"""Admin • Dashboard"""

from __future__ import annotations

import streamlit as st

from services.catalog import Catalog

NAV_KEY = "admin_page_choice"


def _go(page: str) -> None:
    st.session_state[NAV_KEY] = page


def page_dashboard(catalog: Catalog) -> None:
    st.title("Admin Dashboard")
    st.caption(f"North API: {catalog.config.base_url}")
    st.markdown(
        "Manage the units of measurement and the nutritional products "
        "stored in the North catalog."
    )

    c1, c2, _ = st.columns([1, 1, 3])
    c1.button("Go to Measures", on_click=_go, args=("Measures",), use_container_width=True)
    c2.button("Go to Products", on_click=_go, args=("Products",), use_container_width=True)
