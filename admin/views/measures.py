# admin/views/measures.py
"""
Admin • Measures

- Search by code / name / short name / locale, filter by locale
- Create and edit through a dialog, delete with inline confirmation
- Every successful mutation revalidates the page data and reruns
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from services.catalog import Catalog
from services.revalidation import MEASURES_ROUTE

from .dialog_state import CLOSED, DialogMode, SaveFailed, open_create, open_edit
from .helpers import (
    error_banner,
    filter_measures,
    measures_frame,
    selected_row,
    set_flash,
    show_flash,
)
from .measure_dialog import STATE_KEY, seed_measure_form, show_measure_dialog
from .measure_form import MeasureForm

ALL_LOCALES = ""
_DEL_KEY = "__del_confirm_measure__"


def _save_measure(
    catalog: Catalog,
    mode: DialogMode,
    entity: Optional[Dict[str, Any]],
    payload: Dict[str, Any],
) -> None:
    """Dialog save callback: run the action, toast on failure."""
    if mode is DialogMode.CREATE:
        result = catalog.measure_actions.create(payload)
        message = "Measure created successfully"
    else:
        result = catalog.measure_actions.update(str((entity or {}).get("id")), payload)
        message = "Measure updated successfully"

    if not result.success:
        error = result.error or "Failed to save measure"
        st.toast(error, icon="❌")
        raise SaveFailed(error)
    set_flash("measures", message)


def page_measures(catalog: Catalog) -> None:
    st.title("Measures")
    ss = st.session_state

    # A full page run means the dialog is not showing unless opened below
    ss[STATE_KEY] = CLOSED
    show_flash("measures")

    data = catalog.measures_page()
    if data.error:
        error_banner("Error loading measures", data.error)

    # Toolbar
    c_search, c_locale, c_create, c_refresh = st.columns([4, 2, 1, 1], vertical_alignment="bottom")
    with c_search:
        search = st.text_input(
            "Search",
            key="measures_search",
            placeholder="Search by code, name, short name, locale",
        )
    with c_locale:
        locale_options = [ALL_LOCALES] + data.available_locales
        default_index = (
            locale_options.index(data.default_locale)
            if data.default_locale in locale_options else 0
        )
        locale = st.selectbox(
            "Locale",
            options=locale_options,
            index=default_index,
            format_func=lambda loc: loc or "All locales",
            key="measures_locale",
        )
    with c_create:
        create_clicked = st.button("Create", type="primary", use_container_width=True)
    with c_refresh:
        if st.button("Refresh", use_container_width=True):
            catalog.refresh(MEASURES_ROUTE)
            st.rerun()

    filtered = filter_measures(data.measures, locale or None, search)

    selected: Optional[Dict[str, Any]] = None
    if not filtered:
        st.info("No measures found.")
    else:
        event = st.dataframe(
            measures_frame(filtered, locale or None),
            hide_index=True,
            use_container_width=True,
            on_select="rerun",
            selection_mode="single-row",
            key="measures_table",
        )
        idx = selected_row(event)
        if idx is not None and idx < len(filtered):
            selected = filtered[idx]

    c_edit, c_delete, _ = st.columns([1, 1, 4])
    edit_clicked = c_edit.button("Edit", disabled=selected is None, use_container_width=True)
    if c_delete.button("Delete", disabled=selected is None, use_container_width=True):
        ss[_DEL_KEY] = selected

    if create_clicked:
        seed_measure_form(MeasureForm())
        ss[STATE_KEY] = open_create(ss[STATE_KEY])
    elif edit_clicked and selected is not None:
        seed_measure_form(MeasureForm.from_measure(selected))
        ss[STATE_KEY] = open_edit(ss[STATE_KEY], selected)

    # DELETE (inline confirm)
    pending = ss.get(_DEL_KEY)
    if pending:
        code = pending.get("code", pending.get("id"))
        st.warning(f'Are you sure you want to delete measure "{code}"?')
        c1, c2 = st.columns(2)
        with c1:
            if st.button("✅ Confirm delete", use_container_width=True, key="confirm_delete_measure"):
                result = catalog.measure_actions.delete(str(pending.get("id")))
                ss.pop(_DEL_KEY, None)
                if result.success:
                    set_flash("measures", "Measure deleted successfully")
                    st.rerun()
                else:
                    st.toast(result.error or "Failed to delete measure", icon="❌")
        with c2:
            if st.button("Cancel", use_container_width=True, key="cancel_delete_measure"):
                ss.pop(_DEL_KEY, None)
                st.rerun()

    show_measure_dialog(lambda mode, entity, payload: _save_measure(catalog, mode, entity, payload))
