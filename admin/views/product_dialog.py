# admin/views/product_dialog.py
"""Create / edit product dialog."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

import streamlit as st

from .dialog_state import (
    CLOSED,
    Closed,
    DialogMode,
    DialogState,
    Open,
    Submitting,
    close,
    is_open,
    run_submission,
)
from .measure_form import ValidationError
from .product_form import NUTRIENTS, ProductForm, build_product_payload, measure_options

STATE_KEY = "product_dialog_state"
PREFIX = "pdlg__"

SaveCallback = Callable[[DialogMode, Optional[Dict[str, Any]], Dict[str, Any]], None]

_VALUE_ROWS = [(attr, title) for attr, _, title, _ in NUTRIENTS] + [("weight", "Weight")]


# ---------------- form <-> session state ----------------
def seed_product_form(form: ProductForm) -> None:
    """Reset dialog widgets to the given form values."""
    ss = st.session_state
    for k in list(ss.keys()):
        if isinstance(k, str) and k.startswith(PREFIX):
            del ss[k]
    ss[PREFIX + "name"] = form.name
    for attr, _ in _VALUE_ROWS:
        ss[f"{PREFIX}{attr}"] = getattr(form, attr)
        ss[f"{PREFIX}{attr}_measure_id"] = getattr(form, f"{attr}_measure_id")
    ss[PREFIX + "cat_rows"] = list(range(len(form.categories)))
    ss[PREFIX + "next_cat"] = len(form.categories)
    for row, cat in enumerate(form.categories):
        ss[f"{PREFIX}cat_{row}"] = cat


def read_product_form() -> ProductForm:
    ss = st.session_state
    form = ProductForm(name=ss.get(PREFIX + "name", ""))
    for attr, _ in _VALUE_ROWS:
        setattr(form, attr, ss.get(f"{PREFIX}{attr}", ""))
        setattr(form, f"{attr}_measure_id", ss.get(f"{PREFIX}{attr}_measure_id", ""))
    form.categories = [ss.get(f"{PREFIX}cat_{row}", "") for row in ss.get(PREFIX + "cat_rows", [])]
    return form


def _add_category() -> None:
    ss = st.session_state
    row = ss.get(PREFIX + "next_cat", 0)
    ss[PREFIX + "next_cat"] = row + 1
    ss.setdefault(PREFIX + "cat_rows", []).append(row)
    ss[f"{PREFIX}cat_{row}"] = ""


def _remove_category(row: int) -> None:
    rows = st.session_state.get(PREFIX + "cat_rows", [])
    if len(rows) > 1:
        if row in rows:
            rows.remove(row)
    else:
        # keep a single empty input
        st.session_state[f"{PREFIX}cat_{row}"] = ""


# ---------------- dialog ----------------
def _dialog_body(measures: List[Dict[str, Any]], locale: str, on_save: SaveCallback) -> None:
    ss = st.session_state
    state: DialogState = ss.get(STATE_KEY, CLOSED)
    if not is_open(state):
        return

    busy = isinstance(state, Submitting)

    labels = measure_options(measures, locale)
    option_ids: List[str] = [""] + list(labels)
    # stale ids stay selectable; validation rejects them
    for attr, _ in _VALUE_ROWS:
        mid = ss.get(f"{PREFIX}{attr}_measure_id", "")
        if mid and mid not in option_ids:
            option_ids.append(mid)

    def _label(mid: str) -> str:
        if not mid:
            return "Select..."
        return labels.get(mid, f"{mid} (unknown measure)")

    st.text_input("Product Name *", key=PREFIX + "name",
                  placeholder="Enter product name", disabled=busy)

    st.markdown("**Nutritional values**")
    for attr, title in _VALUE_ROWS:
        c_val, c_measure = st.columns([2, 2])
        c_val.text_input(title, key=f"{PREFIX}{attr}", placeholder="0.00", disabled=busy)
        c_measure.selectbox(
            f"{title} measure",
            options=option_ids,
            format_func=_label,
            key=f"{PREFIX}{attr}_measure_id",
            disabled=busy,
        )

    hdr_l, hdr_r = st.columns([4, 1])
    hdr_l.markdown("**Categories**")
    hdr_r.button("+ Add Category", key=PREFIX + "add_cat", on_click=_add_category, disabled=busy)
    for n, row in enumerate(list(ss.get(PREFIX + "cat_rows", []))):
        c_cat, c_rm = st.columns([5, 1], vertical_alignment="bottom")
        c_cat.text_input(f"Category #{n + 1}", key=f"{PREFIX}cat_{row}",
                         placeholder="e.g., Dairy", disabled=busy)
        c_rm.button("Remove", key=f"{PREFIX}rm_cat_{row}", on_click=_remove_category,
                    args=(row,), disabled=busy)

    if isinstance(state, Open) and state.error:
        st.error(state.error)

    st.divider()
    c_cancel, c_save = st.columns(2)
    if c_cancel.button("Cancel", use_container_width=True, disabled=busy, key=PREFIX + "cancel"):
        ss[STATE_KEY] = close(state)
        st.rerun()

    if c_save.button("Save", type="primary", use_container_width=True, disabled=busy, key=PREFIX + "save"):
        try:
            payload = build_product_payload(read_product_form(), measures, locale, state.entity)
        except ValidationError as e:
            st.error(str(e))
            return

        def _publish(s: DialogState) -> None:
            ss[STATE_KEY] = s

        with st.spinner("Saving..."):
            new_state = run_submission(
                state,
                lambda: on_save(state.mode, state.entity, payload),
                publish=_publish,
            )
        ss[STATE_KEY] = new_state
        if isinstance(new_state, Closed):
            st.rerun()
        else:
            st.rerun(scope="fragment")


@st.dialog("Create Product", width="large")
def _create_product_dialog(measures, locale, on_save) -> None:
    _dialog_body(measures, locale, on_save)


@st.dialog("Edit Product", width="large")
def _edit_product_dialog(measures, locale, on_save) -> None:
    _dialog_body(measures, locale, on_save)


def show_product_dialog(measures: List[Dict[str, Any]], locale: str, on_save: SaveCallback) -> None:
    """Render the dialog when its state is open."""
    state: DialogState = st.session_state.get(STATE_KEY, CLOSED)
    if not is_open(state):
        return
    if state.mode is DialogMode.EDIT:
        _edit_product_dialog(measures, locale, on_save)
    else:
        _create_product_dialog(measures, locale, on_save)
