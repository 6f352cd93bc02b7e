# admin/views/measure_dialog.py
"""
Create / edit measure dialog.

Widget values live in session state under the "mdlg__" prefix. Translation
rows are keyed by a stable row id so removing a row does not shift the
values of the others.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

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
from .measure_form import (
    TRANSLATION_FIELDS,
    MeasureForm,
    ValidationError,
    build_measure_payload,
    empty_translation,
)

STATE_KEY = "measure_dialog_state"
PREFIX = "mdlg__"

# on_save(mode, entity, payload); raises SaveFailed when the action fails
SaveCallback = Callable[[DialogMode, Optional[Dict[str, Any]], Dict[str, Any]], None]


# ---------------- form <-> session state ----------------
def _field_key(field: str, row: int) -> str:
    return f"{PREFIX}{field}_{row}"


def seed_measure_form(form: MeasureForm) -> None:
    """Reset dialog widgets to the given form values."""
    ss = st.session_state
    for k in list(ss.keys()):
        if isinstance(k, str) and k.startswith(PREFIX):
            del ss[k]
    ss[PREFIX + "code"] = form.code
    ss[PREFIX + "rows"] = list(range(len(form.translations)))
    ss[PREFIX + "next_row"] = len(form.translations)
    for row, t in enumerate(form.translations):
        for f in TRANSLATION_FIELDS:
            ss[_field_key(f, row)] = t.get(f, "")


def read_measure_form() -> MeasureForm:
    ss = st.session_state
    return MeasureForm(
        code=ss.get(PREFIX + "code", ""),
        translations=[
            {f: ss.get(_field_key(f, row), "") for f in TRANSLATION_FIELDS}
            for row in ss.get(PREFIX + "rows", [])
        ],
    )


def _add_row() -> None:
    ss = st.session_state
    row = ss.get(PREFIX + "next_row", 0)
    ss[PREFIX + "next_row"] = row + 1
    ss.setdefault(PREFIX + "rows", []).append(row)
    for f, value in empty_translation().items():
        ss[_field_key(f, row)] = value


def _remove_row(row: int) -> None:
    rows = st.session_state.get(PREFIX + "rows", [])
    if row in rows:
        rows.remove(row)


def _uppercase_code() -> None:
    key = PREFIX + "code"
    st.session_state[key] = (st.session_state.get(key) or "").upper()


# ---------------- dialog ----------------
def _dialog_body(on_save: SaveCallback) -> None:
    ss = st.session_state
    state: DialogState = ss.get(STATE_KEY, CLOSED)
    if not is_open(state):
        return

    busy = isinstance(state, Submitting)
    editing = state.mode is DialogMode.EDIT

    st.text_input(
        "Code",
        key=PREFIX + "code",
        placeholder="e.g., GRAM, KILOGRAM",
        disabled=editing or busy,
        on_change=_uppercase_code,
    )

    hdr_l, hdr_r = st.columns([4, 1])
    hdr_l.markdown("**Translations**")
    hdr_r.button("+ Add Translation", key=PREFIX + "add", on_click=_add_row, disabled=busy)

    rows = list(ss.get(PREFIX + "rows", []))
    if not rows:
        st.caption('No translations yet. Click "Add Translation" to get started.')

    for n, row in enumerate(rows):
        c1, c2, c3, c4 = st.columns([2, 3, 2, 1], vertical_alignment="bottom")
        c1.text_input(f"Locale #{n + 1}", key=_field_key("locale", row),
                      placeholder="e.g., en", disabled=busy)
        c2.text_input("Name", key=_field_key("measureName", row),
                      placeholder="e.g., Gram", disabled=busy)
        c3.text_input("Short", key=_field_key("measureShortName", row),
                      placeholder="e.g., g", disabled=busy)
        c4.button("Remove", key=f"{PREFIX}remove_{row}", on_click=_remove_row,
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
            payload = build_measure_payload(read_measure_form())
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


@st.dialog("Create Measure", width="large")
def _create_measure_dialog(on_save: SaveCallback) -> None:
    _dialog_body(on_save)


@st.dialog("Edit Measure", width="large")
def _edit_measure_dialog(on_save: SaveCallback) -> None:
    _dialog_body(on_save)


def show_measure_dialog(on_save: SaveCallback) -> None:
    """Render the dialog when its state is open."""
    state: DialogState = st.session_state.get(STATE_KEY, CLOSED)
    if not is_open(state):
        return
    if state.mode is DialogMode.EDIT:
        _edit_measure_dialog(on_save)
    else:
        _create_measure_dialog(on_save)
