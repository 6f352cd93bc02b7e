# admin/views/helpers.py
"""
Shared helpers for admin pages: filtering, sorting, table frames and small
UI blocks (flash messages, error banner).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st


# ---------------- Measures ----------------
def find_translation(translations: List[Dict[str, Any]], locale: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return the translation for locale, or None."""
    if not locale:
        return None
    for t in translations or []:
        if t.get("locale") == locale:
            return t
    return None


def measure_matches_locale(measure: Dict[str, Any], locale: Optional[str]) -> bool:
    """No locale means every measure matches."""
    if not locale:
        return True
    return any(t.get("locale") == locale for t in measure.get("translations") or [])


def measure_matches_search(measure: Dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match over code and every translation."""
    if not query:
        return True
    q = query.casefold()
    if q in str(measure.get("code", "")).casefold():
        return True
    for t in measure.get("translations") or []:
        for key in ("measureName", "measureShortName", "locale"):
            if q in str(t.get(key, "")).casefold():
                return True
    return False


def filter_measures(
    measures: List[Dict[str, Any]],
    locale: Optional[str] = None,
    search: str = "",
) -> List[Dict[str, Any]]:
    """Apply locale + search filters and sort by code ascending (stable)."""
    items = [
        m for m in measures
        if measure_matches_locale(m, locale) and measure_matches_search(m, search)
    ]
    return sorted(items, key=lambda m: str(m.get("code", "")))


def measures_frame(measures: List[Dict[str, Any]], locale: Optional[str]) -> pd.DataFrame:
    """Table rows for the measures page."""
    rows = []
    for m in measures:
        t = find_translation(m.get("translations") or [], locale)
        rows.append({
            "Code": m.get("code", ""),
            "Translations": len(m.get("translations") or []),
            "Name (selected locale)": t["measureName"] if t else "—",
            "Short (selected locale)": t["measureShortName"] if t else "—",
        })
    return pd.DataFrame(rows, columns=[
        "Code", "Translations", "Name (selected locale)", "Short (selected locale)",
    ])


# ---------------- Products ----------------
def product_matches_search(product: Dict[str, Any], query: str) -> bool:
    """Case-insensitive substring match over name and categories."""
    if not query:
        return True
    q = query.casefold()
    if q in str(product.get("productName", "")).casefold():
        return True
    return any(q in str(c).casefold() for c in product.get("categories") or [])


def filter_products(products: List[Dict[str, Any]], search: str = "") -> List[Dict[str, Any]]:
    """Apply search filter and sort by product name (stable)."""
    items = [p for p in products if product_matches_search(p, search)]
    return sorted(items, key=lambda p: str(p.get("productName", "")).casefold())


def format_amount(value: Any, measure: Optional[Dict[str, Any]]) -> str:
    """'12.5 g' style label for a value and its measure snapshot."""
    if value is None:
        return "—"
    short = (measure or {}).get("measureShortName", "")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value} {short}".strip()


def products_frame(products: List[Dict[str, Any]]) -> pd.DataFrame:
    """Table rows for the products page."""
    rows = []
    for p in products:
        cal = p.get("productCalories") or {}
        prot = p.get("productProteins") or {}
        fat = p.get("productFats") or {}
        carb = p.get("productCarbohydrates") or {}
        weight = p.get("weight") or {}
        rows.append({
            "Name": p.get("productName", ""),
            "Calories": format_amount(cal.get("nutritionalValue"), cal.get("measure")),
            "Proteins": format_amount(prot.get("nutritionalValue"), prot.get("measure")),
            "Fats": format_amount(fat.get("nutritionalValue"), fat.get("measure")),
            "Carbs": format_amount(carb.get("nutritionalValue"), carb.get("measure")),
            "Weight": format_amount(weight.get("weightValue"), weight.get("measure")),
            "Categories": ", ".join(p.get("categories") or []) or "—",
        })
    return pd.DataFrame(rows, columns=[
        "Name", "Calories", "Proteins", "Fats", "Carbs", "Weight", "Categories",
    ])


# ---------------- UI blocks ----------------
def set_flash(key: str, message: str) -> None:
    """Persist a success message across st.rerun()."""
    st.session_state[f"__flash_{key}"] = message


def pop_flash(key: str) -> Optional[str]:
    return st.session_state.pop(f"__flash_{key}", None)


def show_flash(key: str) -> None:
    """Toast a message stored by set_flash, once."""
    msg = pop_flash(key)
    if msg:
        st.toast(msg, icon="✅")


def error_banner(title: str, message: str) -> None:
    """Inline, non-fatal error shown above a page's content."""
    st.error(f"**{title}**\n\n{message}")


def selected_row(event: Any) -> Optional[int]:
    """Index of the selected row from an st.dataframe selection event."""
    try:
        rows = event.selection.rows
    except AttributeError:
        return None
    return rows[0] if rows else None
