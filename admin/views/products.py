# admin/views/products.py
"""
Admin • Products

- Search by product name or category
- Create and edit through a dialog, delete with inline confirmation
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from services.catalog import Catalog
from services.revalidation import PRODUCTS_ROUTE

from .dialog_state import CLOSED, DialogMode, SaveFailed, open_create, open_edit
from .helpers import (
    error_banner,
    filter_products,
    products_frame,
    selected_row,
    set_flash,
    show_flash,
)
from .product_dialog import STATE_KEY, seed_product_form, show_product_dialog
from .product_form import ProductForm

_DEL_KEY = "__del_confirm_product__"


def _save_product(
    catalog: Catalog,
    mode: DialogMode,
    entity: Optional[Dict[str, Any]],
    payload: Dict[str, Any],
) -> None:
    if mode is DialogMode.CREATE:
        result = catalog.product_actions.create(payload)
        message = "Product created successfully"
    else:
        result = catalog.product_actions.update(str((entity or {}).get("productId")), payload)
        message = "Product updated successfully"

    if not result.success:
        error = result.error or "Failed to save product"
        st.toast(error, icon="❌")
        raise SaveFailed(error)
    set_flash("products", message)


def page_products(catalog: Catalog) -> None:
    st.title("Products")
    ss = st.session_state

    ss[STATE_KEY] = CLOSED
    show_flash("products")

    data = catalog.products_page()
    if data.error:
        error_banner("Error loading products", data.error)

    c_search, c_create, c_refresh = st.columns([6, 1, 1], vertical_alignment="bottom")
    with c_search:
        search = st.text_input(
            "Search",
            key="products_search",
            placeholder="Search by name or category",
        )
    with c_create:
        create_clicked = st.button("Create", type="primary", use_container_width=True)
    with c_refresh:
        if st.button("Refresh", use_container_width=True):
            catalog.refresh(PRODUCTS_ROUTE)
            st.rerun()

    filtered = filter_products(data.products, search)

    selected: Optional[Dict[str, Any]] = None
    if not filtered:
        st.info("No products found.")
    else:
        event = st.dataframe(
            products_frame(filtered),
            hide_index=True,
            use_container_width=True,
            on_select="rerun",
            selection_mode="single-row",
            key="products_table",
        )
        idx = selected_row(event)
        if idx is not None and idx < len(filtered):
            selected = filtered[idx]

    c_edit, c_delete, _ = st.columns([1, 1, 4])
    edit_clicked = c_edit.button("Edit", disabled=selected is None, use_container_width=True)
    if c_delete.button("Delete", disabled=selected is None, use_container_width=True):
        ss[_DEL_KEY] = selected

    if create_clicked:
        seed_product_form(ProductForm())
        ss[STATE_KEY] = open_create(ss[STATE_KEY])
    elif edit_clicked and selected is not None:
        seed_product_form(ProductForm.from_product(selected))
        ss[STATE_KEY] = open_edit(ss[STATE_KEY], selected)

    # DELETE (inline confirm)
    pending = ss.get(_DEL_KEY)
    if pending:
        st.warning(f'Are you sure you want to delete "{pending.get("productName", "")}"?')
        c1, c2 = st.columns(2)
        with c1:
            if st.button("✅ Confirm delete", use_container_width=True, key="confirm_delete_product"):
                result = catalog.product_actions.delete(str(pending.get("productId")))
                ss.pop(_DEL_KEY, None)
                if result.success:
                    set_flash("products", "Product deleted successfully")
                    st.rerun()
                else:
                    st.toast(result.error or "Failed to delete product", icon="❌")
        with c2:
            if st.button("Cancel", use_container_width=True, key="cancel_delete_product"):
                ss.pop(_DEL_KEY, None)
                st.rerun()

    show_product_dialog(
        data.measures,
        catalog.config.default_locale,
        lambda mode, entity, payload: _save_product(catalog, mode, entity, payload),
    )
