# stockroom/pages/1_Items.py
import os
import sys

_CUR_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CUR_DIR, os.pardir, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import pandas as pd
import streamlit as st

try:
    from stockroom.config import load_settings
    from stockroom.core.constants import (
        EMPTY_CELL,
        PLACEHOLDER_SELECT_CATEGORY,
        PLACEHOLDER_SELECT_ITEM,
        PLACEHOLDER_SELECT_SUPPLIER,
    )
    from stockroom.core.errors import ErrorKind
    from stockroom.core.logging import configure_logging
    from stockroom.db.database_utils import connect_db
    from stockroom.services import csv_service, item_service
    from stockroom.ui.helpers import (
        handle_form_result,
        pagination_controls,
        render_field_error,
        show_error,
        show_success,
        submission_guard,
    )
    from stockroom.ui.navigation import require_login
except ImportError as e:
    st.error(f"Import error in 1_Items.py: {e}.")
    st.stop()

configure_logging()
st.set_page_config(page_title="Items", page_icon="📦", layout="wide")
require_login()

settings = load_settings()
store = connect_db()

# --- Session State (prefixed with ss_items_ for this page) ---
if "ss_items_search_val" not in st.session_state:
    st.session_state.ss_items_search_val = ""
if "ss_items_page_num" not in st.session_state:
    st.session_state.ss_items_page_num = 1
if "ss_items_add_errors" not in st.session_state:
    st.session_state.ss_items_add_errors = {}
if "ss_items_edit_errors" not in st.session_state:
    st.session_state.ss_items_edit_errors = {}
if "ss_items_selected_id" not in st.session_state:
    st.session_state.ss_items_selected_id = st.query_params.get("id")


def on_search_change():
    st.session_state.ss_items_page_num = 1


def _text(value) -> str:
    return "" if value is None else str(value)


def item_form_fields(prefix: str, defaults: dict, errors: dict) -> dict:
    """Render the item fields inside an open ``st.form`` and return raw values."""
    categories = list(store.categories.values())
    suppliers = list(store.suppliers.values())
    category_ids = [None] + [c.id for c in categories]
    supplier_ids = [None] + [s.id for s in suppliers]
    category_names = {c.id: c.name for c in categories}
    supplier_names = {s.id: s.name for s in suppliers}

    col1, col2 = st.columns(2)
    with col1:
        sku = st.text_input("SKU*", value=_text(defaults.get("sku")), placeholder="e.g., ELEC-001", key=f"{prefix}_sku")
        render_field_error(errors, "sku")
        name = st.text_input("Name*", value=_text(defaults.get("name")), placeholder="Enter item name", key=f"{prefix}_name")
        render_field_error(errors, "name")
        category_id = st.selectbox(
            "Category",
            options=category_ids,
            index=category_ids.index(defaults.get("category_id")) if defaults.get("category_id") in category_ids else 0,
            format_func=lambda cid: category_names.get(cid, PLACEHOLDER_SELECT_CATEGORY),
            key=f"{prefix}_category",
        )
        render_field_error(errors, "category_id")
        supplier_id = st.selectbox(
            "Supplier",
            options=supplier_ids,
            index=supplier_ids.index(defaults.get("supplier_id")) if defaults.get("supplier_id") in supplier_ids else 0,
            format_func=lambda sid: supplier_names.get(sid, PLACEHOLDER_SELECT_SUPPLIER),
            key=f"{prefix}_supplier",
        )
        render_field_error(errors, "supplier_id")
        location = st.text_input("Location", value=_text(defaults.get("location")), placeholder="e.g., Warehouse A - Shelf 1", key=f"{prefix}_location")
    with col2:
        quantity = st.text_input("Quantity*", value=_text(defaults.get("quantity")), key=f"{prefix}_quantity")
        render_field_error(errors, "quantity")
        reorder_level = st.text_input("Reorder Level*", value=_text(defaults.get("reorder_level")), key=f"{prefix}_reorder")
        render_field_error(errors, "reorder_level")
        sell_price = st.text_input("Selling Price*", value=_text(defaults.get("sell_price")), key=f"{prefix}_sell")
        render_field_error(errors, "sell_price")
        cost_price = st.text_input("Cost Price", value=_text(defaults.get("cost_price")), key=f"{prefix}_cost")
        render_field_error(errors, "cost_price")
    description = st.text_area("Description", value=_text(defaults.get("description")), placeholder="Add a description (optional)", key=f"{prefix}_description")
    return {
        "sku": sku,
        "name": name,
        "description": description,
        "quantity": quantity,
        "reorder_level": reorder_level,
        "sell_price": sell_price,
        "cost_price": cost_price,
        "category_id": category_id,
        "supplier_id": supplier_id,
        "location": location,
    }


st.title("📦 Items")
st.divider()

# --- ADD NEW ITEM Section ---
with st.expander("➕ Add Item", expanded=bool(st.session_state.ss_items_add_errors)):
    with st.form("items_add_form", clear_on_submit=False):
        st.subheader("Fill in the information below to create a new inventory item.")
        new_values = item_form_fields("items_add", {}, st.session_state.ss_items_add_errors)
        if st.form_submit_button("💾 Save Item"):
            with submission_guard(st.session_state, "items_add") as allowed:
                if allowed:
                    result = item_service.add_new_item(store, new_values)
                    handle_form_result(result, st.session_state, "ss_items_add_errors")

# --- IMPORT / EXPORT ---
io_col1, io_col2 = st.columns(2)
with io_col1:
    st.download_button(
        "📥 Export",
        data=csv_service.export_items_csv(item_service.get_item_rows(store)),
        file_name=csv_service.export_filename(),
        mime="text/csv",
        key="items_export_btn",
    )
with io_col2:
    uploaded = st.file_uploader(
        "📤 Import", type=["csv", "xls", "xlsx"], key="items_import_uploader"
    )
    if uploaded is not None and st.button("Import items", key="items_import_btn"):
        read = csv_service.read_upload(uploaded.name, uploaded.getvalue())
        if not read.ok:
            show_error(f"Import failed: {read.message}")
        else:
            drafts = csv_service.rows_to_item_drafts(read.value, store.categories.values())
            added, errors = item_service.add_items_bulk(store, drafts)
            if errors:
                show_error("Import failed:\n\n" + "\n\n".join(errors))
            else:
                show_success(f"Imported {added} item(s).")
                st.rerun()

st.divider()

# --- VIEW EXISTING ITEMS ---
st.text_input(
    "Search by name or SKU...",
    key="ss_items_search_val",
    on_change=on_search_change,
)

with st.spinner("Loading..."):
    first_page = item_service.list_items_page(
        store, st.session_state.ss_items_search_val, 1, settings.page_size
    )
current_page = pagination_controls(first_page.total_pages, current_page_key="ss_items_page_num")
page = (
    first_page
    if current_page == 1
    else item_service.list_items_page(
        store, st.session_state.ss_items_search_val, current_page, settings.page_size
    )
)

if not page.records:
    st.info("No items found.")
else:
    display_df = pd.DataFrame(page.records)
    display_df["name"] = [
        f"⚠️ {n}" if low else n for n, low in zip(display_df["name"], display_df["is_low_stock"])
    ]
    display_df["category_name"] = display_df["category_name"].fillna(EMPTY_CELL)
    display_df["sell_price"] = display_df["sell_price"].astype(float)
    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
        column_order=["sku", "name", "category_name", "quantity", "sell_price"],
        column_config={
            "sku": st.column_config.TextColumn("SKU"),
            "name": st.column_config.TextColumn("Name", help="⚠️ marks low stock"),
            "category_name": st.column_config.TextColumn("Category"),
            "quantity": st.column_config.NumberColumn("Quantity"),
            "sell_price": st.column_config.NumberColumn("Price", format="$%.2f"),
        },
    )

st.divider()

# --- ITEM DETAILS / EDIT / DELETE ---
st.subheader("🔍 Item Details")
item_ids = [None] + list(store.items.keys())
selected_default = st.session_state.ss_items_selected_id
if selected_default not in item_ids:
    # stale links still resolve so the not-found state can render
    item_ids.append(selected_default)
selected = st.selectbox(
    "View item",
    options=item_ids,
    index=item_ids.index(selected_default),
    format_func=lambda iid: PLACEHOLDER_SELECT_ITEM if iid is None else (
        f"{store.items[iid].sku} - {store.items[iid].name}" if iid in store.items else f"#{iid}"
    ),
    key="items_detail_select",
)
st.session_state.ss_items_selected_id = selected

if selected is not None:
    details = item_service.get_item_details(store, selected)
    if not details.ok and details.error == ErrorKind.NOT_FOUND:
        st.warning("Item not found. It may have been deleted.")
        if st.button("Return to Items", key="items_not_found_back"):
            st.session_state.ss_items_selected_id = None
            st.query_params.pop("id", None)
            st.rerun()
    elif details.ok:
        d = details.value
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Quantity", d["quantity"], help=f"Reorder level {d['reorder_level']}")
        m2.metric("Selling Price", f"${d['sell_price']:.2f}")
        m3.metric("Cost Price", f"${d['cost_price']:.2f}" if d["cost_price"] is not None else "$0.00")
        m4.metric("Profit Margin", f"{d['profit_margin']}%")
        if d["is_low_stock"]:
            st.error(f"Low stock: {d['quantity']} on hand, reorder level {d['reorder_level']}.", icon="⚠️")
        st.write(f"**Category:** {d['category_name'] or EMPTY_CELL}  |  **Supplier:** {d['supplier_name'] or EMPTY_CELL}  |  **Location:** {d['location'] or EMPTY_CELL}")
        if d["description"]:
            st.caption(d["description"])
        st.caption(f"Stock value: ${d['stock_value']:.2f}  ·  Updated {d['updated_at']:%Y-%m-%d %H:%M}")

        with st.expander("✏️ Edit Item", expanded=bool(st.session_state.ss_items_edit_errors)):
            with st.form(f"items_edit_form_{selected}"):
                edit_values = item_form_fields(f"items_edit_{selected}", d, st.session_state.ss_items_edit_errors)
                if st.form_submit_button("💾 Update Item"):
                    with submission_guard(st.session_state, "items_edit") as allowed:
                        if allowed:
                            result = item_service.update_item(store, selected, edit_values)
                            handle_form_result(result, st.session_state, "ss_items_edit_errors")

        confirm = st.checkbox("Are you sure you want to delete this item?", key=f"items_delete_confirm_{selected}")
        if st.button("🗑️ Delete Item", disabled=not confirm, key=f"items_delete_btn_{selected}"):
            result = item_service.delete_item(store, selected)
            if result.ok:
                show_success(result.message)
                st.session_state.ss_items_selected_id = None
                st.rerun()
            else:
                show_error("Failed to delete item. Please try again.")
