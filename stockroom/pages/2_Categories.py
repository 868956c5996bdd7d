# stockroom/pages/2_Categories.py
import os
import sys

_CUR_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CUR_DIR, os.pardir, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import pandas as pd
import streamlit as st

try:
    from stockroom.core.logging import configure_logging
    from stockroom.db.database_utils import connect_db
    from stockroom.services import category_service
    from stockroom.ui.helpers import (
        handle_form_result,
        render_field_error,
        show_error,
        show_success,
        submission_guard,
    )
    from stockroom.ui.navigation import require_login
except ImportError as e:
    st.error(f"Import error in 2_Categories.py: {e}.")
    st.stop()

configure_logging()
st.set_page_config(page_title="Categories", page_icon="🏷️", layout="wide")
require_login()

store = connect_db()

if "ss_cat_search_val" not in st.session_state:
    st.session_state.ss_cat_search_val = ""
if "ss_cat_add_errors" not in st.session_state:
    st.session_state.ss_cat_add_errors = {}
if "ss_cat_edit_errors" not in st.session_state:
    st.session_state.ss_cat_edit_errors = {}
if "ss_cat_edit_id" not in st.session_state:
    st.session_state.ss_cat_edit_id = None

st.title("🏷️ Categories")
st.write("Organize items into categories.")
st.divider()

with st.expander("➕ Add Category", expanded=bool(st.session_state.ss_cat_add_errors)):
    with st.form("cat_add_form", clear_on_submit=True):
        name = st.text_input("Name*", placeholder="Enter category name")
        render_field_error(st.session_state.ss_cat_add_errors, "name")
        description = st.text_area("Description", placeholder="Optional")
        if st.form_submit_button("💾 Save Category"):
            with submission_guard(st.session_state, "cat_add") as allowed:
                if allowed:
                    result = category_service.add_category(
                        store, {"name": name, "description": description}
                    )
                    handle_form_result(result, st.session_state, "ss_cat_add_errors")

st.text_input("Search categories...", key="ss_cat_search_val")

with st.spinner("Loading..."):
    rows = category_service.search_categories(store, st.session_state.ss_cat_search_val)

if not rows:
    st.info("No categories found.")
else:
    st.dataframe(
        pd.DataFrame(rows),
        use_container_width=True,
        hide_index=True,
        column_order=["name", "description", "item_count"],
        column_config={
            "name": st.column_config.TextColumn("Name"),
            "description": st.column_config.TextColumn("Description"),
            "item_count": st.column_config.NumberColumn("Items"),
        },
    )

    st.subheader("✏️ Edit or Delete")
    names = {r["id"]: r["name"] for r in rows}
    selected = st.selectbox(
        "Select category",
        options=list(names.keys()),
        format_func=lambda cid: names[cid],
        key="cat_action_select",
    )
    if selected != st.session_state.ss_cat_edit_id:
        st.session_state.ss_cat_edit_id = selected
        st.session_state.ss_cat_edit_errors = {}
    category = store.categories.get(selected)
    if category is not None:
        with st.form(f"cat_edit_form_{selected}"):
            edit_name = st.text_input("Name*", value=category.name)
            render_field_error(st.session_state.ss_cat_edit_errors, "name")
            edit_description = st.text_area("Description", value=category.description or "")
            if st.form_submit_button("💾 Update Category"):
                with submission_guard(st.session_state, "cat_edit") as allowed:
                    if allowed:
                        result = category_service.update_category(
                            store, selected, {"name": edit_name, "description": edit_description}
                        )
                        handle_form_result(result, st.session_state, "ss_cat_edit_errors")

        confirm = st.checkbox(
            f"Delete category '{category.name}'?", key=f"cat_delete_confirm_{selected}"
        )
        if st.button("🗑️ Delete Category", disabled=not confirm, key=f"cat_delete_btn_{selected}"):
            result = category_service.delete_category(store, selected)
            if result.ok:
                show_success(result.message)
                st.rerun()
            else:
                show_error(result.message)
