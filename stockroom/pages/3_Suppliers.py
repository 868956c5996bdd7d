# stockroom/pages/3_Suppliers.py
import os
import sys

_CUR_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CUR_DIR, os.pardir, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import streamlit as st

try:
    from stockroom.core.constants import EMPTY_CELL
    from stockroom.core.logging import configure_logging
    from stockroom.db.database_utils import connect_db
    from stockroom.services import supplier_service
    from stockroom.ui.helpers import (
        format_optional,
        handle_form_result,
        render_field_error,
        show_error,
        show_success,
        submission_guard,
    )
    from stockroom.ui.navigation import require_login
except ImportError as e:
    st.error(f"Import error in 3_Suppliers.py: {e}.")
    st.stop()

configure_logging()
st.set_page_config(page_title="Suppliers", page_icon="🚚", layout="wide")
require_login()

store = connect_db()

if "ss_sup_search_val" not in st.session_state:
    st.session_state.ss_sup_search_val = ""
if "ss_sup_add_errors" not in st.session_state:
    st.session_state.ss_sup_add_errors = {}


def supplier_form_fields(prefix: str, defaults: dict, errors: dict) -> dict:
    col1, col2 = st.columns(2)
    with col1:
        name = st.text_input("Name*", value=defaults.get("name") or "", key=f"{prefix}_name")
        render_field_error(errors, "name")
        contact = st.text_input("Contact Person", value=defaults.get("contact_person") or "", key=f"{prefix}_contact")
        email = st.text_input("Email", value=defaults.get("email") or "", key=f"{prefix}_email")
        render_field_error(errors, "email")
    with col2:
        phone = st.text_input("Phone", value=defaults.get("phone") or "", key=f"{prefix}_phone")
        address = st.text_area("Address", value=defaults.get("address") or "", key=f"{prefix}_address")
    return {
        "name": name,
        "contact_person": contact,
        "email": email,
        "phone": phone,
        "address": address,
    }


st.title("🚚 Suppliers")
st.divider()

with st.expander("➕ Add Supplier", expanded=bool(st.session_state.ss_sup_add_errors)):
    with st.form("sup_add_form"):
        values = supplier_form_fields("sup_add", {}, st.session_state.ss_sup_add_errors)
        if st.form_submit_button("💾 Save Supplier"):
            with submission_guard(st.session_state, "sup_add") as allowed:
                if allowed:
                    result = supplier_service.add_supplier(store, values)
                    handle_form_result(result, st.session_state, "ss_sup_add_errors")

st.text_input("Search by name or contact...", key="ss_sup_search_val")

with st.spinner("Loading..."):
    suppliers = supplier_service.search_suppliers(store, st.session_state.ss_sup_search_val)

if not suppliers:
    st.info("No suppliers found.")

for sup in suppliers:
    with st.container(border=True):
        head, count = st.columns([4, 1])
        head.markdown(f"**{sup['name']}**")
        count.caption(f"{sup['item_count']} item(s)")
        st.write(
            f"👤 {format_optional(sup['contact_person'], EMPTY_CELL)}  |  "
            f"✉️ {format_optional(sup['email'], EMPTY_CELL)}  |  "
            f"📞 {format_optional(sup['phone'], EMPTY_CELL)}"
        )
        if sup["address"]:
            st.caption(sup["address"])

        with st.expander("✏️ Edit"):
            edit_key = f"sup_edit_{sup['id']}"
            errors_key = f"ss_sup_edit_errors_{sup['id']}"
            errors = st.session_state.get(errors_key, {})
            with st.form(f"{edit_key}_form"):
                updates = supplier_form_fields(edit_key, sup, errors)
                if st.form_submit_button("💾 Update Supplier"):
                    with submission_guard(st.session_state, edit_key) as allowed:
                        if allowed:
                            result = supplier_service.update_supplier(store, sup["id"], updates)
                            handle_form_result(result, st.session_state, errors_key)

            confirm = st.checkbox("Confirm delete", key=f"sup_delete_confirm_{sup['id']}")
            if st.button("🗑️ Delete Supplier", disabled=not confirm, key=f"sup_delete_btn_{sup['id']}"):
                result = supplier_service.delete_supplier(store, sup["id"])
                if result.ok:
                    show_success(result.message)
                    st.rerun()
                else:
                    show_error(result.message)
