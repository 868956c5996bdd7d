# stockroom/pages/4_Transactions.py
import os
import sys

_CUR_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CUR_DIR, os.pardir, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import pandas as pd
import streamlit as st

try:
    from stockroom.core.constants import (
        ALL_TX_TYPES,
        EMPTY_CELL,
        FILTER_ALL_TYPES,
        PLACEHOLDER_SELECT_ITEM,
        TX_ADJUSTMENT,
    )
    from stockroom.core.logging import configure_logging
    from stockroom.db.database_utils import connect_db
    from stockroom.services import stock_service
    from stockroom.ui.helpers import (
        format_change,
        format_optional,
        show_error,
        show_success,
        submission_guard,
    )
    from stockroom.ui.navigation import require_login
    from stockroom.ui.theme import format_tx_badge
except ImportError as e:
    st.error(f"Import error in 4_Transactions.py: {e}.")
    st.stop()

configure_logging()
st.set_page_config(page_title="Transactions", page_icon="🔄", layout="wide")
auth = require_login()

store = connect_db()

if "ss_tx_filter_type" not in st.session_state:
    st.session_state.ss_tx_filter_type = FILTER_ALL_TYPES

st.title("🔄 Transactions")
st.write("Stock movements, newest first.")
st.divider()

with st.expander("➕ Record Stock Movement"):
    item_ids = [None] + list(store.items.keys())
    with st.form("tx_record_form", clear_on_submit=True):
        item_id = st.selectbox(
            "Item*",
            options=item_ids,
            format_func=lambda iid: PLACEHOLDER_SELECT_ITEM
            if iid is None
            else f"{store.items[iid].name} ({store.items[iid].sku}) - qty {store.items[iid].quantity}",
        )
        tx_type = st.radio("Type*", ALL_TX_TYPES, horizontal=True)
        amount = st.number_input(
            "Quantity*",
            step=1,
            value=0,
            help="For ADJUSTMENT enter a signed change, e.g. -2.",
        )
        reason = st.text_input("Reason", placeholder="Optional")
        if st.form_submit_button("💾 Record"):
            with submission_guard(st.session_state, "tx_record") as allowed:
                if allowed:
                    if item_id is None:
                        show_error("Please select an item.")
                    else:
                        performer = (auth.user or {}).get("name")
                        result = stock_service.record_stock_transaction(
                            store,
                            item_id,
                            tx_type,
                            int(amount),
                            reason=reason or None,
                            performed_by=performer,
                        )
                        if result.ok:
                            show_success(result.message)
                            st.rerun()
                        else:
                            show_error(result.message)

filter_options = [FILTER_ALL_TYPES] + list(ALL_TX_TYPES)
st.selectbox(
    "Filter by type",
    options=filter_options,
    format_func=lambda t: "All Types" if t == FILTER_ALL_TYPES else t,
    key="ss_tx_filter_type",
)

with st.spinner("Loading..."):
    rows = stock_service.get_transactions(store, st.session_state.ss_tx_filter_type)

if not rows:
    st.info(stock_service.empty_state_message(st.session_state.ss_tx_filter_type))
else:
    df = pd.DataFrame(rows)
    df["change"] = df["change"].map(format_change)
    df["reason"] = df["reason"].map(lambda r: format_optional(r, EMPTY_CELL))
    df["performed_by"] = df["performed_by"].map(lambda p: format_optional(p, EMPTY_CELL))
    df["created_at"] = pd.to_datetime(df["created_at"]).dt.strftime("%Y-%m-%d %H:%M")
    df["type"] = df["type"].map(format_tx_badge)
    st.markdown(
        df[["created_at", "item_name", "item_sku", "type", "change", "reason", "performed_by"]]
        .rename(
            columns={
                "created_at": "Date",
                "item_name": "Item",
                "item_sku": "SKU",
                "type": "Type",
                "change": "Change",
                "reason": "Reason",
                "performed_by": "By",
            }
        )
        .to_html(escape=False, index=False),
        unsafe_allow_html=True,
    )
    if st.session_state.ss_tx_filter_type == TX_ADJUSTMENT:
        st.caption("Adjustments carry the signed difference applied to stock.")
