# stockroom/pages/5_Reports.py
import os
import sys

_CUR_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CUR_DIR, os.pardir, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from datetime import date

import pandas as pd
import streamlit as st

try:
    from stockroom.core.constants import EMPTY_CELL
    from stockroom.core.logging import configure_logging
    from stockroom.db.database_utils import connect_db
    from stockroom.services import csv_service, item_service, report_service
    from stockroom.ui.navigation import require_login
except ImportError as e:
    st.error(f"Import error in 5_Reports.py: {e}.")
    st.stop()

configure_logging()
st.set_page_config(page_title="Reports", page_icon="📈", layout="wide")
require_login()

store = connect_db()

st.title("📈 Reports")
st.divider()

with st.spinner("Loading..."):
    report = report_service.get_reports_data(store)

st.metric("Total Stock Value", f"${report['total_stock_value']}")

st.subheader("⚠️ Low Stock Items")
low_stock = report["low_stock_items"]
if not low_stock:
    st.success("All items are above their reorder levels.")
else:
    df = pd.DataFrame(low_stock)
    df["category_name"] = df["category_name"].fillna(EMPTY_CELL)
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_order=["sku", "name", "category_name", "quantity", "reorder_level"],
        column_config={
            "sku": st.column_config.TextColumn("SKU"),
            "name": st.column_config.TextColumn("Name"),
            "category_name": st.column_config.TextColumn("Category"),
            "quantity": st.column_config.NumberColumn("Quantity"),
            "reorder_level": st.column_config.NumberColumn("Reorder Level"),
        },
    )
    st.download_button(
        "📥 Export Low Stock",
        data=csv_service.export_low_stock_csv(low_stock),
        file_name=f"low-stock-{date.today().isoformat()}.csv",
        mime="text/csv",
        key="reports_low_stock_export",
    )

st.divider()

st.subheader("📦 Stock on Hand")
stock_df = item_service.get_all_items(store)
if stock_df.empty:
    st.info("No items found.")
else:
    stock_df["category_name"] = stock_df["category_name"].fillna(EMPTY_CELL)
    stock_df["supplier_name"] = stock_df["supplier_name"].fillna(EMPTY_CELL)
    stock_df["sell_price"] = stock_df["sell_price"].astype(float)
    stock_df["cost_price"] = stock_df["cost_price"].map(lambda v: None if v is None else float(v))
    st.dataframe(
        stock_df,
        use_container_width=True,
        hide_index=True,
        column_order=[
            "sku", "name", "category_name", "supplier_name", "quantity",
            "reorder_level", "sell_price", "cost_price", "is_low_stock",
        ],
        column_config={
            "sku": st.column_config.TextColumn("SKU"),
            "name": st.column_config.TextColumn("Name"),
            "category_name": st.column_config.TextColumn("Category"),
            "supplier_name": st.column_config.TextColumn("Supplier"),
            "quantity": st.column_config.NumberColumn("Quantity"),
            "reorder_level": st.column_config.NumberColumn("Reorder Level"),
            "sell_price": st.column_config.NumberColumn("Price", format="$%.2f"),
            "cost_price": st.column_config.NumberColumn("Cost", format="$%.2f"),
            "is_low_stock": st.column_config.CheckboxColumn("Low Stock"),
        },
    )
