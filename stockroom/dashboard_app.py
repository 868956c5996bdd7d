# stockroom/dashboard_app.py

import os
import sys
from pathlib import Path

# Ensure this file works when executed directly with
# `streamlit run stockroom/dashboard_app.py`.
_CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
_REPO_ROOT = os.path.abspath(os.path.join(_CURRENT_DIR, os.pardir))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from stockroom.core.logging import LOG_FILE, configure_logging, flush_logs, read_recent_logs

# Configure logging before importing modules that use it
configure_logging()

from datetime import datetime

import pandas as pd
import streamlit as st

from stockroom.db.database_utils import connect_db
from stockroom.services import report_service
from stockroom.ui.navigation import require_login


def render_log_sidebar() -> None:
    if st.sidebar.button("Clear Logs"):
        flush_logs()
        st.toast("Logs cleared")
    with st.sidebar.expander("Recent Logs"):
        log_path = Path(LOG_FILE)
        if log_path.exists():
            preview = read_recent_logs()
            if preview:
                st.code(preview)
            else:
                st.write("Log file is empty.")
            st.download_button(
                "Download Logs",
                data=log_path.read_bytes(),
                file_name=log_path.name,
                mime="text/plain",
            )
        else:
            st.write("Log file not found.")


# ─────────────────────────────────────────────────────────
# DASHBOARD UI (Main App Page)
# ─────────────────────────────────────────────────────────
def run_dashboard():
    st.set_page_config(page_title="Inventory Dashboard", page_icon="📦", layout="wide")
    require_login()
    render_log_sidebar()

    st.title("📊 Dashboard")
    st.caption(f"Current Overview as of: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    st.divider()

    store = connect_db()
    with st.spinner("Loading dashboard..."):
        data = report_service.get_dashboard_data(store)

    kpi_cols = st.columns(4)
    for col, metric in zip(kpi_cols, report_service.overview_as_metrics(data["overview"])):
        col.metric(metric["label"], metric["value"])

    st.divider()
    left, right = st.columns(2)
    with left:
        st.subheader("🗂️ Category Distribution")
        distribution = data["category_distribution"]
        if distribution:
            for category in distribution:
                c1, c2 = st.columns([3, 1])
                c1.markdown(f"**{category['name']}**  \n{category['item_count']} items")
                c2.write(f"{category['total_quantity']} units")
        else:
            st.info("No categories yet.")

    with right:
        movement = data["stock_movement"]
        if movement:
            st.subheader("🔁 Recent Stock Movement")
            movement_df = pd.DataFrame(movement)
            movement_df["date"] = pd.to_datetime(movement_df["date"]).dt.strftime("%b %d")
            st.dataframe(
                movement_df,
                use_container_width=True,
                hide_index=True,
                column_config={
                    "date": st.column_config.TextColumn("Date"),
                    "in": st.column_config.NumberColumn("In", format="+%d"),
                    "out": st.column_config.NumberColumn("Out", format="-%d"),
                },
            )


if __name__ == "__main__":
    run_dashboard()
