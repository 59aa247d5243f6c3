"""Pod Seat Planner: Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.logging_config import setup_logging
from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_data_setup,
    tab_floor_plan,
    tab_allocation_report,
)


def main():
    st.set_page_config(
        page_title="Pod Seat Planner",
        page_icon="🪑",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    setup_logging()
    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3 = st.tabs([
        "📥 Data Setup",
        "🗺️ Floor Plan",
        "📋 Allocation Report",
    ])

    with tab1:
        tab_data_setup.render(sidebar_state)
    with tab2:
        tab_floor_plan.render(sidebar_state)
    with tab3:
        tab_allocation_report.render(sidebar_state)


if __name__ == "__main__":
    main()
