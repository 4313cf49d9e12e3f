"""Housing Ballot Allocator — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_allocation_dashboard,
    tab_household_view,
    tab_round_lab,
    tab_admin_data,
)


def main():
    st.set_page_config(
        page_title="Housing Ballot",
        page_icon="🏠",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4 = st.tabs([
        "📊 Allocation Dashboard",
        "🏠 Household View",
        "🧪 Round Lab",
        "⚙️ Admin & Data",
    ])

    with tab1:
        tab_allocation_dashboard.render(sidebar_state)
    with tab2:
        tab_household_view.render(sidebar_state)
    with tab3:
        tab_round_lab.render(sidebar_state)
    with tab4:
        tab_admin_data.render(sidebar_state)


if __name__ == "__main__":
    main()
