"""Global sidebar controls for round selection."""

import streamlit as st
from dataclasses import dataclass
from data.session_store import (
    get_rounds, get_active_round_id, set_active_round_id, is_data_loaded, get_base_ballot,
)
from config.defaults import BASELINE_ROUND_ID


@dataclass
class SidebarState:
    round_id: str


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Housing Ballot")
        st.divider()

        rounds = get_rounds()
        round_names = {rid: r.name for rid, r in rounds.items()} if rounds else {BASELINE_ROUND_ID: "Baseline"}
        round_ids = list(round_names.keys())

        current_id = get_active_round_id()
        if current_id not in round_ids and round_ids:
            current_id = round_ids[0]

        selected_id = st.selectbox(
            "Active Round",
            options=round_ids,
            format_func=lambda x: round_names.get(x, x),
            index=round_ids.index(current_id) if current_id in round_ids else 0,
            key="sidebar_round",
        )

        if selected_id != get_active_round_id():
            set_active_round_id(selected_id)

        st.divider()

        if is_data_loaded():
            ballot = get_base_ballot()
            st.success("Data loaded")
            st.caption(
                f"{len(ballot.buildings)} buildings, {len(ballot.accommodation)} households, "
                f"{len(ballot.pending_groups)} groups"
            )
        else:
            st.warning("No data loaded — go to Admin tab")

        active = rounds.get(selected_id)
        if active:
            st.caption(f"Order: {' > '.join(active.default_building_order) or '—'}")
            st.caption(f"Locked: {'Yes' if active.is_locked else 'No'}")
            st.caption(f"Run: {active.last_run_at.strftime('%H:%M:%S') if active.last_run_at else 'Not yet'}")

    return SidebarState(round_id=selected_id)
