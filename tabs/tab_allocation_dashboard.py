"""Tab 1: Allocation Dashboard — headline results of the active round."""

import streamlit as st
import pandas as pd

from data.session_store import get_active_round, is_data_loaded, get_last_data_load
from components.metrics_cards import render_metric_row, render_unplaced_banner
from components.charts import capacity_vs_occupancy_bar, utilization_donut, tier_breakdown_bar
from engine.utilization import get_building_utilization, get_household_utilization, get_tier_summary
from config.defaults import HOUSEHOLD_UNDERUSED_THRESHOLD


def render(sidebar_state):
    """Render the Allocation Dashboard tab."""
    st.header("Allocation Dashboard")

    if not is_data_loaded():
        st.info("No data loaded. Please load a ballot in the Admin & Data tab.")
        return

    allocation_round = get_active_round()
    if not allocation_round or not allocation_round.has_run:
        st.info("No allocation results available. Run the round from the Round Lab.")
        return

    last_load = get_last_data_load()
    if last_load and allocation_round.last_run_at and last_load > allocation_round.last_run_at:
        st.warning(
            "Ballot data has been reloaded since this round ran. "
            "Go to Round Lab and re-run to see updated results."
        )

    ballot = allocation_round.ballot
    result = allocation_round.result

    # --- KPI Metrics ---
    total_groups = len(result.processing_order)
    render_metric_row([
        {"label": "Total Places", "value": f"{ballot.total_capacity:,}"},
        {"label": "Occupied", "value": f"{ballot.total_occupancy:,}"},
        {"label": "Groups Placed", "value": f"{result.placed_count} / {total_groups}"},
        {"label": "Unplaced Groups", "value": str(len(result.unplaced)),
         "delta": f"{result.unplaced_people} people" if result.unplaced else "None",
         "delta_color": "inverse" if result.unplaced else "normal"},
    ])
    render_unplaced_banner(len(result.unplaced), result.unplaced_people)

    st.divider()

    # --- Charts ---
    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(capacity_vs_occupancy_bar(get_building_utilization(ballot)), use_container_width=True)
    with col2:
        st.plotly_chart(utilization_donut(ballot.total_occupancy, ballot.total_capacity), use_container_width=True)

    st.plotly_chart(tier_breakdown_bar(get_tier_summary(result)), use_container_width=True)

    st.divider()

    # --- Alerts ---
    st.subheader("Allocation Alerts")

    household_util = get_household_utilization(ballot)
    spare = [hu for hu in household_util
             if hu["capacity"] > 0 and hu["utilization_pct"] < HOUSEHOLD_UNDERUSED_THRESHOLD]
    empty_buildings = [bu["building"] for bu in get_building_utilization(ballot) if bu["household_count"] == 0]

    if not spare and not empty_buildings and not result.unplaced:
        st.success("No allocation alerts.")
        return

    if result.unplaced and spare:
        st.error(
            "Some groups are unplaced while households still have spare places. "
            "Those groups are larger than any remaining gap."
        )

    if spare:
        st.info(f"{len(spare)} household{'s' if len(spare) != 1 else ''} under {HOUSEHOLD_UNDERUSED_THRESHOLD:.0%} full")
        st.dataframe(pd.DataFrame([{
            "Household": hu["household"],
            "Building": hu["building"],
            "Occupied / Capacity": f"{hu['occupancy']} / {hu['capacity']}",
            "Occupancy": f"{hu['utilization_pct']:.0%}",
        } for hu in spare]), use_container_width=True, hide_index=True)

    if empty_buildings:
        st.info(f"Buildings with no households: {', '.join(empty_buildings)}")
