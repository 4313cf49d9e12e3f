"""Tab 2: Household View — who lives where, and how each group got there."""

import streamlit as st
import pandas as pd

from data.session_store import get_active_round, is_data_loaded
from data.exporter import ballot_to_dataframe, placements_to_dataframe, unplaced_to_dataframe
from components.tables import render_status_table, render_styled_table
from components.charts import household_occupancy_bar
from engine.utilization import get_household_utilization, get_unplaced_summary
from config.defaults import TIER_LABELS


def render(sidebar_state):
    """Render the Household View tab."""
    st.header("Household View")

    if not is_data_loaded():
        st.info("No data loaded. Please load a ballot in the Admin & Data tab.")
        return

    allocation_round = get_active_round()
    if not allocation_round or not allocation_round.has_run:
        st.info("No allocation results available. Run the round from the Round Lab.")
        return

    ballot = allocation_round.ballot
    result = allocation_round.result
    utilization = get_household_utilization(ballot)

    # --- Filters ---
    col_f1, col_f2, col_f3 = st.columns(3)
    with col_f1:
        selected_buildings = st.multiselect("Filter by Building", ballot.buildings, default=ballot.buildings)
    with col_f2:
        statuses = ["Full", "Partly Filled", "Spare Capacity", "Closed"]
        status_filter = st.multiselect("Filter by Status", statuses, default=statuses)
    with col_f3:
        search = st.text_input("Search Household or Member", "")

    # --- Build table ---
    rows = []
    for hu in utilization:
        if hu["building"] not in selected_buildings or hu["status"] not in status_filter:
            continue
        if search and search.lower() not in hu["household"].lower() and search.lower() not in hu["roster"].lower():
            continue
        rows.append({
            "Household": hu["household"],
            "Building": hu["building"],
            "Capacity": hu["capacity"],
            "Occupancy": hu["occupancy"],
            "Available": hu["available"],
            "Groups": hu["group_count"],
            "Status": hu["status"],
            "Occupants": hu["roster"],
        })

    if not rows:
        st.info("No households match the current filters.")
    else:
        render_status_table(pd.DataFrame(rows))

    building_filter = selected_buildings[0] if len(selected_buildings) == 1 else None
    st.plotly_chart(household_occupancy_bar(utilization, building_filter), use_container_width=True)

    # --- Export ---
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "Export Households (CSV)", ballot_to_dataframe(ballot).to_csv(index=False),
            "allocation.csv", "text/csv",
        )
    with col2:
        st.download_button(
            "Export Placements (CSV)", placements_to_dataframe(result).to_csv(index=False),
            "placements.csv", "text/csv",
        )

    # --- Unplaced groups ---
    st.divider()
    st.subheader("Unplaced Groups")
    unplaced = get_unplaced_summary(result)
    if unplaced:
        render_styled_table(pd.DataFrame([{
            "Group": u["group"],
            "Size": u["size"],
            "Average Score": f"{u['average_score']:.1f}",
            "Attempts": u["attempts"],
            "Reason": u["reason"],
            "Members": u["members"],
        } for u in unplaced]))
        st.download_button(
            "Export Unplaced (CSV)", unplaced_to_dataframe(result.unplaced).to_csv(index=False),
            "unplaced.csv", "text/csv",
        )
    else:
        st.success("Every group was placed.")

    # --- Household Detail ---
    st.divider()
    st.subheader("Household Detail")

    selected = st.selectbox("Select a household", ballot.household_names, key="household_detail_select")
    household = ballot.get_household(selected) if selected else None
    if not household:
        return

    st.markdown(
        f"**{household.name}** ({household.building}): {household.occupancy} of "
        f"{household.capacity} place{'s' if household.capacity != 1 else ''} taken by "
        f"{len(household.placed_groups)} group{'s' if len(household.placed_groups) != 1 else ''}"
    )

    for group in household.placed_groups:
        placement = result.placement_for(group)
        with st.expander(f"{group.label} — {group.size} member{'s' if group.size != 1 else ''}", expanded=False):
            st.markdown(f"Members: {group.roster}")
            st.markdown(f"Average score: {group.average_score:.2f}")
            if placement:
                st.markdown(f"Placed via: **{TIER_LABELS.get(placement.tier, placement.tier)}**")
                for step in placement.explanation_steps:
                    st.markdown(f"- {step}")
