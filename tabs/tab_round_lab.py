"""Tab 3: Round Lab — try the ballot under different default building orders."""

import streamlit as st
import pandas as pd

from data.session_store import (
    get_active_round, get_rounds, get_base_ballot, update_round, add_audit_entry,
    is_data_loaded, get_last_data_load,
)
from engine.round_engine import run_round, reset_round, compare_rounds, round_totals
from engine.utilization import get_tier_summary
from components.tables import render_comparison_table, render_styled_table
from components.charts import round_comparison_bar
from models.errors import BallotError
from config.defaults import BASELINE_ROUND_ID


def _order_from_editor(edited: pd.DataFrame) -> list:
    ranked = edited.sort_values("Rank", kind="stable")
    return [str(b) for b in ranked["Building"]]


def render(sidebar_state):
    """Render the Round Lab tab."""
    st.header("Round Lab")

    if not is_data_loaded():
        st.info("No data loaded. Please load a ballot in the Admin & Data tab.")
        return

    rounds = get_rounds()
    allocation_round = get_active_round()
    if not allocation_round:
        st.info("No active round. Create one in Admin & Data.")
        return

    if allocation_round.is_locked:
        st.warning(f"Round '{allocation_round.name}' is locked. Changes are disabled.")

    last_load = get_last_data_load()
    if allocation_round.has_run and last_load and last_load > allocation_round.last_run_at:
        st.warning("Ballot data has been reloaded since the last run. Re-run the round to see updated results.")

    st.subheader(f"Round: {allocation_round.name}")
    if allocation_round.description:
        st.caption(allocation_round.description)

    st.divider()

    # --- Default Building Order ---
    st.subheader("Default Building Order")
    st.caption(
        "Groups without their own building preferences try buildings in this order. "
        "Every declared building must appear exactly once."
    )

    order_df = pd.DataFrame([
        {"Building": b, "Rank": i}
        for i, b in enumerate(allocation_round.default_building_order, start=1)
    ], columns=["Building", "Rank"])

    if not allocation_round.is_locked:
        edited = st.data_editor(
            order_df,
            disabled=["Building"],
            use_container_width=True,
            key=f"round_order_editor_{allocation_round.round_id}",
            num_rows="fixed",
            hide_index=True,
        )
    else:
        st.dataframe(order_df, use_container_width=True, hide_index=True)
        edited = order_df

    # --- Action Buttons ---
    col1, col2 = st.columns(2)
    with col1:
        run_clicked = st.button("Run Allocation", type="primary",
                                disabled=allocation_round.is_locked, key="btn_run_round")
    with col2:
        reset_clicked = st.button("Reset Round", disabled=allocation_round.is_locked, key="btn_reset_round")

    if run_clicked and not allocation_round.is_locked:
        old_order = list(allocation_round.default_building_order)
        allocation_round.default_building_order = _order_from_editor(edited)
        try:
            run_round(allocation_round, get_base_ballot())
        except BallotError as e:
            allocation_round.default_building_order = old_order
            st.error(f"Allocation aborted: {e}")
        else:
            update_round(allocation_round)
            add_audit_entry(
                "allocate", allocation_round.round_id, "default_building_order",
                " > ".join(old_order), " > ".join(allocation_round.default_building_order),
            )
            st.success(f"Allocation complete for '{allocation_round.name}'.")
            st.rerun()

    if reset_clicked and not allocation_round.is_locked:
        reset_round(allocation_round)
        update_round(allocation_round)
        add_audit_entry("reset", allocation_round.round_id, "results", "", "reset")
        st.success("Round results cleared.")
        st.rerun()

    if not allocation_round.has_run:
        return

    # --- Current Results Summary ---
    st.divider()
    st.subheader("Round Results")

    result = allocation_round.result
    render_styled_table(pd.DataFrame([{
        "Tier": row["label"],
        "Groups": row["groups"],
        "People": row["people"],
    } for row in get_tier_summary(result)]))

    st.markdown(
        f"This round placed **{result.placed_count} of {len(result.processing_order)} groups** "
        f"({result.placed_people} people). **{len(result.unplaced)} groups** "
        f"({result.unplaced_people} people) remain unplaced."
    )

    with st.expander("Processing Order", expanded=False):
        for i, g in enumerate(result.processing_order, start=1):
            st.markdown(f"{i}. **{g.label}** — size {g.size}, average score {g.average_score:.2f}")

    # --- Baseline Comparison ---
    if allocation_round.round_id != BASELINE_ROUND_ID:
        baseline = rounds.get(BASELINE_ROUND_ID)
        if baseline and baseline.has_run:
            st.divider()
            st.subheader("Changes vs Baseline")

            render_styled_table(pd.DataFrame([round_totals(baseline), round_totals(allocation_round)]))

            diffs = compare_rounds(baseline, allocation_round)
            diff_df = pd.DataFrame(diffs)
            gained = sum(1 for d in diffs if d["Occupancy Change"] > 0)
            lost = sum(1 for d in diffs if d["Occupancy Change"] < 0)
            st.markdown(
                f"Compared to baseline: **{gained} households gained occupants**, "
                f"**{lost} households lost occupants**."
            )
            render_comparison_table(diff_df)
            st.plotly_chart(round_comparison_bar(diff_df), use_container_width=True)
