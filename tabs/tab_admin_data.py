"""Tab 4: Admin & Data — ballot upload, sample generation, round management, audit trail."""

import streamlit as st
import pandas as pd
from datetime import datetime

from data.loader import load_file, load_multi_sheet_excel, parse_ballot
from data.validator import validate_all
from data.sample_data import generate_sample_tables
from data.session_store import (
    set_base_ballot, get_base_ballot, get_default_building_order,
    get_rounds, add_round, remove_round, update_round, create_baseline_round,
    get_audit_log, add_audit_entry, is_data_loaded,
    get_generation_params, set_generation_params,
)
from models.errors import BallotError
from models.round import AllocationRound
from config.defaults import BASELINE_ROUND_ID


def _load_and_validate(buildings_df, households_df, groups_df, source: str):
    """Validate and store a ballot."""
    validation = validate_all(buildings_df, households_df, groups_df)

    if not validation.is_valid:
        for e in validation.errors:
            st.error(e)
        return False

    for w in validation.warnings:
        st.warning(w)

    try:
        ballot, default_order = parse_ballot(buildings_df, households_df, groups_df)
    except (BallotError, ValueError) as e:
        st.error(f"Could not build ballot: {e}")
        return False

    set_base_ballot(ballot, default_order)
    create_baseline_round()
    add_audit_entry("upload", BASELINE_ROUND_ID, "all_data", "", source, rationale="Ballot load")

    st.success(
        f"Ballot loaded: {len(ballot.buildings)} buildings, {len(ballot.accommodation)} households, "
        f"{len(ballot.pending_groups)} groups"
    )

    # --- Immediate supply vs demand health check ---
    total_places = ballot.total_capacity
    total_people = sum(g.size for g in ballot.pending_groups)
    largest_group = max((g.size for g in ballot.pending_groups), default=0)
    largest_household = max((h.capacity for h in ballot.accommodation), default=0)

    st.divider()
    st.subheader("Data Health Check")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Places", f"{total_places:,}")
    col2.metric("People Waiting", f"{total_people:,}")
    col3.metric("Largest Group", largest_group)
    col4.metric("Largest Household", largest_household)

    if total_people > total_places:
        st.error(
            f"RISK: {total_people:,} people are waiting for {total_places:,} places. "
            f"At least {total_people - total_places:,} people will be left unplaced."
        )
    elif largest_group > largest_household:
        st.warning(
            f"WARNING: The largest group ({largest_group}) is bigger than any household "
            f"({largest_household}) and cannot be placed."
        )
    else:
        st.success(f"Supply looks healthy: {total_places:,} places for {total_people:,} people.")

    return True


def render(sidebar_state):
    """Render the Admin & Data tab."""
    st.header("Admin & Data")

    # --- Data Upload Section ---
    st.subheader("Ballot Data")

    upload_mode = st.radio(
        "Source",
        ["Single Excel file (3 tabs)", "Three separate files", "Generate sample"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel file (3 tabs)":
        st.caption(
            "Upload one `.xlsx` file with three sheets named: "
            "**Buildings**, **Households**, **Groups** "
            "(also accepts aliases like 'Accommodation', 'Applicants', etc.)"
        )
        single_file = st.file_uploader("Excel workbook with 3 tabs", type=["xlsx"], key="upload_single")
        if st.button("Upload & Validate", type="primary", key="btn_upload_single"):
            if single_file:
                try:
                    b_df, h_df, g_df = load_multi_sheet_excel(single_file)
                    _load_and_validate(b_df, h_df, g_df, single_file.name)
                except Exception as e:
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload an Excel file.")

    elif upload_mode == "Three separate files":
        col1, col2, col3 = st.columns(3)
        with col1:
            buildings_file = st.file_uploader("Buildings", type=["csv", "xlsx"], key="upload_buildings")
        with col2:
            households_file = st.file_uploader("Households", type=["csv", "xlsx"], key="upload_households")
        with col3:
            groups_file = st.file_uploader("Groups (one row per member)", type=["csv", "xlsx"], key="upload_groups")

        if st.button("Upload & Validate", type="primary", key="btn_upload_multi"):
            if buildings_file and households_file and groups_file:
                try:
                    b_df = load_file(buildings_file)
                    h_df = load_file(households_file)
                    g_df = load_file(groups_file)
                    _load_and_validate(b_df, h_df, g_df, "three files")
                except Exception as e:
                    st.error(f"Error loading files: {e}")
            else:
                st.warning("Please upload all three files.")

    else:
        params = get_generation_params()
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            group_count = st.number_input("Groups", 0, 500, params.get("group_count", 20), key="gen_groups")
        with col2:
            household_count = st.number_input("Households", 0, 500, params.get("household_count", 5), key="gen_households")
        with col3:
            building_count = st.number_input("Buildings", 1, 50, params.get("building_count", 3), key="gen_buildings")
        with col4:
            seed = st.number_input("Seed", 0, 10_000, params.get("seed", 42), key="gen_seed")

        if st.button("Generate Sample Ballot", type="primary", key="btn_generate"):
            new_params = {
                "group_count": int(group_count),
                "household_count": int(household_count),
                "building_count": int(building_count),
                "seed": int(seed),
            }
            set_generation_params(new_params)
            b_df, h_df, g_df = generate_sample_tables(**new_params)
            _load_and_validate(b_df, h_df, g_df, f"sample {new_params}")

    # --- Base Data Preview ---
    if is_data_loaded():
        st.divider()
        st.subheader("Loaded Ballot")
        ballot = get_base_ballot()
        preview_tab1, preview_tab2 = st.tabs(["Households", "Groups"])
        with preview_tab1:
            st.dataframe(pd.DataFrame([{
                "Household": h.name,
                "Building": h.building,
                "Capacity": h.capacity,
            } for h in ballot.accommodation]), use_container_width=True, hide_index=True)
        with preview_tab2:
            st.dataframe(pd.DataFrame([{
                "Group": g.label,
                "Size": g.size,
                "Average Score": round(g.average_score, 2),
                "Household Preferences": ", ".join(p or "—" for p in g.household_preferences),
                "Building Preferences": ", ".join(g.building_preferences) if g.building_preferences else "default",
            } for g in ballot.pending_groups]), use_container_width=True, hide_index=True)

    st.divider()

    # --- Round Management ---
    st.subheader("Round Management")

    rounds = get_rounds()
    if rounds:
        st.dataframe(pd.DataFrame([{
            "ID": rid,
            "Name": r.name,
            "Default Order": " > ".join(r.default_building_order),
            "Locked": "Yes" if r.is_locked else "No",
            "Run": "Yes" if r.has_run else "No",
            "Created": r.created_at.strftime("%Y-%m-%d %H:%M"),
        } for rid, r in rounds.items()]), use_container_width=True, hide_index=True)

        col1, col2 = st.columns(2)
        with col1:
            lock_id = st.selectbox("Select round to lock/unlock", list(rounds.keys()), key="lock_round_select")
            if lock_id and st.button("Toggle Lock"):
                r = rounds[lock_id]
                r.is_locked = not r.is_locked
                update_round(r)
                add_audit_entry("lock" if r.is_locked else "unlock", lock_id, "is_locked",
                                str(not r.is_locked), str(r.is_locked))
                st.rerun()

        with col2:
            deletable = [rid for rid in rounds if rid != BASELINE_ROUND_ID and not rounds[rid].is_locked]
            del_id = st.selectbox("Select round to delete", deletable, key="delete_round_select")
            if del_id and st.button("Delete Round", type="secondary"):
                remove_round(del_id)
                add_audit_entry("delete", del_id, "round", del_id, "deleted")
                st.rerun()

    if is_data_loaded():
        with st.expander("Create Round", expanded=False):
            new_name = st.text_input("Round Name", key="new_round_name")
            new_desc = st.text_area("Description", key="new_round_desc")
            if st.button("Create Round"):
                if not new_name:
                    st.warning("Please enter a round name.")
                else:
                    rid = new_name.lower().replace(" ", "_") + "_" + datetime.now().strftime("%H%M%S")
                    add_round(AllocationRound(
                        round_id=rid,
                        name=new_name,
                        description=new_desc,
                        default_building_order=list(get_default_building_order()),
                    ))
                    add_audit_entry("create", rid, "round", "", new_name)
                    st.success(f"Round '{new_name}' created. Switch to it in the sidebar, then run it in the Round Lab.")
                    st.rerun()

    st.divider()

    # --- Audit Trail ---
    st.subheader("Audit Trail")

    audit_log = get_audit_log()
    if audit_log:
        audit_df = pd.DataFrame([{
            "Timestamp": entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            "Action": entry.action,
            "Round": entry.round_id,
            "Household": entry.household_name or "—",
            "Field": entry.field_changed,
            "Old Value": entry.old_value[:50],
            "New Value": entry.new_value[:50],
            "Rationale": entry.rationale,
        } for entry in reversed(audit_log)])
        st.dataframe(audit_df, use_container_width=True, height=300, hide_index=True)
        st.download_button("Export Audit Log (CSV)", audit_df.to_csv(index=False), "audit_log.csv", "text/csv")
    else:
        st.info("No audit entries yet.")
