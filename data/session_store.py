"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Dict, List, Optional
from datetime import datetime
from models.ballot import Ballot
from models.round import AllocationRound
from models.audit import AuditEntry
from config.defaults import (
    BASELINE_ROUND_ID, DEFAULT_GROUP_COUNT, DEFAULT_HOUSEHOLD_COUNT,
    DEFAULT_BUILDING_COUNT, DEFAULT_SAMPLE_SEED,
)


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "base_ballot": None,
        "default_building_order": [],
        "rounds": {},
        "active_round_id": BASELINE_ROUND_ID,
        "audit_log": [],
        "data_loaded": False,
        "last_data_load": None,
        "generation_params": {
            "group_count": DEFAULT_GROUP_COUNT,
            "household_count": DEFAULT_HOUSEHOLD_COUNT,
            "building_count": DEFAULT_BUILDING_COUNT,
            "seed": DEFAULT_SAMPLE_SEED,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_base_ballot() -> Optional[Ballot]:
    return st.session_state.get("base_ballot")


def get_default_building_order() -> List[str]:
    return st.session_state.get("default_building_order", [])


def get_rounds() -> Dict[str, AllocationRound]:
    return st.session_state.get("rounds", {})


def get_active_round_id() -> str:
    return st.session_state.get("active_round_id", BASELINE_ROUND_ID)


def get_active_round() -> Optional[AllocationRound]:
    return get_rounds().get(get_active_round_id())


def get_audit_log() -> List[AuditEntry]:
    return st.session_state.get("audit_log", [])


def get_generation_params() -> dict:
    return st.session_state.get("generation_params", {})


def get_last_data_load() -> Optional[datetime]:
    return st.session_state.get("last_data_load")


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_base_ballot(ballot: Ballot, default_order: List[str]):
    """Store a freshly loaded pending ballot. Previous round results are stale from here on."""
    st.session_state["base_ballot"] = ballot
    st.session_state["default_building_order"] = list(default_order)
    st.session_state["data_loaded"] = True
    st.session_state["last_data_load"] = datetime.now()


def set_active_round_id(round_id: str):
    st.session_state["active_round_id"] = round_id


def set_generation_params(params: dict):
    st.session_state["generation_params"] = params


# --- Round Management ---

def add_round(allocation_round: AllocationRound):
    st.session_state["rounds"][allocation_round.round_id] = allocation_round


def remove_round(round_id: str):
    st.session_state["rounds"].pop(round_id, None)
    if get_active_round_id() == round_id:
        set_active_round_id(BASELINE_ROUND_ID)


def update_round(allocation_round: AllocationRound):
    st.session_state["rounds"][allocation_round.round_id] = allocation_round


def create_baseline_round() -> AllocationRound:
    """Create and store the baseline round using the loaded default building order."""
    allocation_round = AllocationRound(
        round_id=BASELINE_ROUND_ID,
        name="Baseline",
        description="Default building order from the loaded data",
        default_building_order=list(get_default_building_order()),
    )
    st.session_state["rounds"] = {BASELINE_ROUND_ID: allocation_round}
    set_active_round_id(BASELINE_ROUND_ID)
    return allocation_round


# --- Audit ---

def add_audit_entry(
    action: str,
    round_id: str,
    field_changed: str,
    old_value: str,
    new_value: str,
    household_name: Optional[str] = None,
    rationale: str = "",
):
    entry = AuditEntry(
        timestamp=datetime.now(),
        action=action,
        round_id=round_id,
        household_name=household_name,
        field_changed=field_changed,
        old_value=old_value,
        new_value=new_value,
        rationale=rationale,
    )
    st.session_state["audit_log"].append(entry)
