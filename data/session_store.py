"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Dict, List, Optional
from models.floor import Seat, Table
from models.person import Person
from models.team import Team
from models.preferences import PreferenceSet
from models.allocation import AllocationResult
from config.defaults import (
    ALLOCATION_MODE, SEQUENCING_POLICY, ROW_TOLERANCE, POD_DISTANCE_THRESHOLD,
    POD_PADDING, STRICT_TABLE_CONSTRAINT, ZONE_FALLBACK,
)


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "tables": [],
        "seats": [],
        "leaders": [],
        "teams": [],
        "preferences": {},
        "result": None,
        "data_loaded": False,
        "rule_config": {
            "allocation_mode": ALLOCATION_MODE,
            "sequencing_policy": SEQUENCING_POLICY,
            "row_tolerance": ROW_TOLERANCE,
            "pod_distance_threshold": POD_DISTANCE_THRESHOLD,
            "pod_padding": POD_PADDING,
            "strict_table_constraint": STRICT_TABLE_CONSTRAINT,
            "zone_fallback": ZONE_FALLBACK,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_tables() -> List[Table]:
    return st.session_state.get("tables", [])


def get_seats() -> List[Seat]:
    return st.session_state.get("seats", [])


def get_leaders() -> List[Person]:
    return st.session_state.get("leaders", [])


def get_teams() -> List[Team]:
    return st.session_state.get("teams", [])


def get_preferences() -> Dict[str, PreferenceSet]:
    return st.session_state.get("preferences", {})


def get_result() -> Optional[AllocationResult]:
    return st.session_state.get("result")


def get_rule_config() -> dict:
    return st.session_state.get("rule_config", {})


def is_data_loaded() -> bool:
    return st.session_state.get("data_loaded", False)


# --- Setters ---

def set_floor(tables: List[Table], seats: List[Seat]):
    st.session_state["tables"] = tables
    st.session_state["seats"] = seats


def set_roster(leaders: List[Person], teams: List[Team]):
    st.session_state["leaders"] = leaders
    st.session_state["teams"] = teams


def set_preferences(preferences: Dict[str, PreferenceSet]):
    st.session_state["preferences"] = preferences


def set_result(result: Optional[AllocationResult]):
    st.session_state["result"] = result


def set_data_loaded(loaded: bool):
    st.session_state["data_loaded"] = loaded
    # any previous allocation refers to the old data
    st.session_state["result"] = None


def set_rule_config(config: dict):
    st.session_state["rule_config"] = config
