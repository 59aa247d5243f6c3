"""Global sidebar controls for allocation run options."""

import streamlit as st
from dataclasses import dataclass
from data.session_store import get_rule_config, set_rule_config, is_data_loaded
from config.defaults import (
    ALLOCATION_MODES, SEQUENCING_POLICIES, ZONE_FALLBACK_OPTIONS,
    ALLOCATION_MODE, SEQUENCING_POLICY, ZONE_FALLBACK, ROW_TOLERANCE,
    POD_DISTANCE_THRESHOLD, POD_PADDING, STRICT_TABLE_CONSTRAINT,
)


@dataclass
class SidebarState:
    allocation_mode: str
    sequencing_policy: str
    strict_table_constraint: bool


def _index(options: list, value: str, default: str) -> int:
    return options.index(value) if value in options else options.index(default)


def render_sidebar() -> SidebarState:
    """Render the sidebar run options, store them as the rule config and return them."""
    cfg = dict(get_rule_config())

    with st.sidebar:
        st.title("Pod Seat Planner")
        st.divider()

        mode = st.selectbox(
            "Allocation Mode",
            options=ALLOCATION_MODES,
            index=_index(ALLOCATION_MODES, cfg.get("allocation_mode"), ALLOCATION_MODE),
            format_func=lambda m: m.replace("_", " ").title(),
            key="sidebar_mode",
        )
        policy = st.selectbox(
            "Seat Sequencing",
            options=SEQUENCING_POLICIES,
            index=_index(SEQUENCING_POLICIES, cfg.get("sequencing_policy"), SEQUENCING_POLICY),
            format_func=lambda p: p.replace("_", " ").title(),
            key="sidebar_policy",
        )
        strict = st.checkbox(
            "Keep each team on one table",
            value=cfg.get("strict_table_constraint", STRICT_TABLE_CONSTRAINT),
            help="When off, teams that fit no single table spill over several tables.",
            key="sidebar_strict",
        )

        with st.expander("Advanced"):
            fallback = st.selectbox(
                "When no pod fits a department",
                options=ZONE_FALLBACK_OPTIONS,
                index=_index(ZONE_FALLBACK_OPTIONS, cfg.get("zone_fallback"), ZONE_FALLBACK),
                format_func=lambda f: f.replace("_", " ").title(),
                key="sidebar_fallback",
                disabled=mode != "pod_based",
            )
            distance = st.number_input(
                "Pod distance threshold",
                min_value=10, max_value=2000, step=10,
                value=int(cfg.get("pod_distance_threshold", POD_DISTANCE_THRESHOLD)),
                key="sidebar_distance",
                disabled=mode != "pod_based",
            )
            tolerance = st.number_input(
                "Row tolerance",
                min_value=1, max_value=200, step=1,
                value=int(cfg.get("row_tolerance", ROW_TOLERANCE)),
                key="sidebar_tolerance",
            )

        st.divider()

        if is_data_loaded():
            st.success("Data loaded")
        else:
            st.warning("No data loaded — go to Data Setup tab")

    cfg.update({
        "allocation_mode": mode,
        "sequencing_policy": policy,
        "strict_table_constraint": strict,
        "zone_fallback": fallback,
        "pod_distance_threshold": distance,
        "pod_padding": cfg.get("pod_padding", POD_PADDING),
        "row_tolerance": tolerance,
    })
    set_rule_config(cfg)

    return SidebarState(
        allocation_mode=mode,
        sequencing_policy=policy,
        strict_table_constraint=strict,
    )
