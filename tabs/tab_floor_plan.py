"""Tab 2: Floor Plan. Run the allocation and view the seated floor."""

import logging
import streamlit as st

from data.session_store import (
    get_tables, get_seats, get_leaders, get_teams, get_preferences,
    get_rule_config, get_result, set_result, is_data_loaded,
)
from engine.orchestrator import run_allocation
from components.charts import floor_plan_figure, team_status_donut
from components.metrics_cards import render_summary_metrics, render_alert_card
from config.defaults import DEPARTMENTS

logger = logging.getLogger(__name__)


def render(sidebar_state):
    """Render the Floor Plan tab."""
    st.header("Floor Plan")

    if not is_data_loaded():
        st.info("No data loaded. Please upload data in the Data Setup tab.")
        return

    st.caption(
        f"Mode: **{sidebar_state.allocation_mode}** · "
        f"Sequencing: **{sidebar_state.sequencing_policy}** · "
        f"One table per team: **{'Yes' if sidebar_state.strict_table_constraint else 'No'}**"
    )

    if st.button("Run Allocation", type="primary", key="btn_run_allocation"):
        try:
            result = run_allocation(
                get_leaders(), get_teams(), get_seats(), get_tables(),
                preferences=get_preferences(),
                rule_config=get_rule_config(),
                departments=DEPARTMENTS,
            )
        except ValueError as e:
            logger.error("Allocation failed: %s", e)
            st.error(f"Allocation failed: {e}")
            return
        set_result(result)

    result = get_result()
    if result is None:
        fig = floor_plan_figure(get_tables(), get_seats(), title="Floor Plan (not yet allocated)")
        st.plotly_chart(fig, use_container_width=True)
        return

    render_summary_metrics(result.summary)

    if result.unseated_leader_ids:
        render_alert_card(
            f"{len(result.unseated_leader_ids)} leader(s) could not be seated: "
            f"{', '.join(result.unseated_leader_ids)}",
            level="error",
        )
    if result.summary.people_unseated:
        render_alert_card(
            f"{result.summary.people_unseated} people are unseated. See the Allocation Report tab.",
            level="warning",
        )

    col1, col2 = st.columns([3, 1])
    with col1:
        st.plotly_chart(floor_plan_figure(get_tables(), get_seats(), result), use_container_width=True)
    with col2:
        st.plotly_chart(team_status_donut(result), use_container_width=True)
        st.metric("Warnings", result.summary.warning_count)
