"""Tab 3: Allocation Report. Team placements, utilization, warnings and explanations."""

import streamlit as st
import pandas as pd

from data.session_store import get_tables, get_seats, get_preferences, get_result, is_data_loaded
from data.loader import assignments_to_df, team_placements_to_df, warnings_to_df
from engine.utilization import (
    get_table_utilization, get_zone_utilization, get_split_teams, get_preference_satisfaction,
)
from components.charts import table_utilization_bar
from components.tables import render_status_table, render_warning_table


def render(sidebar_state):
    """Render the Allocation Report tab."""
    st.header("Allocation Report")

    if not is_data_loaded():
        st.info("No data loaded. Please upload data in the Data Setup tab.")
        return

    result = get_result()
    if result is None:
        st.info("No allocation yet. Run one from the Floor Plan tab.")
        return

    tables = get_tables()
    seats = get_seats()

    # --- Team Placements ---
    st.subheader("Team Placements")
    placements_df = team_placements_to_df(result)
    status_filter = st.multiselect(
        "Status", ["complete", "partial", "unseated"],
        default=["complete", "partial", "unseated"], key="report_status",
    )
    if not placements_df.empty:
        render_status_table(placements_df[placements_df["Status"].isin(status_filter)])

    selected = st.selectbox(
        "Explain placement for team",
        options=[p.team_id for p in result.team_placements],
        format_func=lambda tid: next(
            (f"{p.team_id} — {p.team_name}" for p in result.team_placements if p.team_id == tid), tid,
        ),
        key="report_explain_team",
    )
    if selected:
        placement = next(p for p in result.team_placements if p.team_id == selected)
        for i, step in enumerate(placement.explanation_steps, start=1):
            st.markdown(f"{i}. {step}")

    split = get_split_teams(result)
    if split:
        with st.expander(f"Teams split across tables ({len(split)})"):
            for msg in split:
                st.warning(msg)

    st.divider()

    # --- Utilization ---
    st.subheader("Utilization")
    table_util = get_table_utilization(tables, seats, result)
    col1, col2 = st.columns([3, 2])
    with col1:
        if table_util:
            st.plotly_chart(table_utilization_bar(table_util), use_container_width=True)
    with col2:
        zone_util = get_zone_utilization(tables, seats, result)
        if zone_util:
            st.dataframe(pd.DataFrame([{
                "Pod": z["zone_id"],
                "Tables": z["table_count"],
                "Capacity": z["capacity"],
                "Used": z["used_seats"],
                "Utilization": f"{z['utilization_pct']:.0%}",
                "Departments": ", ".join(z["departments"]) or "—",
            } for z in zone_util]), use_container_width=True)
        else:
            st.caption("Pods are only formed in pod-based mode.")

    st.divider()

    # --- Leaders ---
    st.subheader("Leader Seats")
    satisfaction = get_preference_satisfaction(result, seats, get_preferences())
    if satisfaction:
        st.dataframe(pd.DataFrame([{
            "Leader": r["leader_name"],
            "Seat": r["seat_id"],
            "Requested": ", ".join(r["requested"]) or "—",
            "Matched": ", ".join(r["matched"]) or "—",
            "Satisfaction": f"{r['satisfaction_pct']:.0%}",
        } for r in satisfaction]), use_container_width=True)
    for leader_id, steps in result.leader_explanations.items():
        with st.expander(f"Why this seat for {leader_id}?"):
            for i, step in enumerate(steps, start=1):
                st.markdown(f"{i}. {step}")

    st.divider()

    # --- Warnings ---
    st.subheader(f"Warnings ({len(result.warnings)})")
    if result.warnings:
        render_warning_table(warnings_to_df(result))
    else:
        st.success("Every team was seated without warnings.")

    st.divider()

    # --- Export ---
    st.subheader("Export")
    col_a, col_b = st.columns(2)
    with col_a:
        st.download_button(
            "Download Seat Assignments (CSV)",
            data=assignments_to_df(result).to_csv(index=False),
            file_name="seat_assignments.csv",
            mime="text/csv",
            key="dl_assignments",
        )
    with col_b:
        st.download_button(
            "Download Team Placements (CSV)",
            data=placements_df.to_csv(index=False),
            file_name="team_placements.csv",
            mime="text/csv",
            key="dl_placements",
        )
