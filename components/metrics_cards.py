"""Reusable KPI metric card widgets."""

import streamlit as st

from models.allocation import AllocationSummary


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def render_summary_metrics(summary: AllocationSummary):
    """Headline numbers for one allocation run."""
    render_metric_row([
        {"label": "Seats Used", "value": f"{summary.seats_used}/{summary.total_seats}",
         "delta": f"{summary.seat_utilization_pct:.0%}", "delta_color": "off"},
        {"label": "People Seated", "value": summary.people_seated,
         "delta": f"-{summary.people_unseated} unseated" if summary.people_unseated else None,
         "delta_color": "normal"},
        {"label": "Leaders Seated", "value": summary.leaders_seated},
        {"label": "Complete Teams", "value": f"{summary.teams_fully_seated}/{summary.teams_total}"},
        {"label": "Pods Used", "value": f"{summary.zones_used}/{summary.zones_total}"},
    ])


def render_alert_card(message: str, level: str = "warning"):
    """Render an alert card with appropriate styling."""
    if level == "error":
        st.error(message, icon="🔴")
    elif level == "warning":
        st.warning(message, icon="🟡")
    else:
        st.info(message, icon="🔵")
