"""Plotly chart builders for the Pod Seat Planner."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List, Optional

from models.floor import Seat, Table
from models.allocation import AllocationResult
from config.defaults import DEPARTMENT_COLORS, UNASSIGNED_SEAT_COLOR, LEADER_TEAM_PREFIX


def floor_plan_figure(
    tables: List[Table],
    seats: List[Seat],
    result: Optional[AllocationResult] = None,
    title: str = "Floor Plan",
) -> go.Figure:
    """Top-down floor plan: tables as rectangles, pods as dashed boxes, seats
    colored by the department of whoever sits there."""
    fig = go.Figure()

    for t in tables:
        fig.add_shape(
            type="rect",
            x0=t.x, y0=t.y, x1=t.x + t.width, y1=t.y + t.height,
            line=dict(color="#616161", width=1),
            fillcolor="#EEEEEE",
            layer="below",
        )

    if result is not None:
        for z in result.zones:
            fig.add_shape(
                type="rect",
                x0=z.x, y0=z.y, x1=z.x + z.width, y1=z.y + z.height,
                line=dict(color="#9E9E9E", width=1, dash="dash"),
                layer="below",
            )
            fig.add_annotation(
                x=z.x, y=z.y, text=z.zone_id, showarrow=False,
                xanchor="left", yanchor="bottom", font=dict(size=10, color="#757575"),
            )

    seat_map = result.seat_map() if result is not None else {}
    rows = []
    for s in seats:
        a = seat_map.get(s.seat_id)
        rows.append({
            "seat_id": s.seat_id,
            "x": s.x,
            "y": s.y,
            "group": a.department if a else "Unassigned",
            "hover": (
                f"{s.seat_id}<br>{a.person_name} ({a.role})<br>{a.team_id}"
                if a else f"{s.seat_id}<br>free"
            ),
            "is_leader": bool(a and a.team_id.startswith(LEADER_TEAM_PREFIX)),
        })
    df = pd.DataFrame(rows, columns=["seat_id", "x", "y", "group", "hover", "is_leader"])

    for group, gdf in df.groupby("group", sort=True):
        fig.add_trace(go.Scatter(
            x=gdf["x"], y=gdf["y"],
            mode="markers",
            name=group,
            marker=dict(
                size=9,
                color=DEPARTMENT_COLORS.get(group, UNASSIGNED_SEAT_COLOR),
                symbol=["star" if v else "circle" for v in gdf["is_leader"]],
                line=dict(width=0.5, color="#424242"),
            ),
            text=gdf["hover"],
            hovertemplate="%{text}<extra></extra>",
        ))

    fig.update_layout(
        title=title,
        height=650,
        legend_title_text="Department",
        plot_bgcolor="white",
    )
    # floor plan coordinates grow downwards
    fig.update_yaxes(autorange="reversed", scaleanchor="x", showgrid=False, visible=False)
    fig.update_xaxes(showgrid=False, visible=False)
    return fig


def table_utilization_bar(utilization_data: List[dict], title: str = "Table Utilization") -> go.Figure:
    """Horizontal bar of used seats vs capacity per table."""
    df = pd.DataFrame(utilization_data)
    fig = px.bar(
        df, x="utilization_pct", y="table_id",
        orientation="h",
        title=title,
        labels={"utilization_pct": "Utilization %", "table_id": "Table"},
        color="utilization_pct",
        color_continuous_scale=["#4A90D9", "#F5C542", "#E8734A"],
        range_color=[0, 1],
    )
    fig.update_layout(height=max(300, len(df) * 22), yaxis_type="category")
    fig.update_traces(texttemplate="%{x:.0%}", textposition="auto")
    return fig


def team_status_donut(result: AllocationResult, title: str = "Team Placement") -> go.Figure:
    """Donut of complete / partial / unseated teams."""
    s = result.summary
    fig = go.Figure(data=[go.Pie(
        labels=["Complete", "Partial", "Unseated"],
        values=[s.teams_fully_seated, s.teams_partially_seated, s.teams_unseated],
        hole=0.6,
        marker_colors=["#4CAF50", "#F5C542", "#E8734A"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{s.teams_total} teams", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig
