"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd


def render_status_table(df: pd.DataFrame, status_column: str = "Status"):
    """Render team placements with color-coded status."""
    def color_status(val):
        if val == "unseated":
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif val == "partial":
            return "background-color: #fff3cd; color: #856404; font-weight: bold"
        elif val == "complete":
            return "background-color: #d4edda; color: #155724; font-weight: bold"
        return ""

    if status_column in df.columns:
        styled = df.style.map(color_status, subset=[status_column])
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)


def render_warning_table(df: pd.DataFrame, kind_column: str = "Kind"):
    """Render allocation warnings, shortfalls highlighted."""
    def color_kind(val):
        if str(val).endswith("shortfall") or val == "leader_unseated":
            return "color: #cc0000; font-weight: bold"
        elif val == "malformed_input":
            return "color: #856404; font-weight: bold"
        return ""

    if kind_column in df.columns:
        styled = df.style.map(color_kind, subset=[kind_column])
        st.dataframe(styled, use_container_width=True)
    else:
        st.dataframe(df, use_container_width=True)
