"""Tab 1: Data Setup. Floor and roster upload, validation, seat mapping and team formation."""

import logging
import streamlit as st
import pandas as pd

from data.loader import (
    load_file, load_multi_sheet_excel, parse_tables, parse_seats, parse_people, parse_preferences,
)
from data.validator import (
    validate_tables, validate_seats, validate_people, validate_preferences, validate_cross_file,
)
from data.sample_data import (
    generate_tables_df, generate_seats_df, generate_people_df, generate_preferences_df,
)
from data.table_mapping import map_seats_to_tables, get_seats_for_table
from data.team_formation import split_roster, form_teams
from data.session_store import (
    set_floor, set_roster, set_preferences, set_data_loaded, is_data_loaded,
    get_tables, get_seats, get_leaders, get_teams, get_preferences,
)

logger = logging.getLogger(__name__)


def _load_and_validate(tables_df, seats_df, people_df, prefs_df=None):
    """Validate and store uploaded data."""
    errors = []
    warnings = []

    for r in [validate_tables(tables_df), validate_seats(seats_df),
              validate_people(people_df), validate_preferences(prefs_df)]:
        errors.extend(r.errors)
        warnings.extend(r.warnings)

    if not errors:
        cross = validate_cross_file(tables_df, seats_df, people_df, prefs_df)
        warnings.extend(cross.warnings)

    if errors:
        for e in errors:
            st.error(e)
        return False

    for w in warnings:
        st.warning(w)

    tables = parse_tables(tables_df)
    seats = map_seats_to_tables(parse_seats(seats_df), tables, only_unmapped=True)
    people = parse_people(people_df)
    leaders, _ = split_roster(people)
    teams = form_teams(people)

    set_floor(tables, seats)
    set_roster(leaders, teams)
    set_preferences(parse_preferences(prefs_df))
    set_data_loaded(True)
    logger.info(
        "Loaded %d tables, %d seats, %d people (%d leaders, %d teams)",
        len(tables), len(seats), len(people), len(leaders), len(teams),
    )

    st.success(
        f"Data loaded: {len(tables)} tables, {len(seats)} seats, "
        f"{len(people)} people in {len(teams)} teams"
    )

    # --- Supply vs demand check ---
    st.divider()
    st.subheader("Data Health Check")
    total_capacity = sum(t.capacity for t in tables if t.capacity > 0)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Seats", f"{len(seats):,}")
    col2.metric("Table Capacity", f"{total_capacity:,}")
    col3.metric("People", f"{len(people):,}")
    col4.metric("Leaders", f"{len(leaders):,}")

    if len(people) > len(seats):
        st.error(
            f"Roster ({len(people):,}) exceeds seat supply ({len(seats):,}). "
            f"{len(people) - len(seats):,} people will stay unseated."
        )
    elif len(people) > len(seats) * 0.9:
        st.warning(
            f"Roster fills {len(people) / len(seats):.0%} of seats. "
            "Expect some teams to be split or land outside their pod."
        )
    return True


def _load_sample():
    people_df = generate_people_df()
    _load_and_validate(
        generate_tables_df(), generate_seats_df(), people_df, generate_preferences_df(people_df),
    )


def render(sidebar_state):
    """Render the Data Setup tab."""
    st.header("Data Setup")

    upload_mode = st.radio(
        "Upload mode",
        ["Single Excel file", "Separate files"],
        horizontal=True,
        key="upload_mode",
    )

    if upload_mode == "Single Excel file":
        st.caption(
            "Upload one `.xlsx` file with sheets named **Tables**, **Seats**, **People** "
            "and optionally **Preferences** (aliases like 'Seat Map' or 'Roster' also work)."
        )
        single_file = st.file_uploader("Excel workbook", type=["xlsx"], key="upload_single")

        col_upload, col_sample = st.columns(2)
        with col_upload:
            if st.button("Upload & Validate", type="primary", key="btn_upload_single"):
                if single_file:
                    try:
                        _load_and_validate(*load_multi_sheet_excel(single_file))
                    except (ValueError, KeyError) as e:
                        st.error(f"Error loading file: {e}")
                else:
                    st.warning("Please upload an Excel file.")
        with col_sample:
            if st.button("Load Sample Data", key="btn_sample_single"):
                _load_sample()

    else:
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            tables_file = st.file_uploader("Tables", type=["csv", "xlsx"], key="upload_tables")
        with col2:
            seats_file = st.file_uploader("Seats", type=["csv", "xlsx"], key="upload_seats")
        with col3:
            people_file = st.file_uploader("People", type=["csv", "xlsx"], key="upload_people")
        with col4:
            prefs_file = st.file_uploader(
                "Leader Preferences (optional)", type=["csv", "xlsx"], key="upload_prefs",
            )

        col_upload, col_sample = st.columns(2)
        with col_upload:
            if st.button("Upload & Validate", type="primary", key="btn_upload_multi"):
                if tables_file and seats_file and people_file:
                    try:
                        _load_and_validate(
                            load_file(tables_file),
                            load_file(seats_file),
                            load_file(people_file),
                            load_file(prefs_file) if prefs_file else None,
                        )
                    except (ValueError, KeyError) as e:
                        st.error(f"Error loading files: {e}")
                else:
                    st.warning("Please upload the Tables, Seats and People files.")
        with col_sample:
            if st.button("Load Sample Data", key="btn_sample_multi"):
                _load_sample()

    if not is_data_loaded():
        return

    st.divider()
    st.subheader("Loaded Data")
    tab_teams, tab_leaders, tab_floor = st.tabs(["Teams", "Leaders", "Tables"])

    with tab_teams:
        st.dataframe(pd.DataFrame([{
            "Team ID": t.team_id,
            "Team": t.team_name,
            "Department": t.department,
            "Size": t.size,
            "Special Needs": sum(1 for m in t.members if m.special_needs),
            "Leader": t.leader_id or "—",
        } for t in get_teams()]), use_container_width=True, height=400)

    with tab_leaders:
        prefs = get_preferences()
        st.dataframe(pd.DataFrame([{
            "Leader ID": p.person_id,
            "Name": p.name,
            "Department": p.department,
            "Preferences": ", ".join(prefs[p.person_id].active_flags()) if p.person_id in prefs else "—",
        } for p in get_leaders()]), use_container_width=True)

    with tab_floor:
        seats = get_seats()
        st.dataframe(pd.DataFrame([{
            "Table ID": t.table_id,
            "X": t.x,
            "Y": t.y,
            "Capacity": t.capacity,
            "Mapped Seats": len(get_seats_for_table(seats, t.table_id)),
        } for t in get_tables()]), use_container_width=True)
