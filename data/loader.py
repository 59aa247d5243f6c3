"""Parse uploaded CSV/XLSX files into model lists and export allocation results."""

import pandas as pd
from typing import Dict, List, Optional, Tuple
from models.person import Person, Role
from models.preferences import PreferenceSet, SeatAttributes
from models.floor import Seat, Table
from models.allocation import AllocationResult

SEAT_ATTRIBUTE_COLUMNS = {
    "Near Window": "near_window",
    "Near Entry": "near_entry",
    "Corner": "corner",
    "Quiet Zone": "quiet_zone",
    "Accessible": "accessible",
    "Premium": "premium",
}

PREFERENCE_COLUMNS = {
    "Near Window": "near_window",
    "Near Entry": "near_entry",
    "Quiet Zone": "quiet_zone",
    "Corner/Edge": "corner_edge",
    "Near Team": "near_team",
    "Premium": "premium",
}

_TRUE_STRINGS = {"true", "yes", "y", "1", "x"}


def _flag(row, df: pd.DataFrame, column: str) -> bool:
    """Read an optional boolean column; blanks and missing columns are False."""
    if column not in df.columns:
        return False
    value = row.get(column)
    if pd.isna(value):
        return False
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _optional_str(row, df: pd.DataFrame, column: str) -> Optional[str]:
    if column not in df.columns or pd.isna(row.get(column)):
        return None
    text = str(row[column]).strip()
    return text or None


def parse_tables(df: pd.DataFrame) -> List[Table]:
    """Convert a tables DataFrame into Table objects."""
    tables = []
    for _, row in df.iterrows():
        tables.append(Table(
            table_id=str(row["Table ID"]).strip(),
            x=float(row["X"]),
            y=float(row["Y"]),
            width=float(row["Width"]),
            height=float(row["Height"]),
            capacity=int(row["Capacity"]),
        ))
    return tables


def parse_seats(df: pd.DataFrame) -> List[Seat]:
    """Convert a seats DataFrame into Seat objects."""
    seats = []
    for _, row in df.iterrows():
        attributes = SeatAttributes(**{
            attr: _flag(row, df, col) for col, attr in SEAT_ATTRIBUTE_COLUMNS.items()
        })
        seats.append(Seat(
            seat_id=str(row["Seat ID"]).strip(),
            x=float(row["X"]),
            y=float(row["Y"]),
            table_id=_optional_str(row, df, "Table ID"),
            attributes=attributes,
        ))
    return seats


def parse_people(df: pd.DataFrame) -> List[Person]:
    """Convert a people DataFrame into Person objects."""
    people = []
    for _, row in df.iterrows():
        people.append(Person(
            person_id=str(row["Person ID"]).strip(),
            name=str(row["Name"]).strip(),
            gender=str(row["Gender"]).strip().upper(),
            department=str(row["Department"]).strip(),
            role=Role(str(row["Role"]).strip().upper()),
            special_needs=_flag(row, df, "Special Needs"),
            reports_to=_optional_str(row, df, "Reports To"),
        ))
    return people


def parse_preferences(df: Optional[pd.DataFrame]) -> Dict[str, PreferenceSet]:
    """Convert a leader preferences DataFrame into a leader_id -> PreferenceSet map."""
    if df is None:
        return {}
    preferences = {}
    for _, row in df.iterrows():
        leader_id = str(row["Leader ID"]).strip()
        preferences[leader_id] = PreferenceSet(**{
            flag: _flag(row, df, col) for col, flag in PREFERENCE_COLUMNS.items()
        })
    return preferences


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")


# Expected sheet names for multi-tab Excel (case-insensitive matching)
SHEET_ALIASES = {
    "tables": ["tables", "table", "table master", "desks", "table geometry"],
    "seats": ["seats", "seat", "seat map", "reference seats", "seat geometry"],
    "people": ["people", "hierarchy", "employees", "org", "organization", "roster"],
    "preferences": ["preferences", "leader preferences", "prefs"],
}


def _match_sheet(sheet_names: List[str], category: str, required: bool = True) -> Optional[str]:
    """Find a sheet name matching the given category."""
    aliases = SHEET_ALIASES[category]
    lower_map = {s.lower().strip(): s for s in sheet_names}
    for alias in aliases:
        if alias in lower_map:
            return lower_map[alias]
    if not required:
        return None
    raise ValueError(
        f"Could not find a sheet for '{category}'. "
        f"Expected one of: {aliases}. "
        f"Found sheets: {sheet_names}"
    )


def load_multi_sheet_excel(
    uploaded_file,
) -> Tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame, Optional[pd.DataFrame]]:
    """Load a single Excel file with Tables, Seats, People and (optional) Preferences tabs.

    Returns (tables_df, seats_df, people_df, preferences_df_or_None).
    """
    xl = pd.ExcelFile(uploaded_file, engine="openpyxl")
    sheet_names = xl.sheet_names

    tables_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "tables"))
    seats_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "seats"))
    people_df = pd.read_excel(xl, sheet_name=_match_sheet(sheet_names, "people"))

    prefs_sheet = _match_sheet(sheet_names, "preferences", required=False)
    prefs_df = pd.read_excel(xl, sheet_name=prefs_sheet) if prefs_sheet else None

    return tables_df, seats_df, people_df, prefs_df


# --- Export ---

def assignments_to_df(result: AllocationResult) -> pd.DataFrame:
    rows = [{
        "Seat ID": a.seat_id,
        "Person ID": a.person_id,
        "Name": a.person_name,
        "Role": a.role,
        "Gender": a.gender,
        "Department": a.department,
        "Team ID": a.team_id,
        "Table ID": a.table_id,
        "X": a.x,
        "Y": a.y,
    } for a in result.assignments]
    return pd.DataFrame(rows, columns=[
        "Seat ID", "Person ID", "Name", "Role", "Gender", "Department",
        "Team ID", "Table ID", "X", "Y",
    ])


def team_placements_to_df(result: AllocationResult) -> pd.DataFrame:
    rows = [{
        "Team ID": p.team_id,
        "Team": p.team_name,
        "Department": p.department,
        "Zone": p.zone_id or "—",
        "Tables": ", ".join(p.table_ids) or "—",
        "Members": p.member_count,
        "Seated": p.seated_count,
        "Unseated": len(p.unseated_person_ids),
        "Status": p.status,
        "Fallback": p.used_fallback,
    } for p in result.team_placements]
    return pd.DataFrame(rows)


def warnings_to_df(result: AllocationResult) -> pd.DataFrame:
    rows = [{
        "Kind": w.kind,
        "Department": w.department or "",
        "Team ID": w.team_id or "",
        "Table ID": w.table_id or "",
        "People": ", ".join(w.person_ids),
        "Message": w.message,
    } for w in result.warnings]
    return pd.DataFrame(rows, columns=["Kind", "Department", "Team ID", "Table ID", "People", "Message"])
