"""Schema validation for uploaded data files."""

from dataclasses import dataclass, field
from typing import List, Optional
import pandas as pd

from models.person import Role


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


TABLE_REQUIRED_COLUMNS = [
    "Table ID",
    "X",
    "Y",
    "Width",
    "Height",
    "Capacity",
]

SEAT_REQUIRED_COLUMNS = [
    "Seat ID",
    "X",
    "Y",
]

PEOPLE_REQUIRED_COLUMNS = [
    "Person ID",
    "Name",
    "Gender",
    "Department",
    "Role",
]

PREFERENCE_REQUIRED_COLUMNS = [
    "Leader ID",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _check_duplicates(df: pd.DataFrame, column: str, file_label: str, result: ValidationResult):
    dupes = df.duplicated(subset=[column], keep=False)
    if dupes.any():
        result.is_valid = False
        result.errors.append(
            f"{file_label}: Duplicate {column} values: {df[dupes][column].unique().tolist()}"
        )


def validate_tables(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, TABLE_REQUIRED_COLUMNS, "Tables")
    if not result.is_valid:
        return result

    _check_duplicates(df, "Table ID", "Tables", result)

    # Non-positive capacity is skipped by the engine, not fatal
    bad_capacity = df[df["Capacity"] <= 0]["Table ID"].tolist()
    if bad_capacity:
        result.warnings.append(
            f"Tables: Non-positive capacity, these tables will be skipped: {bad_capacity}"
        )

    if ((df["Width"] <= 0) | (df["Height"] <= 0)).any():
        result.is_valid = False
        result.errors.append("Tables: Width and Height must be positive.")

    return result


def validate_seats(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, SEAT_REQUIRED_COLUMNS, "Seats")
    if not result.is_valid:
        return result

    _check_duplicates(df, "Seat ID", "Seats", result)

    if "Table ID" not in df.columns or df["Table ID"].isna().any():
        result.warnings.append(
            "Seats: Some seats have no Table ID. They will be mapped to the nearest table."
        )
    return result


def validate_people(df: pd.DataFrame) -> ValidationResult:
    result = _check_required_columns(df, PEOPLE_REQUIRED_COLUMNS, "People")
    if not result.is_valid:
        return result

    _check_duplicates(df, "Person ID", "People", result)

    valid_roles = {r.value for r in Role}
    roles = df["Role"].astype(str).str.strip().str.upper()
    bad_roles = sorted(set(roles) - valid_roles)
    if bad_roles:
        result.is_valid = False
        result.errors.append(
            f"People: Unknown roles {bad_roles}. Use one of {sorted(valid_roles)}."
        )

    if not (roles == Role.LEADER.value).any():
        result.warnings.append("People: No leaders in the roster; leader phase will be empty.")

    return result


def validate_preferences(df: Optional[pd.DataFrame]) -> ValidationResult:
    if df is None:
        return ValidationResult()
    result = _check_required_columns(df, PREFERENCE_REQUIRED_COLUMNS, "Preferences")
    if not result.is_valid:
        return result
    _check_duplicates(df, "Leader ID", "Preferences", result)
    return result


def validate_cross_file(
    tables_df: pd.DataFrame,
    seats_df: pd.DataFrame,
    people_df: pd.DataFrame,
    prefs_df: Optional[pd.DataFrame] = None,
) -> ValidationResult:
    """Check that references match across files."""
    result = ValidationResult()
    table_ids = set(tables_df["Table ID"].astype(str).str.strip())

    if "Table ID" in seats_df.columns:
        seat_tables = set(seats_df["Table ID"].dropna().astype(str).str.strip())
        unknown_tables = seat_tables - table_ids
        if unknown_tables:
            result.warnings.append(
                f"Seats reference unknown tables: {', '.join(sorted(unknown_tables))}. "
                "Those seats will only be used for leaders."
            )

    person_ids = set(people_df["Person ID"].astype(str).str.strip())
    if "Reports To" in people_df.columns:
        managers = set(people_df["Reports To"].dropna().astype(str).str.strip())
        unknown = managers - person_ids
        if unknown:
            result.warnings.append(
                f"People report to unknown ids: {', '.join(sorted(unknown))}. "
                "They will not be part of any team."
            )

    if prefs_df is not None and "Leader ID" in prefs_df.columns:
        leader_ids = set(
            people_df[people_df["Role"].astype(str).str.strip().str.upper() == Role.LEADER.value]
            ["Person ID"].astype(str).str.strip()
        )
        unknown_leaders = set(prefs_df["Leader ID"].astype(str).str.strip()) - leader_ids
        if unknown_leaders:
            result.warnings.append(
                f"Preferences for unknown leaders: {', '.join(sorted(unknown_leaders))}. "
                "These will be ignored."
            )

    total_people = len(people_df)
    total_seats = len(seats_df)
    if total_people > total_seats:
        result.warnings.append(
            f"Roster ({total_people}) exceeds seat supply ({total_seats}). "
            f"At least {total_people - total_seats} people will be unseated."
        )
    return result
