"""Deterministic seat fill order inside a table.

Filling seats in raw id or click order leaves gaps and L-shaped fragments
whenever seats were placed by hand. Each policy here buckets seats into rows
(or columns) with a tolerance that absorbs placement noise, then walks the
buckets in a fixed direction so consecutive people land on adjacent seats.

Policies:
- row_major:    rows top to bottom, each row left to right
- serpentine:   like row_major, but every second row runs right to left
- column_major: columns left to right, each column front to back
"""

import math
from collections import defaultdict
from typing import Callable, Dict, List

from models.floor import Seat
from config.defaults import ROW_TOLERANCE, SEQUENCING_POLICIES


def bucket_coordinate(value: float, tolerance: float = ROW_TOLERANCE) -> float:
    """Snap a coordinate to the nearest multiple of tolerance (halves round up)."""
    if tolerance <= 0:
        return value
    return math.floor(value / tolerance + 0.5) * tolerance


def _group_rows(seats: List[Seat], tolerance: float) -> List[List[Seat]]:
    rows: Dict[float, List[Seat]] = defaultdict(list)
    for s in seats:
        rows[bucket_coordinate(s.y, tolerance)].append(s)
    return [
        sorted(rows[key], key=lambda s: (s.x, s.seat_id))
        for key in sorted(rows)
    ]


def _group_columns(seats: List[Seat], tolerance: float) -> List[List[Seat]]:
    columns: Dict[float, List[Seat]] = defaultdict(list)
    for s in seats:
        columns[bucket_coordinate(s.x, tolerance)].append(s)
    return [
        sorted(columns[key], key=lambda s: (s.y, s.seat_id))
        for key in sorted(columns)
    ]


def order_row_major(seats: List[Seat], tolerance: float = ROW_TOLERANCE) -> List[Seat]:
    ordered = []
    for row in _group_rows(seats, tolerance):
        ordered.extend(row)
    return ordered


def order_serpentine(seats: List[Seat], tolerance: float = ROW_TOLERANCE) -> List[Seat]:
    ordered = []
    for i, row in enumerate(_group_rows(seats, tolerance)):
        ordered.extend(reversed(row) if i % 2 == 1 else row)
    return ordered


def order_column_major(seats: List[Seat], tolerance: float = ROW_TOLERANCE) -> List[Seat]:
    ordered = []
    for column in _group_columns(seats, tolerance):
        ordered.extend(column)
    return ordered


_POLICIES: Dict[str, Callable[[List[Seat], float], List[Seat]]] = {
    "row_major": order_row_major,
    "serpentine": order_serpentine,
    "column_major": order_column_major,
}


def order_seats(
    seats: List[Seat],
    policy: str = "serpentine",
    tolerance: float = ROW_TOLERANCE,
) -> List[Seat]:
    """Return the seats as the sequence they should be filled in."""
    if policy not in _POLICIES:
        raise ValueError(
            f"Unknown sequencing policy: {policy}. Use one of {SEQUENCING_POLICIES}."
        )
    return _POLICIES[policy](list(seats), tolerance)
