"""Map seats to their nearest table."""

import logging
import math
from dataclasses import replace
from typing import List, Optional

from models.floor import Seat, Table
from config.defaults import SEAT_TABLE_MARGIN

logger = logging.getLogger(__name__)


def _inside(seat: Seat, table: Table, margin: float) -> bool:
    return (
        table.x - margin <= seat.x <= table.x + table.width + margin
        and table.y - margin <= seat.y <= table.y + table.height + margin
    )


def _center_distance(seat: Seat, table: Table) -> float:
    return math.hypot(seat.x - table.center_x, seat.y - table.center_y)


def nearest_table(seat: Seat, tables: List[Table], margin: float = SEAT_TABLE_MARGIN) -> Optional[Table]:
    """Nearest table whose margin-expanded rectangle holds the seat, else the
    absolutely nearest table."""
    if not tables:
        return None
    containing = [t for t in tables if _inside(seat, t, margin)]
    candidates = containing or tables
    return min(candidates, key=lambda t: _center_distance(seat, t))


def map_seats_to_tables(
    seats: List[Seat],
    tables: List[Table],
    margin: float = SEAT_TABLE_MARGIN,
    only_unmapped: bool = False,
) -> List[Seat]:
    """Return copies of the seats with table_id resolved.

    With only_unmapped, seats that already name a table keep it.
    """
    if not tables:
        logger.warning("No tables defined; seats left unmapped")
        return list(seats)

    mapped = []
    for seat in seats:
        if only_unmapped and seat.table_id:
            mapped.append(seat)
            continue
        table = nearest_table(seat, tables, margin)
        mapped.append(replace(seat, table_id=table.table_id))
    return mapped


def get_seats_for_table(seats: List[Seat], table_id: str) -> List[Seat]:
    return [s for s in seats if s.table_id == table_id]
