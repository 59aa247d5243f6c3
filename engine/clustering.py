"""Group tables into pods (zones) by center-to-center proximity."""

import logging
import math
from typing import Dict, List

from models.floor import Table, Zone
from config.defaults import POD_DISTANCE_THRESHOLD, POD_PADDING

logger = logging.getLogger(__name__)


def table_distance(a: Table, b: Table) -> float:
    """Euclidean distance between two table centers."""
    return math.hypot(b.center_x - a.center_x, b.center_y - a.center_y)


def _bounding_zone(index: int, members: List[Table], padding: float) -> Zone:
    min_x = min(t.x for t in members)
    min_y = min(t.y for t in members)
    max_x = max(t.x + t.width for t in members)
    max_y = max(t.y + t.height for t in members)
    return Zone(
        zone_id=f"POD-{index:02d}",
        name=f"Pod {index}",
        table_ids=tuple(t.table_id for t in members),
        x=min_x - padding,
        y=min_y - padding,
        width=max_x - min_x + 2 * padding,
        height=max_y - min_y + 2 * padding,
    )


def group_tables_into_zones(
    tables: List[Table],
    max_distance: float = POD_DISTANCE_THRESHOLD,
    padding: float = POD_PADDING,
) -> List[Zone]:
    """Cluster tables into zones.

    A zone is a maximal set of tables connected through pairwise center
    distances <= max_distance. Seeds are taken in input order, so the result
    is deterministic for a fixed table ordering.
    """
    if not tables:
        return []

    zones: List[Zone] = []
    clustered = set()

    for seed in tables:
        if seed.table_id in clustered:
            continue

        members = [seed]
        clustered.add(seed.table_id)

        changed = True
        while changed:
            changed = False
            for table in tables:
                if table.table_id in clustered:
                    continue
                if any(table_distance(table, m) <= max_distance for m in members):
                    members.append(table)
                    clustered.add(table.table_id)
                    changed = True

        zones.append(_bounding_zone(len(zones) + 1, members, padding))

    logger.info("Created %d pods from %d tables", len(zones), len(tables))
    for z in zones:
        logger.debug("  %s: %d tables", z.zone_id, len(z.table_ids))

    return zones


def get_table_zone_map(zones: List[Zone]) -> Dict[str, str]:
    """table_id -> zone_id lookup."""
    return {tid: z.zone_id for z in zones for tid in z.table_ids}


def get_tables_in_zone(tables: List[Table], zone: Zone) -> List[Table]:
    """Tables belonging to a zone, in the zone's member order."""
    table_map = {t.table_id: t for t in tables}
    return [table_map[tid] for tid in zone.table_ids if tid in table_map]


def get_zone_capacity(tables: List[Table], zone: Zone) -> int:
    """Declared capacity of a zone (ignores current occupancy)."""
    return sum(t.capacity for t in get_tables_in_zone(tables, zone))
