"""Department -> zone selection and per-team placement inside the chosen zone."""

import logging
from typing import Dict, List, Optional, Tuple

from models.floor import Seat, Table, Zone
from models.team import Team
from models.allocation import AllocationState, AllocationWarning, TeamPlacement
from engine.clustering import get_tables_in_zone
from engine.team_assigner import get_free_capacity, place_team, record_warning
from config.defaults import ZONE_FALLBACK, ZONE_FALLBACK_OPTIONS

logger = logging.getLogger(__name__)


def get_department_size(teams: List[Team], state: AllocationState) -> int:
    """Members still to seat across a department (already-placed leaders excluded)."""
    return sum(
        1 for team in teams for m in team.members
        if m.person_id not in state.placed_person_ids
    )


def get_zone_free_capacity(
    zone: Zone,
    tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
) -> int:
    """Aggregate free capacity over the zone's unconsumed tables."""
    return sum(
        get_free_capacity(t, seats_by_table, state)
        for t in get_tables_in_zone(tables, zone)
        if t.table_id not in state.consumed_table_ids
    )


def select_zone(
    need: int,
    zones: List[Zone],
    tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
) -> Optional[Zone]:
    """First zone, in scan order, whose free capacity covers `need`."""
    for zone in zones:
        if get_zone_free_capacity(zone, tables, seats_by_table, state) >= need:
            return zone
    return None


def _sort_by_size(teams: List[Team]) -> List[Team]:
    # Larger teams first; sort is stable so equal sizes keep roster order
    return sorted(teams, key=lambda t: t.size, reverse=True)


def _unplaced(team: Team, state: AllocationState, zone_id: Optional[str] = None) -> TeamPlacement:
    remaining = [m.person_id for m in team.members if m.person_id not in state.placed_person_ids]
    return TeamPlacement(
        team_id=team.team_id,
        team_name=team.team_name,
        department=team.department,
        member_count=len(remaining),
        zone_id=zone_id,
        unseated_person_ids=remaining,
        explanation_steps=["Department could not be placed: no zone fallback configured"],
    )


def assign_department_to_zone(
    department: str,
    teams: List[Team],
    zones: List[Zone],
    tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
    warnings: List[AllocationWarning],
    rule_config: Optional[dict] = None,
) -> Tuple[Optional[str], List[TeamPlacement]]:
    """Place a department's teams inside one zone. Returns (zone_id, placements).

    zone_id is None whenever no zone covers the department, including the
    largest_zone fallback, whose tables are used as a pool but never reported
    as the selected zone.
    """
    cfg = rule_config or {}
    fallback = cfg.get("zone_fallback", ZONE_FALLBACK)
    if fallback not in ZONE_FALLBACK_OPTIONS:
        raise ValueError(f"Unknown zone fallback: {fallback}. Use one of {ZONE_FALLBACK_OPTIONS}.")

    need = get_department_size(teams, state)
    zone = select_zone(need, zones, tables, seats_by_table, state)
    zone_id = zone.zone_id if zone else None

    if zone is not None:
        pool = get_tables_in_zone(tables, zone)
        logger.info("Department %s (%d people) -> %s", department, need, zone_id)
    else:
        largest = max(
            zones,
            key=lambda z: get_zone_free_capacity(z, tables, seats_by_table, state),
            default=None,
        )
        best_capacity = (
            get_zone_free_capacity(largest, tables, seats_by_table, state) if largest else 0
        )
        record_warning(
            warnings, "zone_capacity_shortfall",
            f"Department {department}: no zone holds {need} people "
            f"(largest free zone capacity {best_capacity}); fallback '{fallback}'",
            department=department,
        )
        if fallback == "none":
            placements = [_unplaced(team, state) for team in _sort_by_size(teams)]
            for p in placements:
                if p.unseated_person_ids:
                    record_warning(
                        warnings, "team_capacity_shortfall",
                        f"{p.team_name}: {len(p.unseated_person_ids)} members unseated "
                        f"(department has no zone)",
                        department=department, team_id=p.team_id,
                        person_ids=list(p.unseated_person_ids),
                    )
            return None, placements
        if fallback == "largest_zone" and largest is not None:
            # fallback pool only: the zone is too small to count as selected
            pool = get_tables_in_zone(tables, largest)
            logger.info("Department %s: fallback pool is %s", department, largest.zone_id)
        else:
            pool = list(tables)

    wider = list(tables) if fallback != "none" else None
    placements = []
    for team in _sort_by_size(teams):
        placements.append(place_team(
            team, pool, seats_by_table, state, warnings, cfg,
            wider_tables=wider, zone_id=zone_id,
        ))
    return zone_id, placements


def assign_department_to_tables(
    department: str,
    teams: List[Team],
    tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
    warnings: List[AllocationWarning],
    rule_config: Optional[dict] = None,
) -> List[TeamPlacement]:
    """Manager-proximity mode: every team straight onto the full table pool."""
    logger.info("Department %s: %d teams on full table pool", department, len(teams))
    return [
        place_team(team, list(tables), seats_by_table, state, warnings, rule_config)
        for team in _sort_by_size(teams)
    ]
