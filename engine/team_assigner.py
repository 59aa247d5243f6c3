"""Team -> table placement: first-fit table choice, then sequenced seat fill."""

import logging
from typing import Dict, List, Optional, Tuple

from models.person import Person
from models.floor import Seat, Table
from models.team import Team
from models.allocation import Assignment, AllocationState, AllocationWarning, TeamPlacement
from engine.sequencer import order_seats
from engine.explainer import explain_team_placement
from config.defaults import ROW_TOLERANCE, SEQUENCING_POLICY, STRICT_TABLE_CONSTRAINT

logger = logging.getLogger(__name__)


def record_warning(
    warnings: List[AllocationWarning],
    kind: str,
    message: str,
    **context,
) -> AllocationWarning:
    """Append a structured warning to the run's list and log it."""
    warning = AllocationWarning(kind=kind, message=message, **context)
    warnings.append(warning)
    logger.warning("[%s] %s", kind, message)
    return warning


def build_assignment(seat: Seat, person: Person, team_id: str, department: str) -> Assignment:
    role = person.role.value if hasattr(person.role, "value") else str(person.role)
    return Assignment(
        seat_id=seat.seat_id,
        person_id=person.person_id,
        person_name=person.name,
        role=role,
        gender=person.gender,
        department=department,
        team_id=team_id,
        table_id=seat.table_id,
        x=seat.x,
        y=seat.y,
    )


def get_free_seats(
    table: Table,
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
) -> List[Seat]:
    return [s for s in seats_by_table.get(table.table_id, []) if s.seat_id in state.free_seat_ids]


def get_free_capacity(
    table: Table,
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
) -> int:
    """Seats still usable on a table: free seats, capped by declared capacity."""
    table_seats = seats_by_table.get(table.table_id, [])
    free = sum(1 for s in table_seats if s.seat_id in state.free_seat_ids)
    occupied = len(table_seats) - free
    return max(0, min(free, table.capacity - occupied))


def order_members(team: Team, placed_person_ids) -> List[Person]:
    """Members still to seat: special-needs first, then roster order."""
    remaining = [m for m in team.members if m.person_id not in placed_person_ids]
    special = [m for m in remaining if m.special_needs]
    regular = [m for m in remaining if not m.special_needs]
    return special + regular


def find_first_fit(
    tables: List[Table],
    need: int,
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
) -> Optional[Table]:
    """First unconsumed table, in scan order, that can hold `need` people."""
    for table in tables:
        if table.table_id in state.consumed_table_ids:
            continue
        if get_free_capacity(table, seats_by_table, state) >= need:
            return table
    return None


def _sequencing(rule_config: Optional[dict]) -> Tuple[str, float]:
    cfg = rule_config or {}
    return (
        cfg.get("sequencing_policy", SEQUENCING_POLICY),
        cfg.get("row_tolerance", ROW_TOLERANCE),
    )


def _seat_on_table(
    members: List[Person],
    table: Table,
    team: Team,
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
    rule_config: Optional[dict],
) -> List[Assignment]:
    """Walk the sequenced free seats and the members in lockstep; consume the table."""
    policy, tolerance = _sequencing(rule_config)
    limit = get_free_capacity(table, seats_by_table, state)
    ordered = order_seats(get_free_seats(table, seats_by_table, state), policy, tolerance)[:limit]

    assignments = []
    for seat, person in zip(ordered, members):
        assignments.append(build_assignment(seat, person, team.team_id, team.department))
        state.free_seat_ids.discard(seat.seat_id)
        state.placed_person_ids.add(person.person_id)

    state.consumed_table_ids.add(table.table_id)
    return assignments


def assign_team_to_table(
    team: Team,
    tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
    rule_config: Optional[dict] = None,
    zone_id: Optional[str] = None,
) -> TeamPlacement:
    """Place a whole team on the first table that fits it.

    On failure nothing is seated and every remaining member is listed as
    unseated; the caller decides whether to retry elsewhere.
    """
    policy, _ = _sequencing(rule_config)
    members = order_members(team, state.placed_person_ids)
    placement = TeamPlacement(
        team_id=team.team_id,
        team_name=team.team_name,
        department=team.department,
        member_count=len(members),
        zone_id=zone_id,
    )
    if not members:
        return placement

    special_count = sum(1 for m in members if m.special_needs)
    table = find_first_fit(tables, len(members), seats_by_table, state)

    if table is None:
        placement.unseated_person_ids = [m.person_id for m in members]
        placement.explanation_steps = explain_team_placement(
            team.team_name, len(members), special_count, [], 0, policy, zone_id,
            unseated_count=len(members),
        )
        logger.debug("No table fits %s (%d members)", team.team_name, len(members))
        return placement

    free_capacity = get_free_capacity(table, seats_by_table, state)
    placement.assignments = _seat_on_table(members, table, team, seats_by_table, state, rule_config)
    placement.table_ids = [table.table_id]
    placement.explanation_steps = explain_team_placement(
        team.team_name, len(members), special_count, placement.table_ids,
        free_capacity, policy, zone_id,
    )
    logger.debug("%s -> table %s (%d seats)", team.team_name, table.table_id, len(placement.assignments))
    return placement


def place_team(
    team: Team,
    candidate_tables: List[Table],
    seats_by_table: Dict[str, List[Seat]],
    state: AllocationState,
    warnings: List[AllocationWarning],
    rule_config: Optional[dict] = None,
    wider_tables: Optional[List[Table]] = None,
    zone_id: Optional[str] = None,
) -> TeamPlacement:
    """Place a team, falling back when no single candidate table fits.

    1. first fit in candidate_tables
    2. first fit in wider_tables (team stays whole, outside its zone)
    3. strict: as many as fit on the single table with most free seats
       non-strict: spill over unconsumed tables in scan order
    """
    cfg = rule_config or {}
    strict = cfg.get("strict_table_constraint", STRICT_TABLE_CONSTRAINT)
    policy, _ = _sequencing(cfg)

    placement = assign_team_to_table(team, candidate_tables, seats_by_table, state, cfg, zone_id)
    if placement.is_complete:
        return placement

    members = order_members(team, state.placed_person_ids)
    special_count = sum(1 for m in members if m.special_needs)
    candidate_ids = {t.table_id for t in candidate_tables}
    extra_tables = [t for t in (wider_tables or []) if t.table_id not in candidate_ids]

    if extra_tables:
        fit = find_first_fit(extra_tables, len(members), seats_by_table, state)
        free_capacity = get_free_capacity(fit, seats_by_table, state) if fit else 0
        wider = assign_team_to_table(team, extra_tables, seats_by_table, state, cfg)
        if wider.is_complete:
            wider.used_fallback = True
            note = "no table in the assigned zone fits; placed on a table outside it"
            wider.explanation_steps = explain_team_placement(
                team.team_name, len(members), special_count, wider.table_ids,
                free_capacity, policy, None, fallback_note=note,
            )
            record_warning(
                warnings, "team_outside_zone",
                f"{team.team_name}: {note} ({wider.table_ids[0]})",
                department=team.department, team_id=team.team_id, table_id=wider.table_ids[0],
            )
            return wider

    pool = [t for t in candidate_tables + extra_tables if t.table_id not in state.consumed_table_ids]
    best_capacity = 0
    placement.used_fallback = True
    placement.assignments = []
    placement.table_ids = []

    if strict:
        best = None
        for t in pool:
            capacity = get_free_capacity(t, seats_by_table, state)
            if capacity > best_capacity:
                best, best_capacity = t, capacity
        if best is not None:
            placement.assignments = _seat_on_table(members, best, team, seats_by_table, state, cfg)
            placement.table_ids = [best.table_id]
            if best.table_id not in candidate_ids:
                placement.zone_id = None
        note = "strict table constraint: team kept on one table, overflow left unseated"
    else:
        remaining = members
        for t in pool:
            if not remaining:
                break
            if get_free_capacity(t, seats_by_table, state) <= 0:
                continue
            seated = _seat_on_table(remaining, t, team, seats_by_table, state, cfg)
            placement.assignments.extend(seated)
            placement.table_ids.append(t.table_id)
            remaining = remaining[len(seated):]
        note = "table spillover allowed: team split across tables"
        if len(placement.table_ids) > 1:
            record_warning(
                warnings, "team_split_across_tables",
                f"{team.team_name}: split across {len(placement.table_ids)} tables "
                f"({', '.join(placement.table_ids)})",
                department=team.department, team_id=team.team_id,
            )

    seated_ids = {a.person_id for a in placement.assignments}
    placement.unseated_person_ids = [m.person_id for m in members if m.person_id not in seated_ids]
    placement.explanation_steps = explain_team_placement(
        team.team_name, len(members), special_count, placement.table_ids, best_capacity,
        policy, placement.zone_id, fallback_note=note,
        unseated_count=len(placement.unseated_person_ids),
    )

    # a split team is short of a single table even when everyone got a seat
    if placement.unseated_person_ids or len(placement.table_ids) > 1:
        if placement.unseated_person_ids:
            message = (f"{team.team_name}: {len(placement.unseated_person_ids)} of "
                       f"{len(members)} members unseated")
        else:
            message = f"{team.team_name}: no single table holds all {len(members)} members"
        record_warning(
            warnings, "team_capacity_shortfall", message,
            department=team.department, team_id=team.team_id,
            table_id=placement.table_ids[0] if placement.table_ids else None,
            person_ids=list(placement.unseated_person_ids),
        )

    return placement
