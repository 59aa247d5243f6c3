"""Top-level allocation run: leaders, then departments, then assembly.

A run is one deterministic call from immutable inputs to an AllocationResult.
All consumption state (free seats, consumed tables, placed people) lives in an
AllocationState built inside the call and threaded through every phase.
"""

import logging
from typing import Dict, List, Optional, Tuple

from models.person import Person
from models.preferences import PreferenceSet
from models.floor import Seat, Table, Zone
from models.team import Team
from models.allocation import (
    Assignment, AllocationResult, AllocationState, AllocationSummary,
    AllocationWarning, TeamPlacement,
)
from engine.clustering import group_tables_into_zones
from engine.scoring import matched_preferences, pick_best_seat
from engine.explainer import explain_leader_placement
from engine.team_assigner import build_assignment, record_warning
from engine.zone_assigner import assign_department_to_tables, assign_department_to_zone
from data.team_formation import get_teams_by_department
from config.defaults import (
    ALLOCATION_MODE, ALLOCATION_MODES, LEADER_TEAM_PREFIX,
    POD_DISTANCE_THRESHOLD, POD_PADDING, SEQUENCING_POLICY, SEQUENCING_POLICIES,
    ZONE_FALLBACK, ZONE_FALLBACK_OPTIONS,
)

logger = logging.getLogger(__name__)


def _validate_tables(tables: List[Table], warnings: List[AllocationWarning]) -> List[Table]:
    valid = []
    seen = set()
    for t in tables:
        if t.table_id in seen:
            record_warning(warnings, "malformed_input",
                           f"Table {t.table_id}: duplicate id, skipped", table_id=t.table_id)
            continue
        seen.add(t.table_id)
        if t.capacity <= 0:
            record_warning(warnings, "malformed_input",
                           f"Table {t.table_id}: non-positive capacity ({t.capacity}), skipped",
                           table_id=t.table_id)
            continue
        valid.append(t)
    return valid


def _validate_seats(
    seats: List[Seat],
    table_ids: set,
    warnings: List[AllocationWarning],
) -> Tuple[List[Seat], Dict[str, List[Seat]]]:
    """Deduplicate seats and index them by table. Seats without a usable table
    stay available to leaders only."""
    valid = []
    seats_by_table: Dict[str, List[Seat]] = {}
    seen = set()
    for s in seats:
        if s.seat_id in seen:
            record_warning(warnings, "malformed_input",
                           f"Seat {s.seat_id}: duplicate id, skipped")
            continue
        seen.add(s.seat_id)
        valid.append(s)
        if s.table_id is None:
            continue
        if s.table_id not in table_ids:
            record_warning(warnings, "malformed_input",
                           f"Seat {s.seat_id}: table {s.table_id} unknown or skipped; "
                           f"seat usable by leaders only", table_id=s.table_id)
            continue
        seats_by_table.setdefault(s.table_id, []).append(s)
    return valid, seats_by_table


def _validate_teams(
    teams: List[Team],
    leader_ids: set,
    warnings: List[AllocationWarning],
) -> List[Team]:
    valid = []
    seen_people = set()
    for team in teams:
        if not team.members:
            record_warning(warnings, "malformed_input",
                           f"{team.team_name}: team has no members, skipped",
                           department=team.department, team_id=team.team_id)
            continue
        duplicates = [m.person_id for m in team.members
                      if m.person_id in seen_people and m.person_id not in leader_ids]
        if duplicates:
            record_warning(warnings, "duplicate_person",
                           f"{team.team_name}: {len(duplicates)} members already belong to "
                           f"an earlier team and will not be seated twice",
                           department=team.department, team_id=team.team_id,
                           person_ids=duplicates)
            members = [m for m in team.members if m.person_id not in duplicates]
            if not members:
                continue
            team = Team(
                team_id=team.team_id, team_name=team.team_name, department=team.department,
                members=members, leader_id=team.leader_id, manager_id=team.manager_id,
                sub_manager_id=team.sub_manager_id,
            )
        seen_people.update(m.person_id for m in team.members)
        valid.append(team)
    return valid


def _department_order(teams: List[Team], departments: Optional[List[str]]) -> List[str]:
    order = list(departments or [])
    for team in teams:
        if team.department not in order:
            order.append(team.department)
    return order


def place_leaders(
    leaders: List[Person],
    seats: List[Seat],
    preferences: Dict[str, PreferenceSet],
    state: AllocationState,
    warnings: List[AllocationWarning],
) -> Tuple[List[Assignment], Dict[str, List[str]], List[str]]:
    """Seat every leader on the best-scoring free seat (ties: lowest seat id).

    Returns (assignments, explanations by leader id, unseated leader ids).
    """
    assignments = []
    explanations = {}
    unseated = []

    for leader in leaders:
        if leader.person_id in state.placed_person_ids:
            continue
        prefs = preferences.get(leader.person_id, PreferenceSet())
        free = [s for s in seats if s.seat_id in state.free_seat_ids]
        best = pick_best_seat(free, prefs)

        if best is None:
            unseated.append(leader.person_id)
            record_warning(warnings, "leader_unseated",
                           f"Leader {leader.name}: no free seat left",
                           department=leader.department, person_ids=[leader.person_id])
            continue

        seat, score = best
        assignments.append(build_assignment(
            seat, leader, f"{LEADER_TEAM_PREFIX}{leader.person_id}", leader.department,
        ))
        state.free_seat_ids.discard(seat.seat_id)
        state.placed_person_ids.add(leader.person_id)
        explanations[leader.person_id] = explain_leader_placement(
            leader.name, seat.seat_id, score, prefs.active_flags(),
            matched_preferences(seat, prefs), len(free),
        )
        logger.debug("Leader %s (%s) -> seat %s (score %d)",
                     leader.name, leader.department, seat.seat_id, score)

    return assignments, explanations, unseated


def build_summary(
    seats: List[Seat],
    leader_assignments: List[Assignment],
    unseated_leader_ids: List[str],
    placements: List[TeamPlacement],
    zones: List[Zone],
    warnings: List[AllocationWarning],
) -> AllocationSummary:
    team_seated = sum(p.seated_count for p in placements)
    team_unseated = sum(len(p.unseated_person_ids) for p in placements)
    leaders_unseated = len(unseated_leader_ids)
    used_zones = {p.zone_id for p in placements if p.zone_id and p.assignments}
    return AllocationSummary(
        total_seats=len(seats),
        seats_used=len(leader_assignments) + team_seated,
        people_total=len(leader_assignments) + leaders_unseated + team_seated + team_unseated,
        people_seated=len(leader_assignments) + team_seated,
        people_unseated=leaders_unseated + team_unseated,
        leaders_seated=len(leader_assignments),
        teams_total=len(placements),
        teams_fully_seated=sum(1 for p in placements if p.status == "complete"),
        teams_partially_seated=sum(1 for p in placements if p.status == "partial"),
        teams_unseated=sum(1 for p in placements if p.status == "unseated"),
        zones_total=len(zones),
        zones_used=len(used_zones),
        warning_count=len(warnings),
    )


def run_allocation(
    leaders: List[Person],
    teams: List[Team],
    seats: List[Seat],
    tables: List[Table],
    preferences: Optional[Dict[str, PreferenceSet]] = None,
    departments: Optional[List[str]] = None,
    rule_config: Optional[dict] = None,
) -> AllocationResult:
    """Full allocation pipeline: leaders -> departments/zones -> teams -> seats."""
    cfg = rule_config or {}
    mode = cfg.get("allocation_mode", ALLOCATION_MODE)
    if mode not in ALLOCATION_MODES:
        raise ValueError(f"Unknown allocation mode: {mode}. Use one of {ALLOCATION_MODES}.")
    policy = cfg.get("sequencing_policy", SEQUENCING_POLICY)
    if policy not in SEQUENCING_POLICIES:
        raise ValueError(f"Unknown sequencing policy: {policy}. Use one of {SEQUENCING_POLICIES}.")
    fallback = cfg.get("zone_fallback", ZONE_FALLBACK)
    if fallback not in ZONE_FALLBACK_OPTIONS:
        raise ValueError(f"Unknown zone fallback: {fallback}. Use one of {ZONE_FALLBACK_OPTIONS}.")

    warnings: List[AllocationWarning] = []
    valid_tables = _validate_tables(tables, warnings)
    valid_seats, seats_by_table = _validate_seats(
        seats, {t.table_id for t in valid_tables}, warnings,
    )
    valid_teams = _validate_teams(teams, {p.person_id for p in leaders}, warnings)

    state = AllocationState(free_seat_ids={s.seat_id for s in valid_seats})
    logger.info(
        "Starting allocation (%s): %d seats, %d tables, %d leaders, %d teams",
        mode, len(valid_seats), len(valid_tables), len(leaders), len(valid_teams),
    )

    # Phase 1: leaders
    leader_assignments, leader_explanations, unseated_leaders = place_leaders(
        leaders, valid_seats, preferences or {}, state, warnings,
    )
    logger.info("Leader phase: %d of %d seated", len(leader_assignments), len(leaders))

    # Phase 2: departments
    zones: List[Zone] = []
    if mode == "pod_based":
        zones = group_tables_into_zones(
            valid_tables,
            cfg.get("pod_distance_threshold", POD_DISTANCE_THRESHOLD),
            cfg.get("pod_padding", POD_PADDING),
        )

    placements: List[TeamPlacement] = []
    for department in _department_order(valid_teams, departments):
        dept_teams = get_teams_by_department(department, valid_teams)
        if not dept_teams:
            continue
        if mode == "pod_based":
            _, dept_placements = assign_department_to_zone(
                department, dept_teams, zones, valid_tables, seats_by_table,
                state, warnings, cfg,
            )
        else:
            dept_placements = assign_department_to_tables(
                department, dept_teams, valid_tables, seats_by_table,
                state, warnings, cfg,
            )
        placements.extend(dept_placements)

    # Phase 3: assembly
    assignments = list(leader_assignments)
    for p in placements:
        assignments.extend(p.assignments)

    summary = build_summary(
        valid_seats, leader_assignments, unseated_leaders, placements, zones, warnings,
    )
    logger.info(
        "Allocation complete: %d seats assigned, %d people unseated, %d warnings",
        summary.seats_used, summary.people_unseated, summary.warning_count,
    )

    return AllocationResult(
        assignments=assignments,
        team_placements=placements,
        zones=zones,
        warnings=warnings,
        summary=summary,
        leader_explanations=leader_explanations,
        unseated_leader_ids=unseated_leaders,
    )
