"""Generates human-readable explanations for seat placements."""

from typing import List, Optional


def explain_leader_placement(
    leader_name: str,
    seat_id: str,
    score: int,
    requested: List[str],
    matched: List[str],
    candidates: int,
) -> List[str]:
    """Produce step-by-step explanation for a leader's seat."""
    steps = []

    if requested:
        steps.append(
            f"Step 1 - Preferences: {leader_name} asked for {', '.join(requested)}"
        )
    else:
        steps.append(f"Step 1 - Preferences: {leader_name} has no seating preferences")

    steps.append(f"Step 2 - Candidates: {candidates} free seats scored")

    if matched:
        steps.append(
            f"Step 3 - Choice: seat {seat_id} scored {score} (matched {', '.join(matched)})"
        )
    else:
        steps.append(
            f"Step 3 - Choice: no seat matched, first free seat {seat_id} taken (score 0)"
        )

    unmet = [p for p in requested if p not in matched]
    if unmet:
        steps.append(f"Note: Unmet preferences (soft): {', '.join(unmet)}")

    return steps


def explain_team_placement(
    team_name: str,
    member_count: int,
    special_needs_count: int,
    table_ids: List[str],
    free_capacity: int,
    policy: str,
    zone_id: Optional[str] = None,
    fallback_note: Optional[str] = None,
    unseated_count: int = 0,
) -> List[str]:
    """Produce step-by-step explanation for a team placement."""
    steps = []

    steps.append(
        f"Step 1 - Team: {team_name} needs {member_count} seats "
        f"({special_needs_count} special-needs member{'s' if special_needs_count != 1 else ''} seated first)"
    )

    if zone_id:
        steps.append(f"Step 2 - Zone: department placed in {zone_id}")
    else:
        steps.append("Step 2 - Zone: no zone restriction (full table pool)")

    if not table_ids:
        steps.append("Step 3 - Table: no table with free capacity was available")
    elif len(table_ids) == 1:
        steps.append(
            f"Step 3 - Table: first fit {table_ids[0]} with {free_capacity} free seats"
        )
    else:
        steps.append(
            f"Step 3 - Tables: split across {len(table_ids)} tables ({', '.join(table_ids)})"
        )

    if fallback_note:
        steps.append(f"Note: {fallback_note}")

    if table_ids:
        steps.append(f"Step 4 - Seats: filled in {policy.replace('_', '-')} order")

    if unseated_count:
        steps.append(
            f"Step 5 - Shortfall: {unseated_count} member{'s' if unseated_count != 1 else ''} left unseated"
        )

    return steps
