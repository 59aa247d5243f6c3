"""Table/zone utilization, team cohesion and preference satisfaction views."""

from collections import defaultdict
from typing import Dict, List

from models.floor import Seat, Table
from models.preferences import PreferenceSet
from models.allocation import AllocationResult
from engine.scoring import matched_preferences
from engine.clustering import get_table_zone_map, get_zone_capacity


def get_table_utilization(
    tables: List[Table],
    seats: List[Seat],
    result: AllocationResult,
) -> List[dict]:
    """Compute utilization stats per table."""
    seat_counts: Dict[str, int] = defaultdict(int)
    for s in seats:
        if s.table_id:
            seat_counts[s.table_id] += 1

    usage = {}
    for a in result.assignments:
        if a.table_id is None:
            continue
        if a.table_id not in usage:
            usage[a.table_id] = {"teams": {}, "total_used": 0}
        usage[a.table_id]["teams"][a.team_id] = usage[a.table_id]["teams"].get(a.team_id, 0) + 1
        usage[a.table_id]["total_used"] += 1

    zone_of = get_table_zone_map(result.zones)

    results = []
    for t in tables:
        used = usage.get(t.table_id, {}).get("total_used", 0)
        teams = usage.get(t.table_id, {}).get("teams", {})
        results.append({
            "table_id": t.table_id,
            "zone_id": zone_of.get(t.table_id),
            "capacity": t.capacity,
            "mapped_seats": seat_counts.get(t.table_id, 0),
            "used_seats": used,
            "available_seats": max(0, t.capacity - used),
            "utilization_pct": used / t.capacity if t.capacity > 0 else 0,
            "team_count": len(teams),
            "teams": teams,
        })
    return results


def get_zone_utilization(
    tables: List[Table],
    seats: List[Seat],
    result: AllocationResult,
) -> List[dict]:
    """Roll table utilization up to zones."""
    by_table = {row["table_id"]: row for row in get_table_utilization(tables, seats, result)}
    zone_of = get_table_zone_map(result.zones)
    departments: Dict[str, set] = defaultdict(set)
    for a in result.assignments:
        if a.table_id in zone_of:
            departments[zone_of[a.table_id]].add(a.department)

    results = []
    for z in result.zones:
        rows = [by_table[tid] for tid in z.table_ids if tid in by_table]
        capacity = get_zone_capacity(tables, z)
        used = sum(r["used_seats"] for r in rows)
        results.append({
            "zone_id": z.zone_id,
            "name": z.name,
            "table_count": len(z.table_ids),
            "capacity": capacity,
            "used_seats": used,
            "utilization_pct": used / capacity if capacity > 0 else 0,
            "departments": sorted(departments.get(z.zone_id, set())),
        })
    return results


def get_split_teams(result: AllocationResult) -> List[str]:
    """Describe teams whose seated members span more than one table."""
    messages = []
    for p in result.team_placements:
        tables = sorted({a.table_id for a in p.assignments if a.table_id})
        if len(tables) > 1:
            messages.append(
                f"{p.team_name}: seated across {len(tables)} tables ({', '.join(tables)})"
            )
    return messages


def get_preference_satisfaction(
    result: AllocationResult,
    seats: List[Seat],
    preferences: Dict[str, PreferenceSet],
) -> List[dict]:
    """Per leader: which requested preferences the assigned seat satisfies."""
    seat_map = {s.seat_id: s for s in seats}
    rows = []
    for a in result.assignments:
        if a.person_id not in preferences:
            continue
        prefs = preferences[a.person_id]
        requested = prefs.active_flags()
        matched = matched_preferences(seat_map[a.seat_id], prefs) if a.seat_id in seat_map else []
        rows.append({
            "leader_id": a.person_id,
            "leader_name": a.person_name,
            "seat_id": a.seat_id,
            "requested": requested,
            "matched": matched,
            "satisfaction_pct": len(matched) / len(requested) if requested else 1.0,
        })
    return rows
