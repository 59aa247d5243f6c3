"""Tests for department -> zone selection."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.person import Person, Role
from models.floor import Seat, Table
from models.team import Team
from models.allocation import AllocationState
from engine.clustering import group_tables_into_zones
from engine.zone_assigner import (
    get_department_size,
    get_zone_free_capacity,
    select_zone,
    assign_department_to_zone,
    assign_department_to_tables,
)


def make_team(team_id, size, department="Engineering"):
    members = [Person(f"{team_id}-M{i}", f"Member {i}", "M", department, Role.EMPLOYEE)
               for i in range(1, size + 1)]
    return Team(team_id, f"Team {team_id}", department, members)


def make_floor(layout):
    """layout: list of (table_id, x, capacity). Each table gets `capacity` seats."""
    tables, seats_by_table = [], {}
    for table_id, x, capacity in layout:
        tables.append(Table(table_id, x, 0, 160, 60, capacity))
        seats_by_table[table_id] = [
            Seat(f"{table_id}-S{i:02d}", x + 10 + i * 15, -15, table_id)
            for i in range(capacity)
        ]
    state = AllocationState(
        free_seat_ids={s.seat_id for ss in seats_by_table.values() for s in ss}
    )
    return tables, seats_by_table, state


def two_zone_floor():
    """POD-01 holds 8 seats, POD-02 holds 15."""
    return make_floor([("A", 0, 8), ("B", 3000, 8), ("C", 3200, 7)])


class TestZoneCapacity:
    def test_free_capacity(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        assert [get_zone_free_capacity(z, tables, seats_by_table, state) for z in zones] == [8, 15]

    def test_consumed_tables_do_not_count(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        state.consumed_table_ids.add("B")
        assert get_zone_free_capacity(zones[1], tables, seats_by_table, state) == 7

    def test_select_zone_first_that_fits(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        assert select_zone(8, zones, tables, seats_by_table, state).zone_id == "POD-01"
        assert select_zone(12, zones, tables, seats_by_table, state).zone_id == "POD-02"
        assert select_zone(30, zones, tables, seats_by_table, state) is None

    def test_department_size_excludes_placed(self):
        teams = [make_team("T001", 5), make_team("T002", 3)]
        state = AllocationState(placed_person_ids={"T001-M1"})
        assert get_department_size(teams, state) == 7


class TestAssignDepartmentToZone:
    def test_department_goes_to_zone_that_fits(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        warnings = []
        zone_id, placements = assign_department_to_zone(
            "Engineering", [make_team("T001", 6), make_team("T002", 6)],
            zones, tables, seats_by_table, state, warnings,
        )

        assert zone_id == "POD-02"
        assert all(p.is_complete for p in placements)
        used = {tid for p in placements for tid in p.table_ids}
        assert used == {"B", "C"}
        assert warnings == []

    def test_larger_teams_placed_first(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        _, placements = assign_department_to_zone(
            "Engineering", [make_team("T001", 3), make_team("T002", 7)],
            zones, tables, seats_by_table, state, [],
        )
        assert [p.team_id for p in placements] == ["T002", "T001"]

    def test_full_pool_fallback(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        warnings = []
        zone_id, placements = assign_department_to_zone(
            "Engineering", [make_team("T001", 8), make_team("T002", 8), make_team("T003", 4)],
            zones, tables, seats_by_table, state, warnings, {"zone_fallback": "full_pool"},
        )

        assert zone_id is None
        assert warnings[0].kind == "zone_capacity_shortfall"
        assert sum(p.seated_count for p in placements) == 20

    def test_largest_zone_fallback(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        zone_id, placements = assign_department_to_zone(
            "Engineering", [make_team("T001", 8), make_team("T002", 7), make_team("T003", 5)],
            zones, tables, seats_by_table, state, [], {"zone_fallback": "largest_zone"},
        )
        # POD-02 only lends its tables; it is too small to be the selected zone
        assert zone_id is None
        assert all(p.zone_id is None for p in placements)
        assert placements[0].table_ids == ["B"]
        assert placements[1].table_ids == ["C"]

    def test_no_fallback_leaves_department_unseated(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        warnings = []
        zone_id, placements = assign_department_to_zone(
            "Engineering", [make_team("T001", 10), make_team("T002", 10)],
            zones, tables, seats_by_table, state, warnings, {"zone_fallback": "none"},
        )

        assert zone_id is None
        assert all(p.status == "unseated" for p in placements)
        assert [w.kind for w in warnings] == [
            "zone_capacity_shortfall", "team_capacity_shortfall", "team_capacity_shortfall",
        ]
        assert len(state.free_seat_ids) == 23

    def test_unknown_fallback(self):
        tables, seats_by_table, state = two_zone_floor()
        zones = group_tables_into_zones(tables)
        with pytest.raises(ValueError):
            assign_department_to_zone(
                "Engineering", [make_team("T001", 2)], zones, tables,
                seats_by_table, state, [], {"zone_fallback": "anywhere"},
            )


class TestAssignDepartmentToTables:
    def test_uses_full_pool_in_scan_order(self):
        tables, seats_by_table, state = two_zone_floor()
        placements = assign_department_to_tables(
            "Engineering", [make_team("T001", 4), make_team("T002", 8)],
            tables, seats_by_table, state, [],
        )
        assert [p.team_id for p in placements] == ["T002", "T001"]
        assert placements[0].table_ids == ["A"]
        assert placements[1].table_ids == ["B"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
