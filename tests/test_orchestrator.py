"""Tests for the end-to-end allocation run."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.person import Person, Role
from models.preferences import PreferenceSet, SeatAttributes
from models.floor import Seat, Table
from models.team import Team
from engine.orchestrator import run_allocation
from config.defaults import DEPARTMENTS
from data.loader import parse_tables, parse_seats, parse_people, parse_preferences
from data.sample_data import (
    generate_tables_df, generate_seats_df, generate_people_df, generate_preferences_df,
)
from data.table_mapping import map_seats_to_tables
from data.team_formation import split_roster, form_teams


def make_leader(pid="L01", department="Engineering"):
    return Person(pid, f"Leader {pid}", "F", department, Role.LEADER)


def make_team(team_id, size, department="Engineering", member_prefix=None):
    prefix = member_prefix or team_id
    members = [Person(f"{prefix}-M{i}", f"Member {i}", "M", department, Role.EMPLOYEE)
               for i in range(1, size + 1)]
    return Team(team_id, f"Team {team_id}", department, members)


def make_floor(layout, seats_per_table=None):
    """layout: list of (table_id, x, y, capacity); seats in two rows of four."""
    tables, seats = [], []
    for table_id, x, y, capacity in layout:
        tables.append(Table(table_id, x, y, 160, 60, capacity))
        count = seats_per_table or capacity
        for i in range(count):
            row, col = divmod(i, 4)
            seats.append(Seat(
                f"{table_id}-S{i + 1:02d}",
                x + 20 + col * 40,
                y - 15 if row == 0 else y + 75,
                table_id,
            ))
    return tables, seats


def pod_floor():
    """Two pods of two 8-seat tables each."""
    return make_floor([
        ("A", 0, 0, 8), ("B", 200, 0, 8),
        ("C", 2000, 0, 8), ("D", 2200, 0, 8),
    ])


def sample_inputs(seed=42):
    people_df = generate_people_df(seed=seed)
    tables = parse_tables(generate_tables_df())
    seats = map_seats_to_tables(parse_seats(generate_seats_df(seed=seed)), tables, only_unmapped=True)
    people = parse_people(people_df)
    leaders, _ = split_roster(people)
    teams = form_teams(people)
    preferences = parse_preferences(generate_preferences_df(people_df, seed=seed))
    return leaders, teams, seats, tables, preferences


class TestRunAllocation:
    def test_basic_run(self):
        tables, seats = pod_floor()
        result = run_allocation(
            [make_leader()], [make_team("T001", 5), make_team("T002", 4)], seats, tables,
        )

        assert result.summary.people_seated == 10
        assert result.summary.people_unseated == 0
        assert result.summary.teams_fully_seated == 2
        assert len(result.zones) == 2
        assert result.warnings == []

    def test_leader_team_id(self):
        tables, seats = pod_floor()
        result = run_allocation([make_leader("L07")], [], seats, tables)
        assert result.assignments[0].team_id == "LEADER_L07"
        assert result.assignments[0].role == "LEADER"
        assert "L07" in result.leader_explanations

    def test_leader_gets_preferred_seat(self):
        tables = [Table("A", 0, 0, 160, 60, 2)]
        seats = [
            Seat("S1", 20, -15, "A"),
            Seat("S2", 60, -15, "A", SeatAttributes(near_window=True)),
        ]
        result = run_allocation(
            [make_leader()], [], seats, tables,
            preferences={"L01": PreferenceSet(near_window=True)},
        )
        assert result.assignments[0].seat_id == "S2"

    def test_leader_without_preferences_takes_lowest_seat_id(self):
        tables, seats = pod_floor()
        result = run_allocation([make_leader()], [], seats, tables)
        assert result.assignments[0].seat_id == "A-S01"

    def test_department_lands_in_pod_that_fits(self):
        tables, seats = make_floor([
            ("A", 0, 0, 8),
            ("B", 2000, 0, 8), ("C", 2200, 0, 7),
        ])
        result = run_allocation([], [make_team("T001", 6), make_team("T002", 6)], seats, tables)

        used_tables = {a.table_id for a in result.assignments}
        assert used_tables == {"B", "C"}
        assert {p.zone_id for p in result.team_placements} == {"POD-02"}

    def test_strict_overflow_on_single_table(self):
        tables, seats = make_floor([("A", 0, 0, 6)], seats_per_table=8)
        result = run_allocation([], [make_team("T001", 7)], seats, tables,
                                rule_config={"strict_table_constraint": True})

        placement = result.team_placements[0]
        assert placement.seated_count == 6
        assert len(placement.unseated_person_ids) == 1
        assert placement.status == "partial"
        assert result.summary.people_unseated == 1
        assert "team_capacity_shortfall" in [w.kind for w in result.warnings]

    def test_strict_mode_keeps_teams_on_one_table(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        result = run_allocation(leaders, teams, seats, tables, preferences,
                                rule_config={"strict_table_constraint": True})
        for p in result.team_placements:
            assert len({a.table_id for a in p.assignments}) <= 1

    def test_department_roster_sets_run_order(self):
        tables, seats = pod_floor()
        teams = [make_team("T001", 8, department="Product"),
                 make_team("T002", 8, department="Engineering")]

        by_appearance = run_allocation([], teams, seats, tables)
        by_roster = run_allocation([], teams, seats, tables, departments=DEPARTMENTS)

        first = {p.team_id: p.table_ids for p in by_appearance.team_placements}
        assert first == {"T001": ["A"], "T002": ["B"]}
        ordered = {p.team_id: p.table_ids for p in by_roster.team_placements}
        assert ordered == {"T002": ["A"], "T001": ["B"]}

    def test_split_teams_flagged_as_shortfall(self):
        tables, seats = make_floor([("A", 0, 0, 4), ("B", 200, 0, 4)])
        result = run_allocation([], [make_team("T001", 6)], seats, tables,
                                rule_config={"strict_table_constraint": False})

        shortfall_teams = {w.team_id for w in result.warnings
                           if w.kind.endswith("capacity_shortfall")}
        placement = result.team_placements[0]
        assert placement.is_complete
        assert {a.table_id for a in placement.assignments} == {"A", "B"}
        assert "T001" in shortfall_teams

    def test_non_strict_cohesion_on_sample_floor(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        result = run_allocation(leaders, teams, seats, tables, preferences,
                                rule_config={"strict_table_constraint": False})

        shortfall_teams = {w.team_id for w in result.warnings
                           if w.kind.endswith("capacity_shortfall")}
        for p in result.team_placements:
            if p.team_id not in shortfall_teams:
                assert len({a.table_id for a in p.assignments}) <= 1

    def test_manager_proximity_mode_has_no_zones(self):
        tables, seats = pod_floor()
        result = run_allocation([], [make_team("T001", 4)], seats, tables,
                                rule_config={"allocation_mode": "manager_proximity"})
        assert result.zones == []
        assert result.team_placements[0].table_ids == ["A"]

    def test_no_seats_leaves_leader_unseated(self):
        result = run_allocation([make_leader()], [], [], [])
        assert result.unseated_leader_ids == ["L01"]
        assert result.summary.people_unseated == 1
        assert result.warnings[0].kind == "leader_unseated"

    @pytest.mark.parametrize("key, value", [
        ("allocation_mode", "random"),
        ("sequencing_policy", "zigzag"),
        ("zone_fallback", "anywhere"),
    ])
    def test_invalid_config(self, key, value):
        tables, seats = pod_floor()
        with pytest.raises(ValueError):
            run_allocation([], [], seats, tables, rule_config={key: value})


class TestMalformedInput:
    def test_bad_tables_are_skipped(self):
        tables, seats = pod_floor()
        tables = tables + [Table("A", 5000, 0, 160, 60, 8), Table("Z", 6000, 0, 160, 60, 0)]
        result = run_allocation([], [make_team("T001", 4)], seats, tables)

        kinds = [w.kind for w in result.warnings]
        assert kinds.count("malformed_input") == 2
        assert result.summary.people_seated == 4

    def test_seat_on_unknown_table_is_for_leaders_only(self):
        tables = [Table("A", 0, 0, 160, 60, 4)]
        seats = [Seat("S0", 500, 500, "GHOST")] + [
            Seat(f"S{i}", 20 + i * 30, -15, "A") for i in range(1, 5)
        ]
        result = run_allocation([make_leader()], [make_team("T001", 4)], seats, tables)

        seat_map = result.seat_map()
        assert seat_map["S0"].person_id == "L01"
        assert result.summary.people_seated == 5

    def test_duplicate_person_not_seated_twice(self):
        tables, seats = pod_floor()
        teams = [make_team("T001", 3), make_team("T002", 3, member_prefix="T001")]
        result = run_allocation([], teams, seats, tables)

        person_ids = [a.person_id for a in result.assignments]
        assert len(person_ids) == len(set(person_ids)) == 3
        assert "duplicate_person" in [w.kind for w in result.warnings]

    def test_empty_team_is_skipped(self):
        tables, seats = pod_floor()
        result = run_allocation([], [Team("T001", "Empty", "Engineering", [])], seats, tables)
        assert result.team_placements == []
        assert result.warnings[0].kind == "malformed_input"


class TestInvariants:
    def test_no_double_booking(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        result = run_allocation(leaders, teams, seats, tables, preferences)

        seat_ids = [a.seat_id for a in result.assignments]
        person_ids = [a.person_id for a in result.assignments]
        assert len(seat_ids) == len(set(seat_ids))
        assert len(person_ids) == len(set(person_ids))

    def test_table_capacity_respected(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        result = run_allocation(leaders, teams, seats, tables, preferences)

        capacity = {t.table_id: t.capacity for t in tables}
        used = {}
        for a in result.assignments:
            used[a.table_id] = used.get(a.table_id, 0) + 1
        for table_id, count in used.items():
            assert count <= capacity[table_id]

    def test_everyone_accounted_for(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        result = run_allocation(leaders, teams, seats, tables, preferences)

        expected = {p.person_id for p in leaders} | {m.person_id for t in teams for m in t.members}
        seated = {a.person_id for a in result.assignments}
        assert seated | set(result.unseated_person_ids()) == expected

    def test_deterministic(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        first = run_allocation(leaders, teams, seats, tables, preferences)
        second = run_allocation(leaders, teams, seats, tables, preferences)
        assert first.assignments == second.assignments
        assert first.warnings == second.warnings

    def test_inputs_not_mutated(self):
        leaders, teams, seats, tables, preferences = sample_inputs()
        sizes = [t.size for t in teams]
        seats_before = list(seats)
        run_allocation(leaders, teams, seats, tables, preferences)
        assert [t.size for t in teams] == sizes
        assert seats == seats_before


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
