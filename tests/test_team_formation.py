"""Tests for turning the reporting hierarchy into teams."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.person import Person, Role
from data.team_formation import split_roster, form_teams, get_teams_by_department


def make_person(pid, role, reports_to=None, department="Engineering", name=None):
    return Person(pid, name or pid, "M", department, role, reports_to=reports_to)


def make_roster():
    """L1 -> M1 (E1, E2) ; L1 -> M2 (E3, SM1 -> E4, E5) ; L2 in Product -> M3 (E6)."""
    return [
        make_person("L1", Role.LEADER),
        make_person("M1", Role.MANAGER, "L1", name="Asha"),
        make_person("E1", Role.EMPLOYEE, "M1"),
        make_person("E2", Role.EMPLOYEE, "M1"),
        make_person("M2", Role.MANAGER, "L1", name="Ravi"),
        make_person("E3", Role.EMPLOYEE, "M2"),
        make_person("SM1", Role.SUB_MANAGER, "M2", name="Kiran"),
        make_person("E4", Role.EMPLOYEE, "SM1"),
        make_person("E5", Role.EMPLOYEE, "SM1"),
        make_person("L2", Role.LEADER, department="Product"),
        make_person("M3", Role.MANAGER, "L2", department="Product", name="Meera"),
        make_person("E6", Role.EMPLOYEE, "M3", department="Product"),
    ]


class TestSplitRoster:
    def test_leaders_separated(self):
        leaders, others = split_roster(make_roster())
        assert [p.person_id for p in leaders] == ["L1", "L2"]
        assert len(others) == 10


class TestFormTeams:
    def test_team_per_manager_and_sub_manager(self):
        teams = form_teams(make_roster())
        assert [t.team_id for t in teams] == ["T001", "T002", "T003", "T004"]
        assert [t.team_name for t in teams] == [
            "Asha's Team", "Ravi's Team", "Kiran's Team", "Meera's Team",
        ]

    def test_members(self):
        teams = {t.team_name: t for t in form_teams(make_roster())}
        assert [m.person_id for m in teams["Asha's Team"].members] == ["M1", "E1", "E2"]
        assert [m.person_id for m in teams["Ravi's Team"].members] == ["M2", "E3"]
        assert [m.person_id for m in teams["Kiran's Team"].members] == ["SM1", "E4", "E5"]

    def test_everyone_but_leaders_in_exactly_one_team(self):
        people = make_roster()
        teams = form_teams(people)
        member_ids = [m.person_id for t in teams for m in t.members]
        _, others = split_roster(people)
        assert sorted(member_ids) == sorted(p.person_id for p in others)

    def test_hierarchy_links(self):
        teams = {t.team_name: t for t in form_teams(make_roster())}
        kiran = teams["Kiran's Team"]
        assert kiran.leader_id == "L1"
        assert kiran.manager_id == "M2"
        assert kiran.sub_manager_id == "SM1"
        assert teams["Meera's Team"].leader_id == "L2"
        assert teams["Meera's Team"].department == "Product"

    def test_unknown_manager_has_no_leader(self):
        people = [make_person("M1", Role.MANAGER, "NOBODY"), make_person("E1", Role.EMPLOYEE, "M1")]
        teams = form_teams(people)
        assert teams[0].leader_id is None
        assert teams[0].size == 2

    def test_by_department(self):
        teams = form_teams(make_roster())
        assert [t.team_name for t in get_teams_by_department("Product", teams)] == ["Meera's Team"]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
