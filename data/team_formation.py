"""Team formation: turn the reporting hierarchy into allocation teams.

- every manager forms a team with their direct employee reports
- every sub-manager forms a further team with their own direct reports
"""

import logging
from typing import Dict, List, Optional, Tuple

from models.person import Person, Role
from models.team import Team

logger = logging.getLogger(__name__)


def split_roster(people: List[Person]) -> Tuple[List[Person], List[Person]]:
    """Separate leaders from everyone else, keeping input order."""
    leaders = [p for p in people if p.role == Role.LEADER]
    others = [p for p in people if p.role != Role.LEADER]
    return leaders, others


def _direct_reports(person_id: str, people: List[Person]) -> List[Person]:
    return [p for p in people if p.reports_to == person_id and p.role == Role.EMPLOYEE]


def _resolve_leader(person: Person, by_id: Dict[str, Person]) -> Optional[str]:
    current = person
    seen = set()
    while current.reports_to and current.reports_to not in seen:
        seen.add(current.person_id)
        parent = by_id.get(current.reports_to)
        if parent is None:
            return None
        if parent.role == Role.LEADER:
            return parent.person_id
        current = parent
    return None


def form_teams(people: List[Person]) -> List[Team]:
    """Form teams in manager order. Team ids are T001, T002, ..."""
    by_id = {p.person_id: p for p in people}
    managers = [p for p in people if p.role == Role.MANAGER]
    sub_managers = [p for p in people if p.role == Role.SUB_MANAGER]

    teams: List[Team] = []

    def _add(head: Person, manager: Person, sub_manager: Optional[Person]):
        teams.append(Team(
            team_id=f"T{len(teams) + 1:03d}",
            team_name=f"{head.name}'s Team",
            department=head.department,
            members=[head] + _direct_reports(head.person_id, people),
            leader_id=_resolve_leader(manager, by_id),
            manager_id=manager.person_id,
            sub_manager_id=sub_manager.person_id if sub_manager else None,
        ))

    for manager in managers:
        subs = [s for s in sub_managers if s.reports_to == manager.person_id]
        # the manager keeps a team of their own so they are never left out
        _add(manager, manager, None)
        for sub in subs:
            _add(sub, manager, sub)

    logger.info("Formed %d teams from organizational hierarchy", len(teams))
    return teams


def get_teams_by_department(department: str, teams: List[Team]) -> List[Team]:
    return [t for t in teams if t.department == department]
