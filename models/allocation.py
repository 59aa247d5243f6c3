from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from models.floor import Zone


@dataclass(frozen=True)
class Assignment:
    seat_id: str
    person_id: str
    person_name: str
    role: str
    gender: str
    department: str
    team_id: str
    table_id: Optional[str]
    x: float
    y: float


@dataclass
class AllocationWarning:
    kind: str  # "zone_capacity_shortfall", "team_capacity_shortfall", "malformed_input", ...
    message: str
    department: Optional[str] = None
    team_id: Optional[str] = None
    table_id: Optional[str] = None
    person_ids: List[str] = field(default_factory=list)


@dataclass
class TeamPlacement:
    """Outcome of placing one team."""
    team_id: str
    team_name: str
    department: str
    member_count: int               # members left to seat after excluding leaders
    table_ids: List[str] = field(default_factory=list)
    zone_id: Optional[str] = None
    assignments: List[Assignment] = field(default_factory=list)
    unseated_person_ids: List[str] = field(default_factory=list)
    used_fallback: bool = False
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def seated_count(self) -> int:
        return len(self.assignments)

    @property
    def is_complete(self) -> bool:
        return not self.unseated_person_ids

    @property
    def status(self) -> str:
        if not self.unseated_person_ids:
            return "complete"
        if self.assignments:
            return "partial"
        return "unseated"


@dataclass
class AllocationState:
    """Run-local consumption state. Built fresh for every run, never shared."""
    free_seat_ids: Set[str] = field(default_factory=set)
    consumed_table_ids: Set[str] = field(default_factory=set)
    placed_person_ids: Set[str] = field(default_factory=set)


@dataclass
class AllocationSummary:
    total_seats: int = 0
    seats_used: int = 0
    people_total: int = 0
    people_seated: int = 0
    people_unseated: int = 0
    leaders_seated: int = 0
    teams_total: int = 0
    teams_fully_seated: int = 0
    teams_partially_seated: int = 0
    teams_unseated: int = 0
    zones_total: int = 0
    zones_used: int = 0
    warning_count: int = 0

    @property
    def seat_utilization_pct(self) -> float:
        return self.seats_used / self.total_seats if self.total_seats > 0 else 0.0


@dataclass
class AllocationResult:
    assignments: List[Assignment] = field(default_factory=list)
    team_placements: List[TeamPlacement] = field(default_factory=list)
    zones: List[Zone] = field(default_factory=list)
    warnings: List[AllocationWarning] = field(default_factory=list)
    summary: AllocationSummary = field(default_factory=AllocationSummary)
    leader_explanations: Dict[str, List[str]] = field(default_factory=dict)
    unseated_leader_ids: List[str] = field(default_factory=list)

    def seat_map(self) -> Dict[str, Assignment]:
        return {a.seat_id: a for a in self.assignments}

    def unseated_person_ids(self) -> List[str]:
        ids = list(self.unseated_leader_ids)
        for p in self.team_placements:
            ids.extend(p.unseated_person_ids)
        return ids
