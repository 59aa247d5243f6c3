from dataclasses import dataclass, field
from typing import List, Optional

from models.person import Person


@dataclass
class Team:
    team_id: str
    team_name: str
    department: str
    members: List[Person] = field(default_factory=list)
    leader_id: Optional[str] = None
    manager_id: Optional[str] = None
    sub_manager_id: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.members)
