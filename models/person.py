from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(str, Enum):
    LEADER = "LEADER"
    MANAGER = "MANAGER"
    SUB_MANAGER = "SUB_MANAGER"
    EMPLOYEE = "EMPLOYEE"


@dataclass(frozen=True)
class Person:
    person_id: str
    name: str
    gender: str                     # "M" or "F"
    department: str
    role: Role
    special_needs: bool = False
    reports_to: Optional[str] = None  # manager / sub-manager / leader id

    @property
    def is_leader(self) -> bool:
        return self.role == Role.LEADER
