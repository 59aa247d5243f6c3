from dataclasses import dataclass, fields
from typing import List


@dataclass(frozen=True)
class PreferenceSet:
    """Soft seating wishes of a leader. Unset flags mean "no preference"."""
    near_window: bool = False
    near_entry: bool = False
    quiet_zone: bool = False
    corner_edge: bool = False
    near_team: bool = False
    premium: bool = False

    def active_flags(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]

    @property
    def is_empty(self) -> bool:
        return not self.active_flags()


@dataclass(frozen=True)
class SeatAttributes:
    """Steward-assigned tags on a physical seat."""
    near_window: bool = False
    near_entry: bool = False
    corner: bool = False
    quiet_zone: bool = False
    accessible: bool = False
    premium: bool = False
