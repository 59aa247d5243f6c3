from dataclasses import dataclass, field
from typing import Optional, Tuple

from models.preferences import SeatAttributes


@dataclass(frozen=True)
class Seat:
    seat_id: str
    x: float
    y: float
    table_id: Optional[str] = None  # resolved by the seat -> table mapping step
    attributes: SeatAttributes = field(default_factory=SeatAttributes)


@dataclass(frozen=True)
class Table:
    table_id: str
    x: float          # top-left corner
    y: float
    width: float
    height: float
    capacity: int
    zone_id: Optional[str] = None

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass(frozen=True)
class Zone:
    """A pod: spatial cluster of nearby tables allocated as one unit."""
    zone_id: str
    name: str
    table_ids: Tuple[str, ...]
    x: float
    y: float
    width: float
    height: float
