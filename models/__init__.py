from models.person import Person, Role
from models.preferences import PreferenceSet, SeatAttributes
from models.floor import Seat, Table, Zone
from models.team import Team
from models.allocation import (
    Assignment, AllocationWarning, TeamPlacement, AllocationState,
    AllocationSummary, AllocationResult,
)
