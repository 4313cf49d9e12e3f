from models.errors import (
    BallotError, ConfigurationInconsistency, DegenerateGroupError,
    BallotAlreadyAllocated, CapacityExceeded,
)
from models.person import Person
from models.group import Group
from models.household import Household
from models.ballot import Ballot
from models.allocation import Placement, AllocationResult
from models.round import AllocationRound
from models.audit import AuditEntry
