"""Exception taxonomy for ballot construction and allocation."""


class BallotError(Exception):
    """Base class for all ballot errors."""


class ConfigurationInconsistency(BallotError):
    """Building/household references do not line up. Fatal for an allocation run."""


class DegenerateGroupError(BallotError, ValueError):
    """A group was constructed with no members."""


class BallotAlreadyAllocated(BallotError):
    """Allocation was requested on a ballot that has already been allocated."""


class CapacityExceeded(BallotError):
    """A household cannot take a group. Expected during allocation; never fatal."""

    def __init__(self, household_name: str, requested: int, available: int):
        self.household_name = household_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Household '{household_name}' has {available} free place(s), "
            f"group of {requested} does not fit"
        )
