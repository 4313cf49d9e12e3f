from dataclasses import dataclass, field
from typing import List

from models.errors import CapacityExceeded
from models.group import Group
from models.person import Person
from config.defaults import ROSTER_SEPARATOR


@dataclass
class Household:
    name: str
    capacity: int
    building: str
    placed_groups: List[Group] = field(default_factory=list)  # arrival order

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError(f"Household '{self.name}' has a negative capacity ({self.capacity})")

    @property
    def occupancy(self) -> int:
        return sum(g.size for g in self.placed_groups)

    @property
    def remaining_capacity(self) -> int:
        return self.capacity - self.occupancy

    @property
    def is_full(self) -> bool:
        return self.occupancy >= self.capacity

    @property
    def occupants(self) -> List[Person]:
        return [m for g in self.placed_groups for m in g.members]

    @property
    def roster(self) -> str:
        """All occupants as 'name [score]', joined in arrival order."""
        return ROSTER_SEPARATOR.join(p.label for p in self.occupants)

    def can_fit(self, group: Group) -> bool:
        # Capacity is the maximum head count, so an exact fill is allowed.
        return self.occupancy + group.size <= self.capacity

    def attempt_admit(self, group: Group) -> None:
        """Place a group here, or raise CapacityExceeded and leave the household untouched."""
        if not self.can_fit(group):
            raise CapacityExceeded(self.name, group.size, self.remaining_capacity)
        self.placed_groups.append(group)
