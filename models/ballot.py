from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.errors import ConfigurationInconsistency
from models.group import Group
from models.household import Household


def _duplicates(names) -> List[str]:
    return sorted(name for name, count in Counter(names).items() if count > 1)


@dataclass
class Ballot:
    """One housing round: declared buildings, the households in them, and the groups still waiting."""
    buildings: List[str]
    accommodation: List[Household] = field(default_factory=list)
    pending_groups: List[Group] = field(default_factory=list)  # replaced by the unplaced residual after allocation
    allocated: bool = False

    def __post_init__(self):
        dupes = _duplicates(self.buildings)
        if dupes:
            raise ConfigurationInconsistency(f"Duplicate building names in ballot: {dupes}")

        dupes = _duplicates(h.name for h in self.accommodation)
        if dupes:
            raise ConfigurationInconsistency(f"Duplicate household names in ballot: {dupes}")

        seen = set()
        for g in self.pending_groups:
            if id(g) in seen:
                raise ConfigurationInconsistency(
                    f"Group '{g.label}' is queued more than once in the ballot"
                )
            seen.add(id(g))

    @property
    def household_names(self) -> List[str]:
        return [h.name for h in self.accommodation]

    @property
    def household_map(self) -> Dict[str, Household]:
        return {h.name: h for h in self.accommodation}

    def get_household(self, name: str) -> Optional[Household]:
        return self.household_map.get(name)

    @property
    def total_capacity(self) -> int:
        return sum(h.capacity for h in self.accommodation)

    @property
    def total_occupancy(self) -> int:
        return sum(h.occupancy for h in self.accommodation)

    @property
    def placed_groups(self) -> List[Group]:
        return [g for h in self.accommodation for g in h.placed_groups]

    def households_in(self, building: str) -> List[Household]:
        """Households of a building, in stored order."""
        return [h for h in self.accommodation if h.building == building]
