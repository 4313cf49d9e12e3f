from dataclasses import dataclass, field
from typing import List, Optional

from models.errors import DegenerateGroupError
from models.person import Person
from config.defaults import ROSTER_SEPARATOR


@dataclass
class Group:
    members: List[Person]
    household_preferences: List[Optional[str]] = field(default_factory=list)  # ranked household names, None = no pick at that rank
    building_preferences: Optional[List[str]] = None  # None -> default building order
    group_id: Optional[str] = None

    def __post_init__(self):
        if not self.members:
            raise DegenerateGroupError(
                f"Group '{self.group_id or '?'}' has no members; average score is undefined"
            )

    @property
    def total_score(self) -> int:
        return sum(m.score for m in self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def average_score(self) -> float:
        return self.total_score / self.size

    @property
    def roster(self) -> str:
        return ROSTER_SEPARATOR.join(m.label for m in self.members)

    @property
    def label(self) -> str:
        return self.group_id if self.group_id else self.roster
