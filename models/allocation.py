from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models.group import Group


@dataclass
class Placement:
    group: Group
    tier: str                       # "household_preference", "building_preference", "unplaced"
    household_name: Optional[str] = None
    building: Optional[str] = None
    rank: Optional[int] = None      # 1-based position within the tier that succeeded
    attempts: int = 0               # attempt_admit calls made for this group
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def is_placed(self) -> bool:
        return self.household_name is not None


@dataclass
class AllocationResult:
    default_building_order: List[str]
    processing_order: List[Group] = field(default_factory=list)
    placements: List[Placement] = field(default_factory=list)  # one per group, processing order
    unplaced: List[Group] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(1 for p in self.placements if p.is_placed)

    @property
    def placed_people(self) -> int:
        return sum(p.group.size for p in self.placements if p.is_placed)

    @property
    def unplaced_people(self) -> int:
        return sum(g.size for g in self.unplaced)

    def tier_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for p in self.placements:
            counts[p.tier] = counts.get(p.tier, 0) + 1
        return counts

    def placement_for(self, group: Group) -> Optional[Placement]:
        return next((p for p in self.placements if p.group is group), None)
