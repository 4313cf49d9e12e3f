from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from models.allocation import AllocationResult
from models.ballot import Ballot


@dataclass
class AllocationRound:
    round_id: str
    name: str
    description: str
    default_building_order: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    is_locked: bool = False
    ballot: Optional[Ballot] = None             # allocated copy of the base ballot
    result: Optional[AllocationResult] = None
    last_run_at: Optional[datetime] = None

    @property
    def has_run(self) -> bool:
        return self.result is not None
