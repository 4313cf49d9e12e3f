from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditEntry:
    timestamp: datetime
    action: str              # "upload", "generate", "allocate", "lock", "reset", "delete"
    round_id: str
    household_name: Optional[str]
    field_changed: str
    old_value: str
    new_value: str
    rationale: str = ""
