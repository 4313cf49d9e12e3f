from dataclasses import dataclass


@dataclass(frozen=True)
class Person:
    name: str
    score: int   # seniority / merit points, lower is served first

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f"Person '{self.name}' has a negative score ({self.score})")

    @property
    def label(self) -> str:
        """Roster rendering used in exports, e.g. 'Alice [10]'."""
        return f"{self.name} [{self.score}]"
