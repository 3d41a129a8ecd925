from dataclasses import dataclass, field
from typing import Any, List

"""A single remote change computed by diffing desired against current metadata."""
@dataclass(frozen=True)
class PlannedUpdate:
    field: str
    value: Any


"""Outcome of one synchronization run."""
@dataclass
class SyncResult:
    repo: str
    updates: List[PlannedUpdate] = field(default_factory=list)
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.updates) and not self.dry_run
