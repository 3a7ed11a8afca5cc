"""Reconciliation modes and per-fork outcomes."""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional


class ReconcileMode(Enum):
    LIST_ONLY = "list"
    DRY_RUN = "dry-run"
    APPLY = "apply"


class ActionKind(Enum):
    REPORTED = "reported"
    SKIPPED = "skipped"
    WOULD_ADD = "would-add"
    ADDED = "added"
    ADD_FAILED = "add-failed"


@dataclass(frozen=True)
class ReconcileAction:
    """Terminal outcome for a single fork."""

    kind: ActionKind
    full_name: str
    remote_name: Optional[str] = None
    forks_count: Optional[int] = None
    reason: Optional[str] = None

    def describe(self) -> str:
        """Human-readable output line for this action."""
        if self.kind is ActionKind.REPORTED:
            return f"{self.full_name} | {self.forks_count}"
        if self.kind is ActionKind.SKIPPED:
            return f"= {self.remote_name}"
        if self.kind is ActionKind.WOULD_ADD:
            return f"(+) {self.remote_name}"
        if self.kind is ActionKind.ADDED:
            return f"Remote {self.remote_name} added"
        return f"Failed to add remote {self.remote_name}: {self.reason}"


def summarize(actions: Iterable[ReconcileAction]) -> Dict[ActionKind, int]:
    """Count actions per kind."""
    return dict(Counter(action.kind for action in actions))
