"""
import_engine.report - Structured result of one import run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class ImportState(str, enum.Enum):
    IDLE = "idle"
    READING = "reading"
    PARSING = "parsing"
    PERSISTING = "persisting"
    COMPLETED = "completed"
    FAILED = "failed"


# state → states it may move to
TRANSITIONS: dict[ImportState, frozenset[ImportState]] = {
    ImportState.IDLE:       frozenset({ImportState.READING}),
    ImportState.READING:    frozenset({ImportState.PARSING, ImportState.FAILED}),
    ImportState.PARSING:    frozenset({ImportState.PERSISTING, ImportState.FAILED}),
    ImportState.PERSISTING: frozenset({ImportState.COMPLETED}),
    ImportState.COMPLETED:  frozenset(),
    ImportState.FAILED:     frozenset(),
}


@dataclass
class ImportReport:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)   # "Record N: reason"
    state: ImportState = ImportState.IDLE
    message: str = ""                                  # fatal error, if any
    tier: str | None = None

    def advance(self, new_state: ImportState):
        if new_state not in TRANSITIONS[self.state]:
            raise RuntimeError(f"illegal import transition {self.state.value} → {new_state.value}")
        self.state = new_state

    def fail(self, message: str):
        self.advance(ImportState.FAILED)
        self.message = message

    def add_success(self):
        self.succeeded += 1

    def add_error(self, record: int, reason: str):
        self.errors.append(f"Record {record}: {reason}")
        self.failed += 1

    @property
    def finished(self) -> bool:
        return self.state in (ImportState.COMPLETED, ImportState.FAILED)

    @property
    def total_failure(self) -> bool:
        """Completed, but not a single record made it in."""
        return self.state is ImportState.COMPLETED and self.succeeded == 0

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "errors": self.errors,
            "message": self.message,
            "tier": self.tier,
            "total_failure": self.total_failure,
        }
