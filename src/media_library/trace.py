"""PipelineTrace and TraceEntry — debug execution recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class Phase(Enum):
    """Pipeline phases in execution order."""

    ENTER = "enter"
    PRE = "pre"
    MUTATE = "mutate"
    GATE = "gate"
    PAGE = "page"
    REJECTED = "rejected"
    POST = "post"


@dataclass(frozen=True)
class TraceEntry:
    """Single phase execution record."""

    phase: Phase
    duration_ms: float
    outcome: Literal["OK", "FAILED"]
    reason: str | None = None


@dataclass
class PipelineTrace:
    """Structured record of a single pipeline pass."""

    entries: list[TraceEntry] = field(default_factory=list)
    total_duration_ms: float = 0.0
    outcome: Literal["OK", "ABORTED", "ERROR"] = "OK"
    error: Exception | None = None

    @property
    def phases(self) -> list[Phase]:
        return [entry.phase for entry in self.entries]
