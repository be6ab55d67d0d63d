"""Data models for critpath."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

DAYS_PER_WEEK = 7

_SHORT_CODES = {
    "FS": "finish_to_start",
    "SS": "start_to_start",
    "FF": "finish_to_finish",
    "SF": "start_to_finish",
}


class RelationType(str, Enum):
    """Precedence relation between a predecessor and a successor task."""

    FINISH_TO_START = "finish_to_start"
    START_TO_START = "start_to_start"
    FINISH_TO_FINISH = "finish_to_finish"
    START_TO_FINISH = "start_to_finish"

    @classmethod
    def parse(cls, value: RelationType | str | None) -> RelationType | None:
        """Parse a relation value, returning None if it is not a known kind.

        Accepts enum members, their values ("finish_to_start") and the short
        codes FS/SS/FF/SF, case-insensitively.
        """
        if isinstance(value, RelationType):
            return value
        if not isinstance(value, str):
            return None
        text = value.strip()
        text = _SHORT_CODES.get(text.upper(), text.lower().replace("-", "_"))
        try:
            return cls(text)
        except ValueError:
            return None

    @property
    def constrains_finish(self) -> bool:
        """True if the relation bounds the successor's finish rather than its start."""
        return self in (RelationType.FINISH_TO_FINISH, RelationType.START_TO_FINISH)

    @property
    def from_finish(self) -> bool:
        """True if the relation is anchored on the predecessor's finish."""
        return self in (RelationType.FINISH_TO_START, RelationType.FINISH_TO_FINISH)


@dataclass(frozen=True)
class Task:
    """A task as supplied by the editor.

    Only `id`, the two dates and the external critical flag matter to the
    engine; `name` and `phase_id` are carried for callers.
    """

    id: str
    start_date: date | None = None
    end_date: date | None = None
    externally_marked_critical: bool = False
    name: str = ""
    phase_id: str | None = None

    @property
    def has_dates(self) -> bool:
        """True if both endpoints are known."""
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class Dependency:
    """A directed precedence edge from predecessor to successor.

    `relation` is normally a RelationType; unrecognised strings are kept as
    given so the engine can report them. `lag` is in days and may be negative
    (overlap).
    """

    id: str
    predecessor_id: str
    successor_id: str
    relation: RelationType | str = RelationType.FINISH_TO_START
    lag: int = 0

    @staticmethod
    def parse_lag(value: int | float | str | None) -> int:
        """Parse a lag value into whole days.

        Supported formats:
        - 3, "3", "3d" - three days
        - "-2d" - two days of overlap
        - "2w" - fourteen days
        """
        if value is None:
            return 0
        if isinstance(value, bool):
            raise ValueError(f"Invalid lag: {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if value != int(value):
                raise ValueError(f"Lag must be a whole number of days: {value!r}")
            return int(value)

        match = re.match(r"^([+-]?\d+)\s*([dw]?)$", str(value).strip().lower())
        if not match:
            raise ValueError(f"Invalid lag: {value!r}")
        amount, unit = match.groups()
        days = int(amount)
        if unit == "w":
            return days * DAYS_PER_WEEK
        return days

    def __str__(self) -> str:
        relation = self.relation.value if isinstance(self.relation, RelationType) else self.relation
        text = f"{self.predecessor_id} -[{relation}]-> {self.successor_id}"
        if self.lag:
            text += f" ({self.lag:+d}d)"
        return text


class WarningKind(str, Enum):
    """Categories of non-fatal input anomalies."""

    MISSING_DATES = "missing_dates"
    DANGLING_DEPENDENCY = "dangling_dependency"
    CYCLIC_GRAPH = "cyclic_graph"
    UNKNOWN_RELATION = "unknown_relation"
    DUPLICATE_TASK = "duplicate_task"
    DUPLICATE_DEPENDENCY = "duplicate_dependency"
    INVALID_LAG = "invalid_lag"


@dataclass(frozen=True)
class ScheduleWarning:
    """An anomaly found while scheduling; never fatal."""

    kind: WarningKind
    subject_id: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ProjectSnapshot:
    """An immutable set of tasks and dependencies, as loaded from a file."""

    tasks: tuple[Task, ...]
    dependencies: tuple[Dependency, ...]
    name: str = ""
    start: date | None = None  # Anchor for turning day offsets into dates

    def get_task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)
