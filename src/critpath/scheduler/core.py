"""Core dataclasses for the scheduling engine."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Union

from critpath.models import ScheduleWarning


def _empty_mapping() -> Mapping[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True)
class TaskTimes:
    """Computed CPM values for one task, as day offsets from project start."""

    length: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    slack: int
    is_critical: bool


@dataclass(frozen=True)
class Scheduled:
    """Result of a full critical path computation over an acyclic graph."""

    project_duration: int
    tasks: Mapping[str, TaskTimes]
    critical_task_ids: frozenset[str]
    critical_dependency_ids: frozenset[str]
    order: tuple[str, ...] = ()
    warnings: tuple[ScheduleWarning, ...] = ()

    @property
    def degraded(self) -> Literal[False]:
        return False

    def critical_path(self) -> list[str]:
        """Critical task ids in topological order."""
        return [task_id for task_id in self.order if task_id in self.critical_task_ids]


@dataclass(frozen=True)
class Degraded:
    """Fallback result used when the dependency graph contains a cycle.

    Carries no CPM times. `critical_task_ids` are the externally flagged
    tasks; `project_duration` is always 0 because it cannot be computed.
    """

    critical_task_ids: frozenset[str]
    critical_dependency_ids: frozenset[str]
    cycle: tuple[str, ...] = ()
    lengths: Mapping[str, int] = field(default_factory=_empty_mapping)
    warnings: tuple[ScheduleWarning, ...] = ()

    @property
    def degraded(self) -> Literal[True]:
        return True

    @property
    def project_duration(self) -> int:
        return 0


ScheduleResult = Union[Scheduled, Degraded]
