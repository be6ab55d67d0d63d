"""Degraded-mode classification for graphs that cannot be ordered."""

from __future__ import annotations

from types import MappingProxyType

from critpath.logger import get_logger
from critpath.models import ScheduleWarning, WarningKind

from .core import Degraded
from .graph import TaskGraph

logger = get_logger()


def classify_degraded(graph: TaskGraph, cycle: tuple[str, ...]) -> Degraded:
    """Build a fallback result that trusts the external critical flags.

    No CPM arithmetic is attempted on a cyclic graph. Critical tasks are the
    ones flagged by the user or an import; critical dependencies are the edges
    with both ends flagged.
    """
    critical_tasks = frozenset(
        task_id
        for task_id in graph.task_ids
        if graph.tasks[task_id].externally_marked_critical
    )
    critical_deps = frozenset(
        edge.dependency_id
        for edge in graph.edges
        if edge.predecessor_id in critical_tasks and edge.successor_id in critical_tasks
    )

    cycle_text = " -> ".join(cycle)
    warning = ScheduleWarning(
        kind=WarningKind.CYCLIC_GRAPH,
        subject_id=cycle[0] if cycle else "",
        message=f"Circular dependency detected: {cycle_text}; using externally marked "
        "critical tasks",
    )
    logger.changes(f"Degraded mode: {warning.message}")

    return Degraded(
        critical_task_ids=critical_tasks,
        critical_dependency_ids=critical_deps,
        cycle=cycle,
        lengths=MappingProxyType(dict(graph.lengths)),
        warnings=(*graph.warnings, warning),
    )
