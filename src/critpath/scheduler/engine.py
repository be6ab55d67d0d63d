"""Critical path engine: ordering, CPM passes, slack and critical sets."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from critpath.logger import get_logger
from critpath.models import Dependency, Task

from .config import SchedulingConfig
from .core import Scheduled, ScheduleResult, TaskTimes
from .fallback import classify_degraded
from .graph import TaskGraph, build_task_graph
from .passes import is_driving, run_backward_pass, run_forward_pass
from .toposort import CycleDetected, topological_sort

logger = get_logger()


class CriticalPathEngine:
    """Compute a schedule for one immutable snapshot per call.

    The engine keeps only its configuration; every call rebuilds the graph,
    so it is safe to reuse one instance for any number of snapshots.

    - Forward pass: earliest start/finish for all four relation types
    - Backward pass: latest start/finish, bounded by the project duration
    - Slack and critical tasks/dependencies
    - Cycles fall back to externally marked critical tasks (Degraded)
    """

    def __init__(self, config: SchedulingConfig | None = None):
        """Initialize the engine.

        Args:
            config: Optional scheduling configuration
        """
        self.config = config or SchedulingConfig()

    def schedule(
        self, tasks: Iterable[Task], dependencies: Iterable[Dependency]
    ) -> ScheduleResult:
        """Schedule a snapshot of tasks and dependencies.

        Never raises for malformed scheduling input; anomalies are returned
        as warnings on the result.

        Returns:
            Scheduled for an acyclic graph, Degraded if a cycle was found
        """
        graph = build_task_graph(tasks, dependencies, self.config)
        logger.changes(
            f"Scheduling {len(graph.task_ids)} tasks with {len(graph.edges)} dependencies"
        )

        sorted_or_cycle = topological_sort(
            graph.task_ids,
            {task_id: graph.predecessors(task_id) for task_id in graph.task_ids},
        )
        if isinstance(sorted_or_cycle, CycleDetected):
            return classify_degraded(graph, sorted_or_cycle.cycle)

        return self._run_cpm(graph, sorted_or_cycle.order)

    def _run_cpm(self, graph: TaskGraph, order: tuple[str, ...]) -> Scheduled:
        es, ef, project_duration = run_forward_pass(graph, order)
        ls, lf = run_backward_pass(graph, order, project_duration)

        times: dict[str, TaskTimes] = {}
        for task_id in graph.task_ids:
            slack = ls[task_id] - es[task_id]
            times[task_id] = TaskTimes(
                length=graph.lengths[task_id],
                earliest_start=es[task_id],
                earliest_finish=ef[task_id],
                latest_start=ls[task_id],
                latest_finish=lf[task_id],
                slack=slack,
                is_critical=slack == 0,
            )

        critical_tasks = frozenset(
            task_id for task_id, info in times.items() if info.is_critical
        )
        # Only driving edges count; a bypass edge between two critical tasks does not
        critical_deps = frozenset(
            edge.dependency_id
            for edge in graph.edges
            if edge.predecessor_id in critical_tasks
            and edge.successor_id in critical_tasks
            and is_driving(edge, es, ef)
        )

        logger.changes(
            f"Project duration {project_duration} days; "
            f"{len(critical_tasks)} critical task(s), {len(critical_deps)} critical dependencies"
        )

        return Scheduled(
            project_duration=project_duration,
            tasks=MappingProxyType(times),
            critical_task_ids=critical_tasks,
            critical_dependency_ids=critical_deps,
            order=order,
            warnings=tuple(graph.warnings),
        )


def schedule(
    tasks: Iterable[Task],
    dependencies: Iterable[Dependency],
    config: SchedulingConfig | None = None,
) -> ScheduleResult:
    """Schedule a snapshot with a one-off engine."""
    return CriticalPathEngine(config).schedule(tasks, dependencies)
