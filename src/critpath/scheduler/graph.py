"""In-memory task/dependency graph built fresh for each scheduling run."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from critpath.logger import get_logger
from critpath.models import Dependency, RelationType, ScheduleWarning, Task, WarningKind

from .config import RelationMode, SchedulingConfig
from .duration import task_length

logger = get_logger()


@dataclass(frozen=True)
class Edge:
    """A validated dependency with its relation resolved to a known kind."""

    dependency_id: str
    predecessor_id: str
    successor_id: str
    relation: RelationType
    lag: int


def _empty_edge_map() -> dict[str, list[Edge]]:
    return {}


@dataclass
class TaskGraph:
    """Nodes, lengths and adjacency for one snapshot.

    `task_ids` and every adjacency list keep input order so that everything
    derived from the graph is deterministic.
    """

    tasks: dict[str, Task]
    task_ids: list[str]
    lengths: dict[str, int]
    edges: list[Edge]
    incoming: dict[str, list[Edge]] = field(default_factory=_empty_edge_map)
    outgoing: dict[str, list[Edge]] = field(default_factory=_empty_edge_map)
    warnings: list[ScheduleWarning] = field(default_factory=list)

    def predecessors(self, task_id: str) -> list[str]:
        return [edge.predecessor_id for edge in self.incoming.get(task_id, [])]

    def successors(self, task_id: str) -> list[str]:
        return [edge.successor_id for edge in self.outgoing.get(task_id, [])]


def _warn(
    warnings: list[ScheduleWarning],
    kind: WarningKind,
    subject_id: str,
    message: str,
    log: bool = True,
) -> None:
    warnings.append(ScheduleWarning(kind=kind, subject_id=subject_id, message=message))
    if log:
        logger.changes(f"Warning: {message}")


def _resolve_relation(
    dep: Dependency, config: SchedulingConfig, warnings: list[ScheduleWarning]
) -> RelationType:
    relation = RelationType.parse(dep.relation)
    if relation is None:
        _warn(
            warnings,
            WarningKind.UNKNOWN_RELATION,
            dep.id,
            f"Dependency {dep.id} has unknown relation {dep.relation!r}; "
            "treating it as finish_to_start",
        )
        relation = RelationType.FINISH_TO_START
    if config.relation_mode == RelationMode.FINISH_TO_START:
        return RelationType.FINISH_TO_START
    return relation


def _resolve_lag(dep: Dependency, warnings: list[ScheduleWarning]) -> int:
    try:
        return Dependency.parse_lag(dep.lag)
    except (ValueError, TypeError):
        _warn(
            warnings,
            WarningKind.INVALID_LAG,
            dep.id,
            f"Dependency {dep.id} has invalid lag {dep.lag!r}; using 0",
        )
        return 0


def build_task_graph(
    tasks: Iterable[Task],
    dependencies: Iterable[Dependency],
    config: SchedulingConfig | None = None,
) -> TaskGraph:
    """Build the scheduling graph from a snapshot.

    Malformed input never raises: duplicate tasks, duplicate dependency ids
    and dangling edges are dropped, and unknown relations and unparseable
    lags are normalised, each with a warning.
    """
    config = config or SchedulingConfig()
    warnings: list[ScheduleWarning] = []

    tasks_by_id: dict[str, Task] = {}
    for task in tasks:
        if task.id in tasks_by_id:
            _warn(
                warnings,
                WarningKind.DUPLICATE_TASK,
                task.id,
                f"Duplicate task id {task.id}; keeping the first occurrence",
            )
            continue
        tasks_by_id[task.id] = task
        if not task.has_dates:
            _warn(
                warnings,
                WarningKind.MISSING_DATES,
                task.id,
                f"Task {task.id} is missing a start or end date; using length 1",
                log=config.log_missing_dates,
            )

    task_ids = list(tasks_by_id)
    lengths = {task_id: task_length(task) for task_id, task in tasks_by_id.items()}

    edges: list[Edge] = []
    incoming: dict[str, list[Edge]] = {task_id: [] for task_id in task_ids}
    outgoing: dict[str, list[Edge]] = {task_id: [] for task_id in task_ids}

    seen_dependency_ids: set[str] = set()
    for dep in dependencies:
        # Critical edges are reported by id, so each id must name one edge
        if dep.id in seen_dependency_ids:
            _warn(
                warnings,
                WarningKind.DUPLICATE_DEPENDENCY,
                dep.id,
                f"Duplicate dependency id {dep.id}; keeping the first occurrence",
            )
            continue
        seen_dependency_ids.add(dep.id)

        missing = [
            ref
            for ref in dict.fromkeys((dep.predecessor_id, dep.successor_id))
            if ref not in tasks_by_id
        ]
        if missing:
            _warn(
                warnings,
                WarningKind.DANGLING_DEPENDENCY,
                dep.id,
                f"Dependency {dep.id} references unknown task(s) "
                f"{', '.join(missing)}; dropped",
            )
            continue

        edge = Edge(
            dependency_id=dep.id,
            predecessor_id=dep.predecessor_id,
            successor_id=dep.successor_id,
            relation=_resolve_relation(dep, config, warnings),
            lag=_resolve_lag(dep, warnings),
        )
        edges.append(edge)
        incoming[edge.successor_id].append(edge)
        outgoing[edge.predecessor_id].append(edge)

    logger.debug(f"Built graph with {len(task_ids)} tasks and {len(edges)} edges")

    return TaskGraph(
        tasks=tasks_by_id,
        task_ids=task_ids,
        lengths=lengths,
        edges=edges,
        incoming=incoming,
        outgoing=outgoing,
        warnings=warnings,
    )
