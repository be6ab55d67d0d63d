"""Edge admission: refuse a dependency that would close a cycle.

This is the preventive gate an editor calls before committing a new edge.
It needs only the dependency list and never mutates it; the engine's own
degraded mode is the fallback for cyclic data that got past this check.
"""

from __future__ import annotations

from collections.abc import Iterable

from critpath.logger import get_logger
from critpath.models import Dependency

logger = get_logger()


def _successor_map(
    dependencies: Iterable[Dependency], extra: tuple[str, str] | None = None
) -> dict[str, list[str]]:
    successors: dict[str, list[str]] = {}
    for dep in dependencies:
        successors.setdefault(dep.predecessor_id, []).append(dep.successor_id)
    if extra is not None:
        pred_id, succ_id = extra
        successors.setdefault(pred_id, []).append(succ_id)
    return successors


def _search_path(
    successors: dict[str, list[str]], start_id: str, target_id: str
) -> list[str] | None:
    """Depth-first search returning a start..target path, or None."""
    parents: dict[str, str | None] = {start_id: None}
    stack = [start_id]
    while stack:
        node = stack.pop()
        if node == target_id:
            path: list[str] = []
            current: str | None = node
            while current is not None:
                path.append(current)
                current = parents[current]
            return path[::-1]
        for succ in reversed(successors.get(node, [])):
            if succ not in parents:
                parents[succ] = node
                stack.append(succ)
    return None


def reachable_from(dependencies: Iterable[Dependency], task_id: str) -> set[str]:
    """Task ids reachable from task_id along dependency edges.

    task_id itself is included only if it lies on a cycle.
    """
    successors = _successor_map(dependencies)
    seen: set[str] = set()
    stack = list(successors.get(task_id, []))
    while stack:
        node = stack.pop()
        if node in seen:
            continue
        seen.add(node)
        stack.extend(successors.get(node, []))
    return seen


def find_cycle_path(
    existing_dependencies: Iterable[Dependency],
    candidate_predecessor_id: str,
    candidate_successor_id: str,
) -> list[str] | None:
    """Return the cycle the candidate edge would close, or None.

    The path starts and ends at the candidate predecessor, e.g. adding C->A to
    A->B->C gives ["C", "A", "B", "C"].
    """
    if candidate_predecessor_id == candidate_successor_id:
        return [candidate_predecessor_id, candidate_successor_id]

    successors = _successor_map(
        existing_dependencies, (candidate_predecessor_id, candidate_successor_id)
    )
    path = _search_path(successors, candidate_successor_id, candidate_predecessor_id)
    if path is None:
        return None
    return [candidate_predecessor_id, *path]


def would_create_cycle(
    existing_dependencies: Iterable[Dependency],
    candidate_predecessor_id: str,
    candidate_successor_id: str,
) -> bool:
    """Check whether adding predecessor -> successor would create a cycle.

    Builds the successor map from the existing edges plus the candidate and
    searches from the candidate successor; reaching the candidate predecessor
    means the edge would close a cycle. A parallel or duplicate edge is not
    a cycle.

    Args:
        existing_dependencies: Currently committed dependencies
        candidate_predecessor_id: Predecessor of the proposed edge
        candidate_successor_id: Successor of the proposed edge

    Returns:
        True if the edge must be refused
    """
    cycle = find_cycle_path(
        existing_dependencies, candidate_predecessor_id, candidate_successor_id
    )
    if cycle is not None:
        logger.changes(
            f"Refusing {candidate_predecessor_id} -> {candidate_successor_id}: "
            f"would close {' -> '.join(cycle)}"
        )
        return True
    logger.checks(f"Edge {candidate_predecessor_id} -> {candidate_successor_id} is admissible")
    return False
