"""Deterministic topological ordering with cycle reporting."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from critpath.logger import get_logger

logger = get_logger()


@dataclass(frozen=True)
class TopologicalOrder:
    """A total order in which every predecessor precedes its successors."""

    order: tuple[str, ...]


@dataclass(frozen=True)
class CycleDetected:
    """Sort failure: `cycle` lists one cycle in edge direction, closed.

    For edges A->B, B->C, C->A the cycle may read ("B", "C", "A", "B").
    """

    cycle: tuple[str, ...]


def topological_sort(
    task_ids: Sequence[str],
    predecessors: Mapping[str, Sequence[str]],
) -> TopologicalOrder | CycleDetected:
    """Order tasks so predecessors come first, or report a cycle.

    Depth-first over predecessor lists with a "visiting" set to spot back
    edges. Roots are taken in `task_ids` order and predecessors in list order,
    so the same input always gives the same order and independent tasks keep
    their input order. A cycle is returned, never raised.

    Args:
        task_ids: All task ids, in input order
        predecessors: Map of task id to the ids it depends on

    Returns:
        TopologicalOrder on success, CycleDetected otherwise
    """
    known = set(task_ids)
    done: set[str] = set()
    visiting: set[str] = set()
    order: list[str] = []

    for root in task_ids:
        if root in done:
            continue

        # Explicit stack keeps long chains clear of the recursion limit
        path: list[str] = [root]
        stack: list[Iterator[str]] = [iter(predecessors.get(root, ()))]
        visiting.add(root)

        while stack:
            node = path[-1]
            descended = False
            for pred in stack[-1]:
                if pred in done or pred not in known:
                    continue
                if pred in visiting:
                    start = path.index(pred)
                    cycle = (*reversed(path[start:]), node)
                    logger.changes(f"Cycle detected: {' -> '.join(cycle)}")
                    return CycleDetected(cycle=cycle)
                visiting.add(pred)
                path.append(pred)
                stack.append(iter(predecessors.get(pred, ())))
                descended = True
                break

            if not descended:
                stack.pop()
                path.pop()
                visiting.discard(node)
                done.add(node)
                order.append(node)

    return TopologicalOrder(order=tuple(order))
