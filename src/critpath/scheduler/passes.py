"""Forward and backward CPM passes over a topologically ordered graph.

All values are integer day offsets from project start (0). Each relation
bounds one endpoint of the successor from one endpoint of the predecessor:

    FS: ES(s) >= EF(p) + lag        SS: ES(s) >= ES(p) + lag
    FF: EF(s) >= EF(p) + lag        SF: EF(s) >= ES(p) + lag

Finish bounds are turned into start bounds through the successor's length so
every task keeps EF = ES + length. Start bounds are not clipped at 0, so a
negative lag can place a successor before project start; a task with no
start-side bound starts at 0 at the earliest.
"""

from __future__ import annotations

from collections.abc import Sequence

from critpath.logger import get_logger

from .graph import Edge, TaskGraph

logger = get_logger()


def edge_start_bound(edge: Edge, es: dict[str, int], ef: dict[str, int], length: int) -> int:
    """Earliest start the edge allows its successor (of the given length)."""
    anchor = ef[edge.predecessor_id] if edge.relation.from_finish else es[edge.predecessor_id]
    bound = anchor + edge.lag
    if edge.relation.constrains_finish:
        return bound - length
    return bound


def edge_finish_bound(
    edge: Edge, ls: dict[str, int], lf: dict[str, int], length: int
) -> int:
    """Latest finish the edge allows its predecessor (of the given length)."""
    succ_id = edge.successor_id
    anchor = lf[succ_id] if edge.relation.constrains_finish else ls[succ_id]
    bound = anchor - edge.lag
    if edge.relation.from_finish:
        return bound
    # Start-anchored relations bound the predecessor's start
    return bound + length


def is_driving(edge: Edge, es: dict[str, int], ef: dict[str, int]) -> bool:
    """True if the edge's constraint is tight in the forward pass."""
    pred, succ = edge.predecessor_id, edge.successor_id
    anchor = ef[pred] if edge.relation.from_finish else es[pred]
    target = ef[succ] if edge.relation.constrains_finish else es[succ]
    return target == anchor + edge.lag


def run_forward_pass(
    graph: TaskGraph, order: Sequence[str]
) -> tuple[dict[str, int], dict[str, int], int]:
    """Compute earliest start/finish for every task.

    Returns:
        Tuple of (earliest_start, earliest_finish, project_duration)
    """
    es: dict[str, int] = {}
    ef: dict[str, int] = {}

    for task_id in order:
        length = graph.lengths[task_id]
        incoming = graph.incoming.get(task_id, [])
        start_bounds: list[int] = []
        finish_bounds: list[int] = []
        for edge in incoming:
            bound = edge_start_bound(edge, es, ef, length)
            logger.debug(
                f"    {edge.predecessor_id} -[{edge.relation.value}{edge.lag:+d}]-> "
                f"{task_id}: start >= {bound}"
            )
            if edge.relation.constrains_finish:
                finish_bounds.append(bound)
            else:
                start_bounds.append(bound)
        # Without a start-side bound the task starts no earlier than project start
        start = max(start_bounds) if start_bounds else 0
        if finish_bounds:
            start = max(start, *finish_bounds)
        es[task_id] = start
        ef[task_id] = start + length
        logger.checks(f"  Forward {task_id}: ES={es[task_id]} EF={ef[task_id]}")

    project_duration = max(ef.values(), default=0)
    return es, ef, project_duration


def run_backward_pass(
    graph: TaskGraph, order: Sequence[str], project_duration: int
) -> tuple[dict[str, int], dict[str, int]]:
    """Compute latest start/finish for every task.

    Every task is also bounded by the project duration, so a task that drives
    the project end through a start-anchored relation is not given false slack.

    Returns:
        Tuple of (latest_start, latest_finish)
    """
    ls: dict[str, int] = {}
    lf: dict[str, int] = {}

    for task_id in reversed(order):
        length = graph.lengths[task_id]
        finish = project_duration
        for edge in graph.outgoing.get(task_id, []):
            bound = edge_finish_bound(edge, ls, lf, length)
            logger.debug(
                f"    {task_id} -[{edge.relation.value}{edge.lag:+d}]-> "
                f"{edge.successor_id}: finish <= {bound}"
            )
            finish = min(finish, bound)
        lf[task_id] = finish
        ls[task_id] = finish - length
        logger.checks(f"  Backward {task_id}: LS={ls[task_id]} LF={lf[task_id]}")

    return ls, lf


__all__ = [
    "edge_finish_bound",
    "edge_start_bound",
    "is_driving",
    "run_backward_pass",
    "run_forward_pass",
]
