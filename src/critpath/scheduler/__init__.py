"""Scheduler package - critical path scheduling over task dependency graphs.

Main entry points:
- CriticalPathEngine / schedule(): full CPM run producing a ScheduleResult
- would_create_cycle(): edge admission check before a dependency is committed

Building blocks:
- task_length(): scheduling length of a task
- build_task_graph(): validated graph with warnings for malformed input
- topological_sort(): deterministic order or the offending cycle
- run_forward_pass() / run_backward_pass(): CPM passes

Results:
- Scheduled: CPM times, slack and critical sets
- Degraded: fallback when the graph has a cycle
"""

from .admission import find_cycle_path, reachable_from, would_create_cycle
from .config import RelationMode, SchedulingConfig
from .core import Degraded, Scheduled, ScheduleResult, TaskTimes
from .duration import task_length
from .engine import CriticalPathEngine, schedule
from .fallback import classify_degraded
from .graph import Edge, TaskGraph, build_task_graph
from .passes import run_backward_pass, run_forward_pass
from .toposort import CycleDetected, TopologicalOrder, topological_sort

__all__ = [
    # Engine
    "CriticalPathEngine",
    "schedule",
    # Results
    "Scheduled",
    "Degraded",
    "ScheduleResult",
    "TaskTimes",
    # Configuration
    "SchedulingConfig",
    "RelationMode",
    # Building blocks
    "task_length",
    "Edge",
    "TaskGraph",
    "build_task_graph",
    "topological_sort",
    "TopologicalOrder",
    "CycleDetected",
    "run_forward_pass",
    "run_backward_pass",
    "classify_degraded",
    # Edge admission
    "would_create_cycle",
    "find_cycle_path",
    "reachable_from",
]
