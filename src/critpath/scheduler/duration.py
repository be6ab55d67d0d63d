"""Task length used by the scheduling arithmetic."""

from datetime import date, datetime

from critpath.models import Task

PLACEHOLDER_LENGTH = 1


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def task_length(task: Task) -> int:
    """Whole days between a task's dates, never less than 1.

    This is the exclusive date difference, not an inclusive day count. A task
    missing either date gets a length-1 placeholder so it still takes part in
    ordering and its dependents stay connected.
    """
    if task.start_date is None or task.end_date is None:
        return PLACEHOLDER_LENGTH
    days = (_as_date(task.end_date) - _as_date(task.start_date)).days
    return max(PLACEHOLDER_LENGTH, days)
