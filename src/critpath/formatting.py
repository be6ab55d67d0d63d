"""Text and JSON rendering of schedule results for the CLI."""

from __future__ import annotations

import json
from datetime import date, timedelta
from typing import Any

from .models import ProjectSnapshot, ScheduleWarning
from .scheduler import Degraded, Scheduled, ScheduleResult, TaskTimes

_COLUMNS = ("ID", "Name", "Len", "ES", "EF", "LS", "LF", "Slack", "")


def offset_to_date(start: date, offset: int) -> date:
    """Calendar date of a day offset from project start."""
    return start + timedelta(days=offset)


def _task_row(task_id: str, name: str, info: TaskTimes) -> list[str]:
    return [
        task_id,
        name,
        str(info.length),
        str(info.earliest_start),
        str(info.earliest_finish),
        str(info.latest_start),
        str(info.latest_finish),
        str(info.slack),
        "*" if info.is_critical else "",
    ]


def _table(rows: list[list[str]]) -> list[str]:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    return ["  ".join(cell.ljust(w) for cell, w in zip(row, widths)).rstrip() for row in rows]


def _format_scheduled(snapshot: ProjectSnapshot, result: Scheduled) -> list[str]:
    lines: list[str] = []
    names = {task.id: task.name for task in snapshot.tasks}
    rows = [list(_COLUMNS)]
    for task_id in result.order:
        rows.append(_task_row(task_id, names.get(task_id, ""), result.tasks[task_id]))
    lines.extend(_table(rows))
    lines.append("")

    duration_line = f"Project duration: {result.project_duration} days"
    if snapshot.start is not None:
        end = offset_to_date(snapshot.start, result.project_duration)
        duration_line += f" ({snapshot.start.isoformat()} to {end.isoformat()})"
    lines.append(duration_line)

    path = result.critical_path()
    lines.append(f"Critical path: {' -> '.join(path) if path else '(none)'}")
    return lines


def _format_degraded(result: Degraded) -> list[str]:
    critical = sorted(result.critical_task_ids)
    return [
        "DEGRADED: circular dependency " + " -> ".join(result.cycle),
        "Schedule times cannot be computed until the cycle is removed.",
        f"Critical tasks (externally marked): {', '.join(critical) if critical else '(none)'}",
    ]


def format_text(snapshot: ProjectSnapshot, result: ScheduleResult) -> str:
    """Human-readable schedule report."""
    lines = ["Schedule Results", "=" * 80]
    if snapshot.name:
        lines.append(f"Project: {snapshot.name}")
    lines.append("")

    if isinstance(result, Degraded):
        lines.extend(_format_degraded(result))
    else:
        lines.extend(_format_scheduled(snapshot, result))
    return "\n".join(lines)


def _warning_to_dict(warning: ScheduleWarning) -> dict[str, str]:
    return {
        "kind": warning.kind.value,
        "subject_id": warning.subject_id,
        "message": warning.message,
    }


def result_to_dict(snapshot: ProjectSnapshot, result: ScheduleResult) -> dict[str, Any]:
    """Plain-data form of a result, suitable for JSON."""
    data: dict[str, Any] = {
        "degraded": result.degraded,
        "project_duration": result.project_duration,
        "critical_task_ids": sorted(result.critical_task_ids),
        "critical_dependency_ids": sorted(result.critical_dependency_ids),
        "warnings": [_warning_to_dict(w) for w in result.warnings],
    }

    if isinstance(result, Degraded):
        data["cycle"] = list(result.cycle)
        return data

    tasks: dict[str, dict[str, Any]] = {}
    for task_id in result.order:
        info = result.tasks[task_id]
        entry: dict[str, Any] = {
            "length": info.length,
            "earliest_start": info.earliest_start,
            "earliest_finish": info.earliest_finish,
            "latest_start": info.latest_start,
            "latest_finish": info.latest_finish,
            "slack": info.slack,
            "is_critical": info.is_critical,
        }
        if snapshot.start is not None:
            entry["earliest_start_date"] = offset_to_date(
                snapshot.start, info.earliest_start
            ).isoformat()
            entry["earliest_finish_date"] = offset_to_date(
                snapshot.start, info.earliest_finish
            ).isoformat()
        tasks[task_id] = entry
    data["order"] = list(result.order)
    data["tasks"] = tasks
    return data


def format_json(snapshot: ProjectSnapshot, result: ScheduleResult) -> str:
    return json.dumps(result_to_dict(snapshot, result), indent=2)
