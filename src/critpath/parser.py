"""YAML parser for project snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError, ValidationError
from .models import Dependency, ProjectSnapshot, RelationType, Task
from .schemas import DependencySchema, SnapshotSchema, TaskSchema


def default_dependency_id(predecessor_id: str, successor_id: str) -> str:
    """Id given to a dependency that does not name one."""
    return f"{predecessor_id}->{successor_id}"


class SnapshotParser:
    """Parser for snapshot YAML files.

    Structural problems (bad YAML, wrong types, duplicate ids) raise.
    Scheduling problems such as dangling references or unknown relation
    types are left for the engine to report as warnings.
    """

    def parse_file(self, file_path: Path | str) -> ProjectSnapshot:
        """Parse a YAML file into a ProjectSnapshot."""
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> ProjectSnapshot:
        """Validate loaded YAML data and convert it to domain models."""
        try:
            schema = SnapshotSchema(**data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid snapshot structure: {e}") from e

        tasks = tuple(self._to_task(entry) for entry in schema.tasks)
        seen_tasks: set[str] = set()
        for task in tasks:
            if task.id in seen_tasks:
                raise ValidationError(f"Duplicate task id: {task.id}")
            seen_tasks.add(task.id)

        dependencies = tuple(self._to_dependency(entry) for entry in schema.dependencies)
        seen_deps: set[str] = set()
        for dep in dependencies:
            if dep.id in seen_deps:
                raise ValidationError(
                    f"Duplicate dependency id: {dep.id} (give each dependency an explicit 'id')"
                )
            seen_deps.add(dep.id)

        return ProjectSnapshot(
            tasks=tasks,
            dependencies=dependencies,
            name=schema.project.name,
            start=schema.project.start,
        )

    def _to_task(self, entry: TaskSchema) -> Task:
        return Task(
            id=entry.id,
            start_date=entry.start_date,
            end_date=entry.end_date,
            externally_marked_critical=entry.critical,
            name=entry.name,
            phase_id=entry.phase,
        )

    def _to_dependency(self, entry: DependencySchema) -> Dependency:
        # Unknown relation text is passed through unchanged
        relation: RelationType | str = RelationType.parse(entry.type) or entry.type
        return Dependency(
            id=entry.id or default_dependency_id(entry.predecessor, entry.successor),
            predecessor_id=entry.predecessor,
            successor_id=entry.successor,
            relation=relation,
            lag=entry.lag,
        )
