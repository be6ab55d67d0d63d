"""Pytest configuration and fixtures for critpath tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date, timedelta
from pathlib import Path

import pytest

from critpath.context import reset_context
from critpath.logger import reset_logger
from critpath.models import Dependency, RelationType, Task

BASE_DATE = date(2025, 1, 1)


@pytest.fixture(autouse=True)
def clean_global_state() -> Iterator[None]:
    """Reset the logger and CLI context after each test for isolation."""
    yield
    reset_logger()
    reset_context()


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for dated tasks of a given scheduling length.

    Example:
        make_task("A", 3)  # 2025-01-01 .. 2025-01-04, length 3
        make_task("M", dated=False)  # no dates, placeholder length 1
    """

    def _make(
        task_id: str,
        length: int = 1,
        *,
        offset: int = 0,
        critical: bool = False,
        dated: bool = True,
    ) -> Task:
        if not dated:
            return Task(id=task_id, externally_marked_critical=critical)
        start = BASE_DATE + timedelta(days=offset)
        return Task(
            id=task_id,
            start_date=start,
            end_date=start + timedelta(days=length),
            externally_marked_critical=critical,
        )

    return _make


@pytest.fixture
def make_dep() -> Callable[..., Dependency]:
    """Factory for dependencies; the id defaults to "<pred>-><succ>"."""

    def _make(
        predecessor_id: str,
        successor_id: str,
        relation: RelationType | str = RelationType.FINISH_TO_START,
        lag: int | float | str | None = 0,
        dep_id: str | None = None,
    ) -> Dependency:
        return Dependency(
            id=dep_id or f"{predecessor_id}->{successor_id}",
            predecessor_id=predecessor_id,
            successor_id=successor_id,
            relation=relation,
            lag=lag,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write YAML text to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "project.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
