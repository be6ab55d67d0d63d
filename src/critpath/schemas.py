"""Pydantic schemas for snapshot YAML validation."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import Dependency


class ProjectSchema(BaseModel):
    """Schema for the optional `project` header."""

    name: str = ""
    start: date | None = None


class TaskSchema(BaseModel):
    """Schema for one task entry."""

    id: str
    name: str = ""
    phase: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    critical: bool = False

    @field_validator("id", "phase", mode="before")
    @classmethod
    def coerce_str(cls, v: Any) -> Any:
        """YAML reads bare numbers as ints; ids are always strings."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class DependencySchema(BaseModel):
    """Schema for one dependency entry.

    `type` is kept as free text so unknown relations reach the engine, which
    reports them rather than rejecting the file.
    """

    id: str | None = None
    predecessor: str
    successor: str
    type: str = "finish_to_start"
    lag: int = 0

    @field_validator("id", "predecessor", "successor", mode="before")
    @classmethod
    def coerce_str(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("lag", mode="before")
    @classmethod
    def parse_lag(cls, v: Any) -> int:
        """Accept 3, "3d", "-1d" or "2w"."""
        return Dependency.parse_lag(v)


class SnapshotSchema(BaseModel):
    """Schema for a whole snapshot file."""

    project: ProjectSchema = Field(default_factory=ProjectSchema)
    tasks: list[TaskSchema] = Field(default_factory=list)
    dependencies: list[DependencySchema] = Field(default_factory=list)

    @field_validator("tasks", "dependencies", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """An empty YAML section (`tasks:`) loads as None."""
        if v is None:
            return []
        return v

    @field_validator("project", mode="before")
    @classmethod
    def none_as_default_project(cls, v: Any) -> Any:
        if v is None:
            return {}
        return v
