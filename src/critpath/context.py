"""Process-wide CLI options shared with the loader."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class RunContext:
    """Options set once by the CLI callback and read during loading."""

    config_path: Path | None = None


_context = RunContext()


def get_config_path() -> Path | None:
    """Get the config path given on the command line, if any."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the config path given on the command line."""
    _context.config_path = path


def reset_context() -> None:
    """Restore defaults (used between CLI invocations in tests)."""
    _context.config_path = None
