"""Snapshot and configuration loading for the CLI and other callers."""

from __future__ import annotations

from pathlib import Path

from . import context
from .models import ProjectSnapshot
from .parser import SnapshotParser
from .scheduler import SchedulingConfig
from .unified_config import CONFIG_FILENAME, UnifiedConfig, load_unified_config


def discover_config(
    snapshot_path: Path | str,
    config_path: Path | None = None,
) -> UnifiedConfig | None:
    """Discover a config file from various locations.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. Snapshot directory / critpath_config.yaml
    4. Current directory / critpath_config.yaml

    An explicitly given path that does not exist is an error rather than
    silently falling through to the next location.
    """
    if config_path is not None:
        return load_unified_config(config_path)

    ctx_config = context.get_config_path()
    if ctx_config is not None:
        return load_unified_config(ctx_config)

    dir_config = Path(snapshot_path).parent / CONFIG_FILENAME
    if dir_config.exists():
        return load_unified_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_unified_config(cwd_config)

    return None


def load_snapshot(path: Path | str) -> ProjectSnapshot:
    """Load and validate a snapshot file."""
    return SnapshotParser().parse_file(path)


def load_scheduling_config(
    snapshot_path: Path | str, config_path: Path | None = None
) -> SchedulingConfig:
    """Scheduling settings for a snapshot, or defaults if no config is found."""
    config = discover_config(snapshot_path, config_path)
    if config is None:
        return SchedulingConfig()
    return config.scheduling
