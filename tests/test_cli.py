"""Tests for CLI commands."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from critpath.cli import app

runner = CliRunner()

EXAMPLE_PROJECT = Path(__file__).parent.parent / "examples" / "project.yaml"

WriteSnapshot = Callable[..., Path]

DIAMOND = """
project:
  name: Diamond
  start: 2025-01-01
tasks:
  - {id: A, start_date: 2025-01-01, end_date: 2025-01-03}
  - {id: B, start_date: 2025-01-03, end_date: 2025-01-08}
  - {id: C, start_date: 2025-01-03, end_date: 2025-01-04}
  - {id: D, start_date: 2025-01-08, end_date: 2025-01-09}
dependencies:
  - {predecessor: A, successor: B}
  - {predecessor: A, successor: C}
  - {predecessor: B, successor: D}
  - {predecessor: C, successor: D}
"""

CYCLE = """
tasks:
  - {id: A, start_date: 2025-01-01, end_date: 2025-01-02, critical: true}
  - {id: B, start_date: 2025-01-01, end_date: 2025-01-02}
dependencies:
  - {predecessor: A, successor: B}
  - {predecessor: B, successor: A}
"""


@pytest.fixture
def diamond(write_snapshot: WriteSnapshot) -> Path:
    return write_snapshot(DIAMOND)


class TestScheduleCommand:
    """Test the schedule command."""

    def test_text_output(self, diamond: Path) -> None:
        """Test the text report for a diamond network."""
        result = runner.invoke(app, ["schedule", str(diamond)])

        assert result.exit_code == 0
        assert "Schedule Results" in result.output
        assert "Project: Diamond" in result.output
        assert "Project duration: 8 days (2025-01-01 to 2025-01-09)" in result.output
        assert "Critical path: A -> B -> D" in result.output

    def test_json_output(self, diamond: Path) -> None:
        """Test the JSON report for a diamond network."""
        result = runner.invoke(app, ["schedule", str(diamond), "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["degraded"] is False
        assert data["project_duration"] == 8
        assert data["critical_task_ids"] == ["A", "B", "D"]
        assert data["critical_dependency_ids"] == ["A->B", "B->D"]
        assert data["tasks"]["C"]["slack"] == 4
        assert data["tasks"]["D"]["earliest_start_date"] == "2025-01-08"
        assert data["warnings"] == []

    def test_output_file(self, diamond: Path, tmp_path: Path) -> None:
        """Test writing the report to a file."""
        out = tmp_path / "schedule.json"
        result = runner.invoke(app, ["schedule", str(diamond), "-f", "json", "-o", str(out)])

        assert result.exit_code == 0
        assert "Schedule written to" in result.output
        assert json.loads(out.read_text())["project_duration"] == 8

    def test_relation_mode_override(self, write_snapshot: WriteSnapshot) -> None:
        """Test that --relation-mode overrides the typed default."""
        path = write_snapshot("""
tasks:
  - {id: A, start_date: 2025-01-01, end_date: 2025-01-05}
  - {id: B, start_date: 2025-01-01, end_date: 2025-01-03}
dependencies:
  - {predecessor: A, successor: B, type: SS, lag: 1}
""")
        typed = runner.invoke(app, ["schedule", str(path), "-f", "json"])
        forced = runner.invoke(
            app, ["schedule", str(path), "-f", "json", "--relation-mode", "finish_to_start"]
        )

        assert json.loads(typed.output)["project_duration"] == 4
        assert json.loads(forced.output)["project_duration"] == 7

    def test_config_option(self, write_snapshot: WriteSnapshot, tmp_path: Path) -> None:
        """Test that --config selects the scheduling config."""
        path = write_snapshot("""
tasks:
  - {id: A, start_date: 2025-01-01, end_date: 2025-01-05}
  - {id: B, start_date: 2025-01-01, end_date: 2025-01-03}
dependencies:
  - {predecessor: A, successor: B, type: SS, lag: 1}
""")
        config = tmp_path / "custom.yaml"
        config.write_text("scheduling:\n  relation_mode: finish_to_start\n")

        result = runner.invoke(app, ["--config", str(config), "schedule", str(path), "-f", "json"])

        assert result.exit_code == 0
        assert json.loads(result.output)["project_duration"] == 7

    def test_cycle_reports_degraded(self, write_snapshot: WriteSnapshot) -> None:
        """Test that a cyclic snapshot prints the degraded report."""
        result = runner.invoke(app, ["schedule", str(write_snapshot(CYCLE))])

        assert result.exit_code == 0
        assert "DEGRADED: circular dependency" in result.output
        assert "Critical tasks (externally marked): A" in result.output
        assert "Circular dependency detected" in result.output

    def test_warnings_displayed(self) -> None:
        """Test that warnings are listed after the report."""
        result = runner.invoke(app, ["schedule", str(EXAMPLE_PROJECT)])

        assert result.exit_code == 0
        assert "Warnings:" in result.output
        assert "energization is missing a start or end date" in result.output

    def test_example_project(self) -> None:
        """Test the bundled example project end to end."""
        result = runner.invoke(app, ["schedule", str(EXAMPLE_PROJECT)])

        assert result.exit_code == 0
        assert "Project duration: 57 days (2025-03-01 to 2025-04-27)" in result.output
        assert (
            "Critical path: procurement -> install -> commissioning -> energization"
            in result.output
        )

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        """Test that a missing snapshot exits with an error."""
        result = runner.invoke(app, ["schedule", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Error: File not found" in result.output

    def test_invalid_snapshot(self, write_snapshot: WriteSnapshot) -> None:
        """Test that a structurally invalid snapshot exits with an error."""
        result = runner.invoke(app, ["schedule", str(write_snapshot("tasks: [{id: a}, {id: a}]"))])

        assert result.exit_code == 1
        assert "Duplicate task id" in result.output

    def test_verbose_logging(self, diamond: Path) -> None:
        """Test that -v 2 shows per-task pass results."""
        result = runner.invoke(app, ["-v", "2", "schedule", str(diamond)])

        assert result.exit_code == 0
        assert "Forward A: ES=0 EF=2" in result.output


class TestOrderCommand:
    """Test the order command."""

    def test_prints_order(self, diamond: Path) -> None:
        """Test that order prints tasks predecessor first."""
        result = runner.invoke(app, ["order", str(diamond)])

        assert result.exit_code == 0
        assert result.output.split() == ["A", "B", "C", "D"]

    def test_cycle_fails(self, write_snapshot: WriteSnapshot) -> None:
        """Test that order exits 1 and prints the cycle."""
        result = runner.invoke(app, ["order", str(write_snapshot(CYCLE))])

        assert result.exit_code == 1
        assert "Cycle:" in result.output


class TestCheckEdgeCommand:
    """Test the check-edge command."""

    def test_admissible_edge(self, diamond: Path) -> None:
        """Test that an admissible edge is reported OK."""
        result = runner.invoke(app, ["check-edge", str(diamond), "C", "B"])

        assert result.exit_code == 0
        assert "OK: C -> B can be added" in result.output

    def test_refused_edge(self, diamond: Path) -> None:
        """Test that an edge closing a cycle is refused with its path."""
        result = runner.invoke(app, ["check-edge", str(diamond), "D", "A"])

        assert result.exit_code == 1
        assert "Refused: D -> A would create a cycle" in result.output
        assert "D -> A -> B -> D" in result.output

    def test_self_edge_refused(self, diamond: Path) -> None:
        """Test that a self edge is refused."""
        result = runner.invoke(app, ["check-edge", str(diamond), "A", "A"])

        assert result.exit_code == 1
        assert "A -> A" in result.output

    def test_unknown_task_warned(self, diamond: Path) -> None:
        """Test that an unknown task id is warned about but still checked."""
        result = runner.invoke(app, ["check-edge", str(diamond), "A", "Z"])

        assert result.exit_code == 0
        assert "task 'Z' is not in" in result.output
