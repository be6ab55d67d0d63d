"""Tests for data models."""

from datetime import date

import pytest

from critpath.models import Dependency, RelationType, Task


class TestRelationType:
    """Test relation parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("finish_to_start", RelationType.FINISH_TO_START),
            ("START_TO_START", RelationType.START_TO_START),
            ("finish-to-finish", RelationType.FINISH_TO_FINISH),
            ("SF", RelationType.START_TO_FINISH),
            ("fs", RelationType.FINISH_TO_START),
            (RelationType.START_TO_START, RelationType.START_TO_START),
        ],
    )
    def test_parse_known(self, value: str, expected: RelationType) -> None:
        """Test that values, short codes and members all parse."""
        assert RelationType.parse(value) == expected

    @pytest.mark.parametrize("value", ["blocks", "", None, 3])
    def test_parse_unknown_returns_none(self, value: object) -> None:
        """Test that unrecognised values give None instead of raising."""
        assert RelationType.parse(value) is None  # type: ignore[arg-type]

    def test_endpoint_properties(self) -> None:
        """Test which endpoints each relation anchors and constrains."""
        assert RelationType.FINISH_TO_START.from_finish
        assert not RelationType.FINISH_TO_START.constrains_finish
        assert not RelationType.START_TO_START.from_finish
        assert RelationType.FINISH_TO_FINISH.constrains_finish
        assert RelationType.START_TO_FINISH.constrains_finish
        assert not RelationType.START_TO_FINISH.from_finish


class TestDependencyLag:
    """Test lag parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 0),
            (3, 3),
            (-2, -2),
            ("4", 4),
            ("4d", 4),
            ("-1d", -1),
            ("+2d", 2),
            ("2w", 14),
            (" 1 W ", 7),
            (5.0, 5),
        ],
    )
    def test_parse_lag(self, value: object, expected: int) -> None:
        """Test that day and week lags parse to whole days."""
        assert Dependency.parse_lag(value) == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", ["soon", "1.5d", "3m", 1.5, True])
    def test_invalid_lag_raises(self, value: object) -> None:
        """Test that fractional, boolean and unknown-unit lags are rejected."""
        with pytest.raises(ValueError):
            Dependency.parse_lag(value)  # type: ignore[arg-type]

    def test_str_shows_relation_and_lag(self) -> None:
        """Test that str() shows the relation and a signed lag."""
        dep = Dependency("d1", "A", "B", RelationType.START_TO_START, lag=-1)
        assert str(dep) == "A -[start_to_start]-> B (-1d)"

    def test_str_keeps_unknown_relation_text(self) -> None:
        """Test that str() shows an unknown relation as given and omits zero lag."""
        dep = Dependency("d1", "A", "B", "blocks")
        assert str(dep) == "A -[blocks]-> B"


class TestTask:
    """Test task helpers."""

    def test_has_dates_requires_both(self) -> None:
        """Test that has_dates needs both start and end."""
        assert Task("A", date(2025, 1, 1), date(2025, 1, 2)).has_dates
        assert not Task("A", start_date=date(2025, 1, 1)).has_dates
        assert not Task("A", end_date=date(2025, 1, 2)).has_dates
        assert not Task("A").has_dates

    def test_tasks_are_immutable(self) -> None:
        """Test that task fields cannot be reassigned."""
        task = Task("A")
        with pytest.raises(AttributeError):
            task.id = "B"  # type: ignore[misc]
