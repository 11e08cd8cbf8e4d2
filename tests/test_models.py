"""Tests for data models."""

from datetime import date, datetime

import pytest

from class_scheduler.exceptions import ConfigurationError
from class_scheduler.models import (
    ClassItem,
    GradeGroup,
    GradeProgression,
    ScheduleConstraints,
    ScheduledClass,
    SchedulePreferences,
    ScheduleScore,
    Slot,
    parse_date,
)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_string(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_iso_timestamp(self):
        """Test that a time part is dropped."""
        assert parse_date("2024-01-15T09:30:00Z") == date(2024, 1, 15)

    def test_datetime(self):
        assert parse_date(datetime(2024, 1, 15, 9, 30)) == date(2024, 1, 15)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("15/01/2024")


class TestSlot:
    """Tests for Slot model."""

    def test_from_dict(self):
        slot = Slot.from_dict({"date": "2024-01-02", "period": "3"})
        assert slot == Slot(date(2024, 1, 2), 3)

    def test_ordering(self):
        slots = [Slot(date(2024, 1, 2), 1), Slot(date(2024, 1, 1), 5), Slot(date(2024, 1, 1), 2)]
        assert sorted(slots)[0] == Slot(date(2024, 1, 1), 2)

    def test_to_dict(self):
        assert Slot(date(2024, 1, 2), 3).to_dict() == {"date": "2024-01-02", "period": 3}


class TestClassItem:
    """Tests for ClassItem model."""

    def test_from_dict(self):
        item = ClassItem.from_dict(
            {
                "id": 7,
                "name": "Algebra",
                "grade_level": 3,
                "grade_group": "lower",
                "teacher": "Lee",
                "total_conflicts": [{"date": "2024-01-01", "period": 1}],
                "partial_conflicts": [
                    {"date": "2024-01-01", "period": 2},
                    {"date": "2024-01-01", "period": 2},
                ],
            }
        )
        assert item.id == "7"
        assert item.grade_level == "3"
        assert item.total_conflicts == frozenset({Slot(date(2024, 1, 1), 1)})
        assert len(item.partial_conflicts) == 2

    def test_minimal_from_dict(self):
        item = ClassItem.from_dict({"id": "a", "grade_level": "1"})
        assert item.grade_group == ""
        assert item.total_conflicts == frozenset()
        assert item.partial_conflicts == ()

    def test_total_wins_over_partial(self):
        slot = Slot(date(2024, 1, 1), 1)
        item = ClassItem(id="a", grade_level="1", total_conflicts=frozenset({slot}), partial_conflicts=(slot,))
        assert item.partial_conflicts == ()

    def test_to_dict(self):
        item = ClassItem(id="a", grade_level="1", total_conflicts={Slot(date(2024, 1, 1), 1)})
        data = item.to_dict()
        assert data["total_conflicts"] == [{"date": "2024-01-01", "period": 1}]
        assert isinstance(item.total_conflicts, frozenset)

    def test_hashable(self):
        item = ClassItem(id="a", grade_level="1")
        assert {item: 1}[ClassItem(id="a", grade_level="1")] == 1


class TestScheduledClass:
    """Tests for ScheduledClass model."""

    def test_properties(self):
        item = ClassItem(id="a", grade_level="2", name="Art")
        scheduled = ScheduledClass(item, date(2024, 1, 3), 4)
        assert scheduled.id == "a"
        assert scheduled.slot == Slot(date(2024, 1, 3), 4)
        assert scheduled.to_dict()["date"] == "2024-01-03"
        assert scheduled.to_dict()["name"] == "Art"


class TestScheduleConstraints:
    """Tests for ScheduleConstraints model."""

    def test_defaults(self):
        constraints = ScheduleConstraints()
        assert constraints.max_periods_per_day == 8
        assert constraints.max_periods_per_week == 40
        assert constraints.max_classes_per_day == 8
        assert constraints.consecutive_periods.maximum == 2
        assert constraints.consecutive_periods.require_break == 1

    def test_daily_cap(self):
        assert ScheduleConstraints(max_classes_per_day=3).daily_cap == 3
        assert ScheduleConstraints(max_periods_per_day=4, max_classes_per_day=6).daily_cap == 4

    def test_validate_reports_field(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ScheduleConstraints(max_periods_per_day=0).validate()
        assert exc_info.value.field == "max_periods_per_day"
        assert exc_info.value.value == 0

    def test_from_dict(self):
        constraints = ScheduleConstraints.from_dict(
            {
                "max_periods_per_day": 6,
                "max_periods_per_week": 25,
                "consecutive_periods": {"maximum": 1, "require_break": 2},
                "blackout_periods": [{"date": "2024-01-01", "period": 1}],
            }
        )
        assert constraints.max_classes_per_day == 6
        assert constraints.consecutive_periods.maximum == 1
        assert Slot(date(2024, 1, 1), 1) in constraints.blackout_periods

    def test_with_blackouts(self):
        base = ScheduleConstraints(blackout_periods={Slot(date(2024, 1, 1), 1)})
        merged = base.with_blackouts([Slot(date(2024, 1, 2), 2)])
        assert len(merged.blackout_periods) == 2
        assert len(base.blackout_periods) == 1

    def test_round_trip_dict(self):
        constraints = ScheduleConstraints(max_classes_per_day=5)
        assert ScheduleConstraints.from_dict(constraints.to_dict()) == constraints


class TestSchedulePreferences:
    """Tests for SchedulePreferences model."""

    @pytest.fixture
    def cohorts(self):
        return SchedulePreferences(
            grade_groups=(
                GradeGroup(id="lower", grades=("1", "2")),
                GradeGroup(id="upper", grades=("2", "3")),
            )
        )

    def test_explicit_group(self, cohorts):
        assert cohorts.group_for(ClassItem(id="a", grade_level="1", grade_group="music")) == "music"

    def test_first_matching_group(self, cohorts):
        assert cohorts.group_for(ClassItem(id="a", grade_level="2")) == "lower"

    def test_falls_back_to_grade_level(self, cohorts):
        assert cohorts.group_for(ClassItem(id="a", grade_level="9")) == "9"

    def test_from_dict(self):
        preferences = SchedulePreferences.from_dict(
            {
                "grade_groups": [{"id": "lower", "name": "Lower", "grades": [1, 2]}],
                "prefer_same_grade_in_day": False,
                "grade_progression": "high-to-low",
            }
        )
        assert preferences.grade_groups[0].grades == ("1", "2")
        assert not preferences.prefer_same_grade_in_day
        assert preferences.grade_progression == GradeProgression.HIGH_TO_LOW

    def test_unknown_progression(self):
        with pytest.raises(ValueError):
            SchedulePreferences.from_dict({"grade_progression": "sideways"})


class TestScheduleScore:
    """Tests for ScheduleScore model."""

    def test_to_dict(self):
        score = ScheduleScore(total_length=0.5, constraint_violations=2, aggregate=-199.5)
        data = score.to_dict()
        assert data["total_length"] == 0.5
        assert data["constraint_violations"] == 2
        assert set(data) == {
            "total_length",
            "grade_group_cohesion",
            "distribution_quality",
            "grade_progression",
            "constraint_violations",
            "partial_conflict_penalty",
            "aggregate",
        }
