"""Test fixtures for class scheduler tests."""

from datetime import date, timedelta

import pytest

from class_scheduler.models import (
    ClassItem,
    GradeGroup,
    ScheduleConstraints,
    SchedulePreferences,
    Slot,
)
from class_scheduler.scheduler.config import AnnealingConfig
from class_scheduler.scheduler.constraints import ConstraintSet
from class_scheduler.scheduler.schedule import Schedule
from class_scheduler.scheduler.scoring import Scorer

# A Monday
START = date(2024, 1, 1)


def _day(offset: int) -> date:
    return START + timedelta(days=offset)


@pytest.fixture
def day():
    """Date offset days after the start date."""
    return _day


@pytest.fixture
def every_slot():
    """All slots of the first num_days days."""

    def _slots(num_days: int, periods: int = 8) -> list[Slot]:
        return [Slot(_day(d), p) for d in range(num_days) for p in range(1, periods + 1)]

    return _slots


@pytest.fixture
def start_date():
    return START


@pytest.fixture
def constraints():
    return ScheduleConstraints()


@pytest.fixture
def preferences():
    """Lower (grades 1-3) and upper (grades 4-6) cohorts."""
    return SchedulePreferences(
        grade_groups=(
            GradeGroup(id="lower", name="Lower Grades", grades=("1", "2", "3")),
            GradeGroup(id="upper", name="Upper Grades", grades=("4", "5", "6")),
        ),
        prefer_same_grade_in_day=True,
    )


@pytest.fixture
def make_class():
    """Factory for ClassItem with sensible defaults."""

    def _make(class_id: str, grade_level: str = "1", grade_group: str = "", **kwargs) -> ClassItem:
        return ClassItem(id=class_id, grade_level=grade_level, grade_group=grade_group, **kwargs)

    return _make


@pytest.fixture
def make_schedule(constraints, preferences):
    """Factory for schedules; placements are (item, date, period) triples."""

    def _make(catalogue, placements=(), constraints=constraints, preferences=preferences) -> Schedule:
        scorer = Scorer(ConstraintSet(constraints), preferences)
        schedule = Schedule(catalogue, START, constraints, scorer)
        for item, when, period in placements:
            schedule.place(item, Slot(when, period))
        return schedule

    return _make


@pytest.fixture
def fast_config():
    """Small, seeded search budget for tests."""
    return AnnealingConfig(
        initial_temperature=10.0,
        cooling_rate=0.9,
        min_temperature=0.01,
        iterations_per_temp=20,
        max_iterations=300,
        stall_limit=100,
        max_restarts=1,
        shake_interval=50,
        seed=7,
    )
