"""Entry point of the scheduling core."""

from datetime import date
from typing import Iterable, Sequence

from ..models import ClassItem, ScheduleConstraints, SchedulePreferences, Slot, parse_date
from .config import AnnealingConfig
from .constants import DEFAULT_WORKER_COUNT, ExecutionMode
from .parallel import ParallelScheduler
from .schedule import Schedule
from .scoring import ScoreWeights


def generate_schedule(
    classes: Sequence[ClassItem],
    start_date: date | str,
    constraints: ScheduleConstraints,
    preferences: SchedulePreferences,
    blackout_periods: Iterable[Slot] = (),
    worker_count: int = DEFAULT_WORKER_COUNT,
    config: AnnealingConfig | None = None,
    mode: ExecutionMode = ExecutionMode.SEQUENTIAL,
    timeout: float | None = None,
    weights: ScoreWeights | None = None,
) -> Schedule:
    """
    Generate a schedule for the given classes.

    Blocking and free of side effects apart from logging; randomness comes
    from per-run generators seeded by config.seed.

    Args:
        classes: Classes to schedule.
        start_date: First day of the search window.
        constraints: Scheduling limits.
        preferences: Soft preferences.
        blackout_periods: Slots closed to every class, merged into constraints.
        worker_count: Number of independent annealing runs (capped at 8).
        config: Base annealing settings.
        mode: How runs are executed.
        timeout: Seconds to wait for pooled runs; runs still executing are
            abandoned, not stopped (see ParallelScheduler).
        weights: Optional score weight overrides.

    Returns:
        The best schedule found. Classes without any legal slot stay
        unscheduled and lower score.total_length.

    Raises:
        ConfigurationError: Invalid constraints or search settings.
        SearchFailure: No run scheduled a single class.
    """
    merged = constraints.with_blackouts(blackout_periods)
    scheduler = ParallelScheduler(
        classes,
        parse_date(start_date),
        merged,
        preferences,
        config=config,
        worker_count=worker_count,
        mode=mode,
        timeout=timeout,
        weights=weights,
    )
    return scheduler.generate_schedule()
