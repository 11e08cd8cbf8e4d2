"""Class session scheduling core based on simulated annealing.

This package assigns class sessions to (date, period) slots over a multi-week
window. Hard conflicts are never violated by placements; soft preferences
(grade-group cohesion, even distribution, grade progression) are optimised
by several independent annealing runs, and the best run wins.

Main classes:
- ParallelScheduler: Runs diversified annealing searches and picks the best
- SimulatedAnnealer: A single annealing run
- Schedule: Mutable schedule state with a cached score
- Scorer: Computes score components and the weighted aggregate

Usage:
    from class_scheduler.scheduler import generate_schedule

    schedule = generate_schedule(classes, date(2024, 1, 1), constraints, preferences)
    print(schedule.score.total_length)
"""

from .annealing import AnnealingResult, SimulatedAnnealer, anneal
from .config import AnnealingConfig
from .conflicts import ConflictCheck, check_class_conflicts, count_partial_conflicts, has_total_conflict
from .constants import (
    DEFAULT_WINDOW_DAYS,
    DEFAULT_WORKER_COUNT,
    MAX_WORKER_COUNT,
    SCORE_WEIGHTS,
    ExecutionMode,
    MoveType,
)
from .constraints import ConstraintSet
from .engine import generate_schedule
from .initial import InitialSolutionBuilder
from .mutation import Mutator
from .parallel import ParallelScheduler
from .placement import SlotFinder
from .schedule import Schedule
from .scoring import Scorer, ScoreWeights

__all__ = [
    # Entry point
    "generate_schedule",
    "ParallelScheduler",
    "SimulatedAnnealer",
    "AnnealingResult",
    "anneal",
    # Components
    "Schedule",
    "Scorer",
    "ScoreWeights",
    "ConstraintSet",
    "InitialSolutionBuilder",
    "Mutator",
    "SlotFinder",
    # Conflicts
    "ConflictCheck",
    "check_class_conflicts",
    "count_partial_conflicts",
    "has_total_conflict",
    # Configuration
    "AnnealingConfig",
    "ExecutionMode",
    "MoveType",
    "DEFAULT_WINDOW_DAYS",
    "DEFAULT_WORKER_COUNT",
    "MAX_WORKER_COUNT",
    "SCORE_WEIGHTS",
]
