"""Class Scheduler - simulated-annealing scheduling of class sessions.

This module assigns class sessions to (date, period) slots over a multi-week
window, never placing a class on a slot it cannot attend, and optimising
grade-group cohesion, even distribution and grade progression.

Example usage:
    from datetime import date
    from class_scheduler import ClassItem, ScheduleConstraints, SchedulePreferences
    from class_scheduler import generate_schedule

    classes = [ClassItem(id="c1", grade_level="3", grade_group="lower")]
    schedule = generate_schedule(
        classes, date(2024, 1, 1), ScheduleConstraints(), SchedulePreferences()
    )

    for entry in schedule.classes:
        print(f"{entry.date} P{entry.period} | {entry.id}")

    # Export to JSON
    from class_scheduler.exporters import JSONExporter
    JSONExporter().export(schedule, "schedule.json")
"""

from .exceptions import (
    ConfigurationError,
    InvalidInputError,
    SchedulerError,
    SearchFailure,
    WorkerFault,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter
from .loaders import SchedulingRequest, load_request
from .models import (
    ClassItem,
    ConsecutivePeriods,
    GradeGroup,
    GradeProgression,
    ScheduleConstraints,
    ScheduledClass,
    SchedulePreferences,
    ScheduleScore,
    Slot,
)
from .scheduler import AnnealingConfig, ExecutionMode, ParallelScheduler, Schedule, generate_schedule

__version__ = "0.1.0"

__all__ = [
    # Entry point
    "generate_schedule",
    "ParallelScheduler",
    "AnnealingConfig",
    "ExecutionMode",
    # Models
    "ClassItem",
    "ScheduledClass",
    "Slot",
    "ConsecutivePeriods",
    "ScheduleConstraints",
    "GradeGroup",
    "GradeProgression",
    "SchedulePreferences",
    "ScheduleScore",
    "Schedule",
    # I/O
    "SchedulingRequest",
    "load_request",
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    # Exceptions
    "SchedulerError",
    "ConfigurationError",
    "InvalidInputError",
    "WorkerFault",
    "SearchFailure",
]
