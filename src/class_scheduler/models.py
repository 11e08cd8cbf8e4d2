"""Data models for the class scheduling system."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from .exceptions import ConfigurationError

# Hard upper bounds on the working grid
MAX_PERIODS_PER_DAY = 8
MAX_PERIODS_PER_WEEK = 40
WORKING_DAYS_PER_WEEK = 5
CONSECUTIVE_LIMITS = (1, 2)


def parse_date(value: Any) -> date:
    """Parse a date from an ISO string, date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class GradeProgression(str, Enum):
    """Preferred ordering of grade levels through a day."""

    NONE = "none"
    LOW_TO_HIGH = "low-to-high"
    HIGH_TO_LOW = "high-to-low"


@dataclass(frozen=True, order=True)
class Slot:
    """A (date, period) position on the calendar grid."""

    date: date
    period: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Slot":
        """Create a Slot from a dictionary."""
        return cls(date=parse_date(data["date"]), period=int(data["period"]))

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "period": self.period}


@dataclass(frozen=True)
class ClassItem:
    """A schedulable class session."""

    id: str
    grade_level: str
    grade_group: str = ""
    teacher: str = ""
    name: str = ""
    total_conflicts: frozenset[Slot] = frozenset()
    partial_conflicts: tuple[Slot, ...] = ()

    def __post_init__(self) -> None:
        total = frozenset(self.total_conflicts)
        # A slot listed as both total and partial is forbidden
        partial = tuple(s for s in self.partial_conflicts if s not in total)
        object.__setattr__(self, "total_conflicts", total)
        object.__setattr__(self, "partial_conflicts", partial)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClassItem":
        """Create a ClassItem from a dictionary."""
        return cls(
            id=str(data["id"]),
            grade_level=str(data.get("grade_level", "")),
            grade_group=data.get("grade_group", "") or "",
            teacher=data.get("teacher", "") or "",
            name=data.get("name", "") or "",
            total_conflicts=frozenset(
                Slot.from_dict(c) for c in (data.get("total_conflicts") or [])
            ),
            partial_conflicts=tuple(
                Slot.from_dict(c) for c in (data.get("partial_conflicts") or [])
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "grade_level": self.grade_level,
            "grade_group": self.grade_group,
            "teacher": self.teacher,
            "total_conflicts": [s.to_dict() for s in sorted(self.total_conflicts)],
            "partial_conflicts": [s.to_dict() for s in self.partial_conflicts],
        }


@dataclass(frozen=True)
class ScheduledClass:
    """A class placed on a (date, period) slot."""

    item: ClassItem
    date: date
    period: int

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def slot(self) -> Slot:
        return Slot(self.date, self.period)

    def to_dict(self) -> dict[str, Any]:
        """Convert scheduled class to dictionary."""
        return {
            "id": self.item.id,
            "name": self.item.name,
            "grade_level": self.item.grade_level,
            "grade_group": self.item.grade_group,
            "teacher": self.item.teacher,
            "date": self.date.isoformat(),
            "period": self.period,
        }


@dataclass(frozen=True)
class ConsecutivePeriods:
    """Limit on back-to-back periods and the break that must follow."""

    maximum: int = 2
    require_break: int = 1


@dataclass(frozen=True)
class ScheduleConstraints:
    """Numeric limits and global blackout slots."""

    max_periods_per_day: int = MAX_PERIODS_PER_DAY
    max_periods_per_week: int = MAX_PERIODS_PER_WEEK
    max_classes_per_day: int | None = None
    consecutive_periods: ConsecutivePeriods = field(default_factory=ConsecutivePeriods)
    blackout_periods: frozenset[Slot] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "blackout_periods", frozenset(self.blackout_periods))
        if self.max_classes_per_day is None:
            object.__setattr__(self, "max_classes_per_day", self.max_periods_per_day)

    @property
    def daily_cap(self) -> int:
        """Effective number of classes allowed on one date."""
        return min(self.max_classes_per_day, self.max_periods_per_day)

    def validate(self) -> None:
        """Check limits once, before any search.

        Raises:
            ConfigurationError: If any limit is out of range.
        """
        if not 1 <= self.max_periods_per_day <= MAX_PERIODS_PER_DAY:
            raise ConfigurationError(
                "max_periods_per_day",
                self.max_periods_per_day,
                f"must be between 1 and {MAX_PERIODS_PER_DAY}",
            )
        week_limit = min(MAX_PERIODS_PER_WEEK, self.max_periods_per_day * WORKING_DAYS_PER_WEEK)
        if not 1 <= self.max_periods_per_week <= week_limit:
            raise ConfigurationError(
                "max_periods_per_week",
                self.max_periods_per_week,
                f"must be between 1 and {week_limit}",
            )
        if self.max_classes_per_day < 1:
            raise ConfigurationError(
                "max_classes_per_day", self.max_classes_per_day, "must be at least 1"
            )
        if self.consecutive_periods.maximum not in CONSECUTIVE_LIMITS:
            raise ConfigurationError(
                "consecutive_periods.maximum",
                self.consecutive_periods.maximum,
                "must be 1 or 2",
            )
        if self.consecutive_periods.require_break not in CONSECUTIVE_LIMITS:
            raise ConfigurationError(
                "consecutive_periods.require_break",
                self.consecutive_periods.require_break,
                "must be 1 or 2",
            )

    def with_blackouts(self, blackouts) -> "ScheduleConstraints":
        """Return a copy with additional blackout slots."""
        return ScheduleConstraints(
            max_periods_per_day=self.max_periods_per_day,
            max_periods_per_week=self.max_periods_per_week,
            max_classes_per_day=self.max_classes_per_day,
            consecutive_periods=self.consecutive_periods,
            blackout_periods=self.blackout_periods | frozenset(blackouts),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleConstraints":
        """Create constraints from a dictionary."""
        consecutive = data.get("consecutive_periods") or {}
        max_per_day = int(data.get("max_periods_per_day", MAX_PERIODS_PER_DAY))
        max_classes = data.get("max_classes_per_day")
        return cls(
            max_periods_per_day=max_per_day,
            max_periods_per_week=int(data.get("max_periods_per_week", MAX_PERIODS_PER_WEEK)),
            max_classes_per_day=int(max_classes) if max_classes is not None else None,
            consecutive_periods=ConsecutivePeriods(
                maximum=int(consecutive.get("maximum", 2)),
                require_break=int(consecutive.get("require_break", 1)),
            ),
            blackout_periods=frozenset(
                Slot.from_dict(b) for b in (data.get("blackout_periods") or [])
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_periods_per_day": self.max_periods_per_day,
            "max_periods_per_week": self.max_periods_per_week,
            "max_classes_per_day": self.max_classes_per_day,
            "consecutive_periods": {
                "maximum": self.consecutive_periods.maximum,
                "require_break": self.consecutive_periods.require_break,
            },
            "blackout_periods": [s.to_dict() for s in sorted(self.blackout_periods)],
        }


@dataclass(frozen=True)
class GradeGroup:
    """A cohort of grade levels that should share days."""

    id: str
    name: str = ""
    grades: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GradeGroup":
        return cls(
            id=str(data["id"]),
            name=data.get("name", "") or "",
            grades=tuple(str(g) for g in (data.get("grades") or [])),
        )


@dataclass(frozen=True)
class SchedulePreferences:
    """Soft preferences steering the scorer."""

    grade_groups: tuple[GradeGroup, ...] = ()
    prefer_same_grade_in_day: bool = True
    grade_progression: GradeProgression = GradeProgression.NONE

    def group_for(self, item: ClassItem) -> str:
        """Resolve the cohort a class belongs to.

        An explicit grade_group on the class wins; otherwise the first grade
        group listing the class's grade level; otherwise the grade level itself.
        """
        if item.grade_group:
            return item.grade_group
        for group in self.grade_groups:
            if item.grade_level in group.grades:
                return group.id
        return item.grade_level

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchedulePreferences":
        """Create preferences from a dictionary."""
        return cls(
            grade_groups=tuple(GradeGroup.from_dict(g) for g in (data.get("grade_groups") or [])),
            prefer_same_grade_in_day=bool(data.get("prefer_same_grade_in_day", True)),
            grade_progression=GradeProgression(data.get("grade_progression") or "none"),
        )


@dataclass(frozen=True)
class ScheduleScore:
    """Score components of a schedule and their weighted sum."""

    total_length: float = 0.0
    grade_group_cohesion: float = 0.0
    distribution_quality: float = 0.0
    grade_progression: float = 0.0
    constraint_violations: int = 0
    partial_conflict_penalty: float = 0.0
    aggregate: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_length": self.total_length,
            "grade_group_cohesion": self.grade_group_cohesion,
            "distribution_quality": self.distribution_quality,
            "grade_progression": self.grade_progression,
            "constraint_violations": self.constraint_violations,
            "partial_conflict_penalty": self.partial_conflict_penalty,
            "aggregate": self.aggregate,
        }
