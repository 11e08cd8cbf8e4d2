"""Mutable schedule state used by the search."""

from collections import Counter
from datetime import date, timedelta
from typing import TYPE_CHECKING, Any, Iterable, Sequence

from ..models import ClassItem, ScheduleConstraints, ScheduledClass, ScheduleScore, Slot
from .constants import DEFAULT_HORIZON_WEEKS
from .utils import week_start

if TYPE_CHECKING:
    from .scoring import Scorer


class Schedule:
    """An assignment of a subset of classes to (date, period) slots.

    The schedule keeps at most one entry per class id. It does not refuse a
    second class on an occupied slot; the placement code only offers free
    slots, and the scorer counts double bookings as violations.

    The score is cached and invalidated by every mutation. The class catalogue,
    constraints and scorer are shared between clones and never mutated.
    """

    def __init__(
        self,
        catalogue: Sequence[ClassItem],
        start_date: date,
        constraints: ScheduleConstraints,
        scorer: "Scorer",
        classes: Iterable[ScheduledClass] = (),
    ):
        self.catalogue = tuple(catalogue)
        self.start_date = start_date
        self.constraints = constraints
        self.scorer = scorer
        self._entries: dict[str, ScheduledClass] = {}
        # date -> period -> number of classes on that slot
        self._grid: dict[date, Counter[int]] = {}
        self._score: ScheduleScore | None = None
        for scheduled in classes:
            self.add_class(scheduled)

    # Mutations

    def add_class(self, scheduled: ScheduledClass) -> bool:
        """Append a placement; ignored if the class is already scheduled."""
        if scheduled.id in self._entries:
            return False
        self._entries[scheduled.id] = scheduled
        self._grid.setdefault(scheduled.date, Counter())[scheduled.period] += 1
        self._score = None
        return True

    def place(self, item: ClassItem, slot: Slot) -> bool:
        """Schedule a class on a slot."""
        return self.add_class(ScheduledClass(item, slot.date, slot.period))

    def remove_class(self, class_id: str) -> ScheduledClass | None:
        """Unschedule a class; no-op if it is not scheduled."""
        scheduled = self._entries.pop(class_id, None)
        if scheduled is None:
            return None
        periods = self._grid[scheduled.date]
        periods[scheduled.period] -= 1
        if periods[scheduled.period] <= 0:
            del periods[scheduled.period]
        if not periods:
            del self._grid[scheduled.date]
        self._score = None
        return scheduled

    def move_class(self, class_id: str, new_date: date, new_period: int) -> bool:
        """Move a scheduled class to another slot."""
        scheduled = self.remove_class(class_id)
        if scheduled is None:
            return False
        return self.add_class(ScheduledClass(scheduled.item, new_date, new_period))

    def clone(self) -> "Schedule":
        """Copy the assignment and score cache; share the read-only inputs."""
        copy = Schedule.__new__(Schedule)
        copy.catalogue = self.catalogue
        copy.start_date = self.start_date
        copy.constraints = self.constraints
        copy.scorer = self.scorer
        copy._entries = dict(self._entries)
        copy._grid = {day: Counter(periods) for day, periods in self._grid.items()}
        copy._score = self._score
        return copy

    # Queries

    @property
    def classes(self) -> list[ScheduledClass]:
        """Scheduled classes in placement order."""
        return list(self._entries.values())

    @property
    def score(self) -> ScheduleScore:
        if self._score is None:
            self._score = self.scorer.score(self)
        return self._score

    @property
    def end_date(self) -> date:
        """Latest scheduled date, or the default horizon if nothing is scheduled."""
        if not self._grid:
            return self.start_date + timedelta(weeks=DEFAULT_HORIZON_WEEKS)
        return max(self._grid)

    def is_scheduled(self, class_id: str) -> bool:
        return class_id in self._entries

    def get(self, class_id: str) -> ScheduledClass | None:
        return self._entries.get(class_id)

    def get_unscheduled_classes(self) -> list[ClassItem]:
        """Catalogue classes without a placement, in catalogue order."""
        return [item for item in self.catalogue if item.id not in self._entries]

    def get_scheduled_class_count(self) -> int:
        return len(self._entries)

    def get_total_class_count(self) -> int:
        return len(self.catalogue)

    def dates(self) -> list[date]:
        """Dates with at least one class, in calendar order."""
        return sorted(self._grid)

    def slot_occupancy(self, day: date, period: int) -> int:
        periods = self._grid.get(day)
        return periods[period] if periods else 0

    def count_on_date(self, day: date) -> int:
        periods = self._grid.get(day)
        return sum(periods.values()) if periods else 0

    def count_in_week(self, monday: date) -> int:
        """Number of classes in the Monday-based week starting at monday."""
        return sum(
            sum(periods.values())
            for day, periods in self._grid.items()
            if week_start(day) == monday
        )

    def occupied_periods(self, day: date) -> set[int]:
        periods = self._grid.get(day)
        return set(periods) if periods else set()

    def classes_on_date(self, day: date) -> list[ScheduledClass]:
        """Classes on a date, ordered by period."""
        return sorted(
            (s for s in self._entries.values() if s.date == day),
            key=lambda s: s.period,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "classes": [
                s.to_dict() for s in sorted(self._entries.values(), key=lambda s: s.slot)
            ],
            "unscheduled_class_ids": [c.id for c in self.get_unscheduled_classes()],
            "score": self.score.to_dict(),
            "constraints": self.constraints.to_dict(),
        }
