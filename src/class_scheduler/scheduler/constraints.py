"""Global scheduling limits: daily/weekly caps, consecutive periods, blackouts."""

from datetime import date
from typing import TYPE_CHECKING

from ..models import ClassItem, ScheduleConstraints, Slot
from .conflicts import has_total_conflict
from .utils import week_start

if TYPE_CHECKING:
    from .schedule import Schedule


def period_runs(periods: set[int]) -> list[tuple[int, int]]:
    """Group occupied periods into (first, last) runs of adjacent periods."""
    runs: list[tuple[int, int]] = []
    for period in sorted(periods):
        if runs and period == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], period)
        else:
            runs.append((period, period))
    return runs


class ConstraintSet:
    """Validated constraint limits with the predicates the search relies on.

    Values are validated once at construction; ConfigurationError propagates
    to the caller before any search starts.
    """

    def __init__(self, constraints: ScheduleConstraints):
        constraints.validate()
        self.constraints = constraints
        self.maximum = constraints.consecutive_periods.maximum
        self.require_break = constraints.consecutive_periods.require_break

    @property
    def periods(self) -> list[int]:
        return list(range(1, self.constraints.max_periods_per_day + 1))

    def is_blackout(self, day: date, period: int) -> bool:
        return Slot(day, period) in self.constraints.blackout_periods

    def violates_max_per_day(self, schedule: "Schedule", day: date) -> bool:
        return schedule.count_on_date(day) > self.constraints.daily_cap

    def violates_max_per_week(self, schedule: "Schedule", monday: date) -> bool:
        return schedule.count_in_week(monday) > self.constraints.max_periods_per_week

    def violates_consecutive(self, schedule: "Schedule", day: date, period: int) -> bool:
        """Check the run of adjacent periods on day that includes period.

        period is treated as occupied, so this also answers whether a new
        placement there would break the rule.
        """
        runs = period_runs(schedule.occupied_periods(day) | {period})
        index = next(i for i, (first, last) in enumerate(runs) if first <= period <= last)
        first, last = runs[index]
        length = last - first + 1
        if length > self.maximum:
            return True
        if length == self.maximum and index + 1 < len(runs):
            if runs[index + 1][0] - last - 1 < self.require_break:
                return True
        if index > 0:
            prev_first, prev_last = runs[index - 1]
            if prev_last - prev_first + 1 == self.maximum and first - prev_last - 1 < self.require_break:
                return True
        return False

    def can_place(self, schedule: "Schedule", item: ClassItem, day: date, period: int) -> bool:
        """Check if a class may be added on (day, period) without any breach."""
        if not 1 <= period <= self.constraints.max_periods_per_day:
            return False
        if has_total_conflict(item, day, period) or self.is_blackout(day, period):
            return False
        if schedule.slot_occupancy(day, period) > 0:
            return False
        if schedule.count_on_date(day) >= self.constraints.daily_cap:
            return False
        if schedule.count_in_week(week_start(day)) >= self.constraints.max_periods_per_week:
            return False
        return not self.violates_consecutive(schedule, day, period)

    def count_breaches(self, schedule: "Schedule") -> int:
        """Count limit breaches across the whole schedule.

        Counts blackout placements, out-of-range periods, extra occupants of
        double-booked slots, days and weeks over their caps, and runs of
        periods that break the consecutive rule.
        """
        breaches = 0
        for scheduled in schedule.classes:
            if self.is_blackout(scheduled.date, scheduled.period):
                breaches += 1
            if not 1 <= scheduled.period <= self.constraints.max_periods_per_day:
                breaches += 1

        weeks = set()
        for day in schedule.dates():
            occupied = schedule.occupied_periods(day)
            breaches += sum(schedule.slot_occupancy(day, p) - 1 for p in occupied)
            if self.violates_max_per_day(schedule, day):
                breaches += 1
            weeks.add(week_start(day))

            runs = period_runs(occupied)
            for i, (first, last) in enumerate(runs):
                length = last - first + 1
                if length > self.maximum:
                    breaches += 1
                elif length == self.maximum and i + 1 < len(runs):
                    if runs[i + 1][0] - last - 1 < self.require_break:
                        breaches += 1

        breaches += sum(1 for monday in weeks if self.violates_max_per_week(schedule, monday))
        return breaches
