"""Slot search shared by the initial builder and the mutator."""

import random
from datetime import date
from typing import TYPE_CHECKING, Sequence

from ..models import ClassItem, Slot
from .conflicts import count_partial_conflicts
from .constraints import ConstraintSet

if TYPE_CHECKING:
    from .schedule import Schedule


class SlotFinder:
    """Finds legal slots for a class inside the search window."""

    def __init__(
        self,
        constraint_set: ConstraintSet,
        dates: Sequence[date],
        rng: random.Random,
        acceptance_probability: float,
    ):
        self.constraint_set = constraint_set
        self.dates = list(dates)
        self.periods = constraint_set.periods
        self.rng = rng
        self.acceptance_probability = acceptance_probability

    def find_slot(self, schedule: "Schedule", item: ClassItem) -> Slot | None:
        """Scan shuffled dates and periods for a slot to place item on.

        Each legal slot is taken with acceptance_probability; when every
        legal slot is passed over, the first legal slot seen is used.

        Returns:
            The chosen slot, or None if no legal slot exists in the window.
        """
        dates = self.dates[:]
        periods = self.periods[:]
        self.rng.shuffle(dates)
        self.rng.shuffle(periods)
        daily_cap = self.constraint_set.constraints.daily_cap

        fallback: Slot | None = None
        for day in dates:
            if schedule.count_on_date(day) >= daily_cap:
                continue
            for period in periods:
                if not self.constraint_set.can_place(schedule, item, day, period):
                    continue
                slot = Slot(day, period)
                if fallback is None:
                    fallback = slot
                if self.rng.random() < self.acceptance_probability:
                    return slot
        return fallback

    def legal_slots(self, schedule: "Schedule", item: ClassItem) -> list[Slot]:
        """All slots in the window where item could be added."""
        return [
            Slot(day, period)
            for day in self.dates
            for period in self.periods
            if self.constraint_set.can_place(schedule, item, day, period)
        ]

    def ranked_slots(self, schedule: "Schedule", item: ClassItem) -> list[Slot]:
        """Legal slots ordered by partial-conflict count, ties in random order."""
        slots = self.legal_slots(schedule, item)
        self.rng.shuffle(slots)
        slots.sort(key=lambda s: count_partial_conflicts(item, s.date, s.period))
        return slots
