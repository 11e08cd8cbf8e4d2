"""Greedy construction of the starting schedule."""

import logging
from datetime import date
from typing import Sequence

from ..models import ClassItem, ScheduleConstraints
from .placement import SlotFinder
from .schedule import Schedule
from .scoring import Scorer

logger = logging.getLogger(__name__)


class InitialSolutionBuilder:
    """Places each class, in input order, on a randomly chosen legal slot."""

    def __init__(
        self,
        catalogue: Sequence[ClassItem],
        start_date: date,
        constraints: ScheduleConstraints,
        scorer: Scorer,
        slot_finder: SlotFinder,
    ):
        self.catalogue = tuple(catalogue)
        self.start_date = start_date
        self.constraints = constraints
        self.scorer = scorer
        self.slot_finder = slot_finder

    def build(self) -> Schedule:
        """Build a schedule; classes without a legal slot stay unscheduled."""
        schedule = Schedule(self.catalogue, self.start_date, self.constraints, self.scorer)
        for item in self.catalogue:
            slot = self.slot_finder.find_slot(schedule, item)
            if slot is None:
                logger.debug(f"No legal slot for class {item.id} in the search window")
                continue
            schedule.place(item, slot)

        # Computed once, after all placements
        schedule.score
        logger.debug(
            f"Initial schedule: {schedule.get_scheduled_class_count()}/"
            f"{schedule.get_total_class_count()} classes placed"
        )
        return schedule
