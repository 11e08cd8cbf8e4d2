"""Neighbour generation for the annealer."""

import random

from .constants import (
    ADD_BASE_PROBABILITY,
    ADD_MAX_PROBABILITY,
    ADD_SLOPE,
    RELOCATE_TOP_CANDIDATES,
    SHAKE_MAX_FRACTION,
    SHAKE_MIN_CLASSES,
    SHAKE_MIN_FRACTION,
    MoveType,
)
from .placement import SlotFinder
from .schedule import Schedule


class Mutator:
    """Produces a nearby schedule from the current one.

    Moves:
    - ADD: place an unscheduled class, more likely the less complete the schedule
    - RELOCATE: move one scheduled class to a low-penalty legal slot
    - SHAKE: unschedule a random slice of classes to escape a local optimum

    Every move works on a clone; the input schedule is never modified.
    """

    def __init__(self, slot_finder: SlotFinder, rng: random.Random):
        self.slot_finder = slot_finder
        self.rng = rng
        self.last_move = MoveType.NONE

    def mutate(self, schedule: Schedule, shake: bool = False) -> Schedule:
        """Return a neighbour of schedule.

        Args:
            schedule: Current schedule (left untouched)
            shake: If True, perform a shake instead of the regular moves
        """
        if shake:
            return self.shake(schedule)

        unscheduled = schedule.get_unscheduled_classes()
        if unscheduled:
            if self.rng.random() < self.add_probability(schedule):
                return self.add_unscheduled(schedule)
        return self.relocate(schedule)

    def add_probability(self, schedule: Schedule) -> float:
        total = schedule.get_total_class_count()
        completion = schedule.get_scheduled_class_count() / total if total else 1.0
        return min(ADD_MAX_PROBABILITY, ADD_BASE_PROBABILITY + (1 - completion) * ADD_SLOPE)

    def relocate(self, schedule: Schedule) -> Schedule:
        """Move one random class to one of its best legal destinations."""
        neighbour = schedule.clone()
        self.last_move = MoveType.NONE
        scheduled = neighbour.classes
        if not scheduled:
            return neighbour

        target = self.rng.choice(scheduled)
        neighbour.remove_class(target.id)
        candidates = [
            slot
            for slot in self.slot_finder.ranked_slots(neighbour, target.item)
            if slot != target.slot
        ]
        if not candidates:
            return schedule.clone()

        top = candidates[:RELOCATE_TOP_CANDIDATES]
        neighbour.place(target.item, self.rng.choice(top))
        self.last_move = MoveType.RELOCATE
        return neighbour

    def add_unscheduled(self, schedule: Schedule) -> Schedule:
        """Try to place one random unscheduled class around the current placements."""
        neighbour = schedule.clone()
        self.last_move = MoveType.NONE
        unscheduled = neighbour.get_unscheduled_classes()
        if not unscheduled:
            return neighbour

        item = self.rng.choice(unscheduled)
        slot = self.slot_finder.find_slot(neighbour, item)
        if slot is not None:
            neighbour.place(item, slot)
            self.last_move = MoveType.ADD
        return neighbour

    def shake(self, schedule: Schedule) -> Schedule:
        """Unschedule a 2%-20% slice of the scheduled classes (at least two)."""
        neighbour = schedule.clone()
        scheduled = neighbour.classes
        if not scheduled:
            self.last_move = MoveType.NONE
            return neighbour

        fraction = self.rng.uniform(SHAKE_MIN_FRACTION, SHAKE_MAX_FRACTION)
        count = min(len(scheduled), max(SHAKE_MIN_CLASSES, round(fraction * len(scheduled))))
        for victim in self.rng.sample(scheduled, count):
            neighbour.remove_class(victim.id)
        self.last_move = MoveType.SHAKE
        return neighbour
