"""Per-class conflict lookups."""

from dataclasses import dataclass
from datetime import date

from ..models import ClassItem, Slot


@dataclass(frozen=True)
class ConflictCheck:
    """Result of checking one class against one slot."""

    has_conflict: bool
    partial_conflict_count: int


def has_total_conflict(item: ClassItem, day: date, period: int) -> bool:
    """Check if a class must never be placed on (day, period)."""
    return Slot(day, period) in item.total_conflicts


def count_partial_conflicts(item: ClassItem, day: date, period: int) -> int:
    """Count partial-conflict entries of a class on (day, period).

    Duplicate entries each count, so denser conflict data weighs more.
    """
    slot = Slot(day, period)
    return sum(1 for s in item.partial_conflicts if s == slot)


def check_class_conflicts(day: date, period: int, item: ClassItem) -> ConflictCheck:
    """Combine the total and partial conflict checks for a slot."""
    return ConflictCheck(
        has_conflict=has_total_conflict(item, day, period),
        partial_conflict_count=count_partial_conflicts(item, day, period),
    )
