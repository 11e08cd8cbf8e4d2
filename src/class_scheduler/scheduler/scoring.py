"""Schedule scoring.

The scorer turns a schedule into a fixed set of components and a weighted
aggregate that the annealer maximises:

- total_length: share of catalogue classes that are scheduled (0..1)
- grade_group_cohesion: per day 1 / number of distinct grade groups, averaged
- distribution_quality: 1 / (1 + variance of classes per used day)
- grade_progression: share of adjacent classes in the preferred grade order
- constraint_violations: placements on forbidden slots plus limit breaches
- partial_conflict_penalty: partial-conflict hits per scheduled class (0..1)

Scoring is deterministic: the same schedule always gets the same score.
"""

from collections import defaultdict
from dataclasses import dataclass, fields
from datetime import date
from typing import TYPE_CHECKING, Any

from ..models import GradeProgression, ScheduledClass, SchedulePreferences, ScheduleScore
from .conflicts import count_partial_conflicts, has_total_conflict
from .constants import SCORE_WEIGHTS
from .constraints import ConstraintSet
from .utils import parse_grade_rank

if TYPE_CHECKING:
    from .schedule import Schedule


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the score components in the aggregate."""

    total_length: float = SCORE_WEIGHTS["total_length"]
    grade_group_cohesion: float = SCORE_WEIGHTS["grade_group_cohesion"]
    distribution_quality: float = SCORE_WEIGHTS["distribution_quality"]
    grade_progression: float = SCORE_WEIGHTS["grade_progression"]
    constraint_violations: float = SCORE_WEIGHTS["constraint_violations"]
    partial_conflict_penalty: float = SCORE_WEIGHTS["partial_conflict_penalty"]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoreWeights":
        names = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in data.items() if k in names})


class Scorer:
    """Computes ScheduleScore values for schedules."""

    def __init__(
        self,
        constraint_set: ConstraintSet,
        preferences: SchedulePreferences,
        weights: ScoreWeights | None = None,
    ):
        self.constraint_set = constraint_set
        self.preferences = preferences
        self.weights = weights or ScoreWeights()

    def score(self, schedule: "Schedule") -> ScheduleScore:
        """Compute all components and the aggregate for a schedule."""
        scheduled = schedule.classes
        by_date: dict[date, list[ScheduledClass]] = defaultdict(list)
        for entry in scheduled:
            by_date[entry.date].append(entry)

        total = schedule.get_total_class_count()
        total_length = len(scheduled) / total if total else 0.0

        components = {
            "total_length": total_length,
            "grade_group_cohesion": self._cohesion(by_date),
            "distribution_quality": self._distribution(by_date),
            "grade_progression": self._progression(by_date),
            "constraint_violations": self._violations(schedule, scheduled),
            "partial_conflict_penalty": self._partial_penalty(scheduled),
        }
        return ScheduleScore(**components, aggregate=self.aggregate(components))

    def aggregate(self, components: dict[str, float]) -> float:
        """Weighted sum of score components."""
        weights = {f.name: getattr(self.weights, f.name) for f in fields(self.weights)}
        if self.preferences.grade_progression == GradeProgression.NONE:
            weights["grade_progression"] = 0.0
        if not self.preferences.prefer_same_grade_in_day:
            weights["grade_group_cohesion"] = 0.0
        return sum(weight * components[name] for name, weight in weights.items())

    def _cohesion(self, by_date: dict[date, list[ScheduledClass]]) -> float:
        if not by_date:
            return 0.0
        day_scores = []
        for entries in by_date.values():
            groups = {self.preferences.group_for(e.item) for e in entries}
            day_scores.append(1.0 / len(groups))
        return sum(day_scores) / len(day_scores)

    def _distribution(self, by_date: dict[date, list[ScheduledClass]]) -> float:
        if not by_date:
            return 0.0
        counts = [len(entries) for entries in by_date.values()]
        mean = sum(counts) / len(counts)
        variance = sum((c - mean) ** 2 for c in counts) / len(counts)
        return 1.0 / (1.0 + variance)

    def _progression(self, by_date: dict[date, list[ScheduledClass]]) -> float:
        direction = self.preferences.grade_progression
        if direction == GradeProgression.NONE or not by_date:
            return 0.0

        day_scores = []
        for entries in by_date.values():
            ranks = [parse_grade_rank(e.item.grade_level) for e in sorted(entries, key=lambda e: e.period)]
            ranks = [r for r in ranks if r is not None]
            pairs = list(zip(ranks, ranks[1:]))
            if not pairs:
                continue
            if direction == GradeProgression.LOW_TO_HIGH:
                ordered = sum(1 for a, b in pairs if a <= b)
            else:
                ordered = sum(1 for a, b in pairs if a >= b)
            day_scores.append(ordered / len(pairs))

        if not day_scores:
            return 1.0
        return sum(day_scores) / len(day_scores)

    def _violations(self, schedule: "Schedule", scheduled: list[ScheduledClass]) -> int:
        forbidden = sum(
            1 for e in scheduled if has_total_conflict(e.item, e.date, e.period)
        )
        return forbidden + self.constraint_set.count_breaches(schedule)

    def _partial_penalty(self, scheduled: list[ScheduledClass]) -> float:
        if not scheduled:
            return 0.0
        hits = sum(count_partial_conflicts(e.item, e.date, e.period) for e in scheduled)
        return min(1.0, hits / len(scheduled))
