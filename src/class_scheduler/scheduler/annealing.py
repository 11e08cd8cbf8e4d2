"""Simulated-annealing search over schedules."""

import logging
import math
import random
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..models import ClassItem, ScheduleConstraints, SchedulePreferences
from .config import AnnealingConfig
from .constraints import ConstraintSet
from .initial import InitialSolutionBuilder
from .mutation import Mutator
from .placement import SlotFinder
from .schedule import Schedule
from .scoring import Scorer, ScoreWeights
from .utils import date_range

logger = logging.getLogger(__name__)


@dataclass
class AnnealingResult:
    """Best schedule of one run plus search statistics."""

    schedule: Schedule
    iterations: int = 0
    restarts: int = 0
    accepted_moves: int = 0
    improvements: int = 0
    final_temperature: float = 0.0
    elapsed_seconds: float = 0.0
    moves: Counter = field(default_factory=Counter)

    @property
    def aggregate(self) -> float:
        return self.schedule.score.aggregate


class SimulatedAnnealer:
    """One annealing run.

    The run owns its random generator and every schedule it creates, so
    several runs can execute side by side without sharing mutable state.
    """

    def __init__(
        self,
        classes: Sequence[ClassItem],
        start_date: date,
        constraints: ScheduleConstraints,
        preferences: SchedulePreferences,
        config: AnnealingConfig | None = None,
        weights: ScoreWeights | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or AnnealingConfig()
        self.config.validate()
        self.constraint_set = ConstraintSet(constraints)
        self.rng = rng or random.Random(self.config.seed)
        self.scorer = Scorer(self.constraint_set, preferences, weights)

        dates = date_range(start_date, self.config.window_days, self.config.weekdays_only)
        self.slot_finder = SlotFinder(
            self.constraint_set, dates, self.rng, self.config.acceptance_probability
        )
        self.builder = InitialSolutionBuilder(
            classes, start_date, constraints, self.scorer, self.slot_finder
        )
        self.mutator = Mutator(self.slot_finder, self.rng)

    def accept(self, delta: float, temperature: float) -> bool:
        """Metropolis rule: take improvements, take worse moves with exp(delta / T)."""
        if delta > 0:
            return True
        return self.rng.random() < math.exp(delta / temperature)

    def run(self) -> AnnealingResult:
        """Search and return the best schedule seen."""
        cfg = self.config
        started = time.perf_counter()

        current = self.builder.build()
        best = current.clone()
        result = AnnealingResult(schedule=best)

        temperature = cfg.initial_temperature
        iteration = 0
        last_improvement = 0
        at_temperature = 0

        while temperature > cfg.min_temperature and iteration < cfg.max_iterations:
            stalled_for = iteration - last_improvement
            if stalled_for >= cfg.stall_limit:
                if result.restarts >= cfg.max_restarts:
                    logger.debug(f"Stalled for {stalled_for} iterations, stopping")
                    break
                result.restarts += 1
                temperature = max(
                    cfg.initial_temperature * cfg.restart_temperature_ratio,
                    cfg.min_temperature * 2,
                )
                at_temperature = 0
                current = self.mutator.shake(best)
                last_improvement = iteration
                logger.debug(f"Restart {result.restarts} at iteration {iteration}, T={temperature:.3f}")
                continue

            shake = stalled_for > 0 and stalled_for % cfg.shake_interval == 0
            candidate = self.mutator.mutate(current, shake=shake)
            result.moves[self.mutator.last_move.value] += 1

            delta = candidate.score.aggregate - current.score.aggregate
            if self.accept(delta, temperature):
                current = candidate
                result.accepted_moves += 1

            # Ties keep the existing best
            if candidate.score.aggregate > best.score.aggregate:
                best = candidate.clone()
                last_improvement = iteration
                result.improvements += 1

            iteration += 1
            at_temperature += 1
            if at_temperature >= cfg.iterations_per_temp:
                temperature *= cfg.cooling_rate
                at_temperature = 0
                logger.debug(f"Iteration {iteration}: T={temperature:.3f}, best {best.score.aggregate:.4f}")

        result.schedule = best
        result.iterations = iteration
        result.final_temperature = temperature
        result.elapsed_seconds = time.perf_counter() - started

        logger.info(
            f"Annealing finished after {iteration} iterations "
            f"({result.restarts} restarts): {best.get_scheduled_class_count()}/"
            f"{best.get_total_class_count()} classes, score {best.score.aggregate:.4f}"
        )
        return result


def anneal(
    classes: Sequence[ClassItem],
    start_date: date,
    constraints: ScheduleConstraints,
    preferences: SchedulePreferences,
    config: AnnealingConfig | None = None,
    weights: ScoreWeights | None = None,
) -> AnnealingResult:
    """Run a single annealing search; module-level so process pools can pickle it."""
    annealer = SimulatedAnnealer(classes, start_date, constraints, preferences, config, weights)
    return annealer.run()
