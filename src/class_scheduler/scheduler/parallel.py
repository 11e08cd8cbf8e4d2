"""Multi-run scheduler: several independent annealing runs, best one wins."""

import concurrent.futures
import logging
from datetime import date
from typing import Sequence

from ..exceptions import ConfigurationError, InvalidInputError, SearchFailure, WorkerFault
from ..models import ClassItem, ScheduleConstraints, SchedulePreferences
from .annealing import AnnealingResult, anneal
from .config import AnnealingConfig
from .constants import DEFAULT_WORKER_COUNT, MAX_WORKER_COUNT, ExecutionMode
from .schedule import Schedule
from .scoring import ScoreWeights

logger = logging.getLogger(__name__)


class ParallelScheduler:
    """Runs diversified annealing searches and keeps the best schedule.

    Runs share nothing mutable: each one gets its own settings, seed and
    schedules. Results are only read after every run has finished (or timed
    out), so the reduction does not depend on how runs were executed.
    """

    def __init__(
        self,
        classes: Sequence[ClassItem],
        start_date: date,
        constraints: ScheduleConstraints,
        preferences: SchedulePreferences,
        config: AnnealingConfig | None = None,
        worker_count: int = DEFAULT_WORKER_COUNT,
        mode: ExecutionMode = ExecutionMode.SEQUENTIAL,
        timeout: float | None = None,
        weights: ScoreWeights | None = None,
    ):
        """
        Initialize the scheduler and validate all settings.

        Args:
            classes: Class catalogue to schedule.
            start_date: First day of the search window.
            constraints: Scheduling limits and blackouts.
            preferences: Soft preferences for scoring.
            config: Base annealing settings; run i uses config.for_run(i).
            worker_count: Number of runs, capped at MAX_WORKER_COUNT.
            mode: Sequential, thread pool or process pool execution.
            timeout: Seconds to wait for pooled runs; late runs are dropped
                from the reduction. Runs not yet started are cancelled, but a
                run already executing cannot be interrupted: its thread or
                worker process keeps running until the run finishes, after
                run() has returned. Keep max_iterations bounded when using it.
            weights: Optional score weight overrides.

        Raises:
            ConfigurationError: If constraints, search settings or the worker
                count are invalid.
            InvalidInputError: If there are no classes or ids repeat.
        """
        if worker_count < 1:
            raise ConfigurationError("worker_count", worker_count, "must be at least 1")
        if not classes:
            raise InvalidInputError("no classes to schedule")
        ids = [c.id for c in classes]
        if len(set(ids)) != len(ids):
            raise InvalidInputError("class ids must be unique")

        constraints.validate()
        self.classes = tuple(classes)
        self.start_date = start_date
        self.constraints = constraints
        self.preferences = preferences
        self.config = config or AnnealingConfig()
        self.worker_count = min(worker_count, MAX_WORKER_COUNT)
        self.mode = ExecutionMode(mode)
        self.timeout = timeout
        self.weights = weights
        self.run_configs = [self.config.for_run(i) for i in range(self.worker_count)]
        for run_config in self.run_configs:
            run_config.validate()
        self.results: list[AnnealingResult | None] = []
        self.faults: list[WorkerFault] = []

    def _run_args(self, index: int) -> tuple:
        return (
            self.classes,
            self.start_date,
            self.constraints,
            self.preferences,
            self.run_configs[index],
            self.weights,
        )

    def _run_sequential(self) -> list[AnnealingResult | BaseException | None]:
        outcomes: list[AnnealingResult | BaseException | None] = []
        for i in range(self.worker_count):
            try:
                outcomes.append(anneal(*self._run_args(i)))
            except Exception as e:
                outcomes.append(e)
        return outcomes

    def _run_pooled(self) -> list[AnnealingResult | BaseException | None]:
        if self.mode == ExecutionMode.PROCESS:
            executor = concurrent.futures.ProcessPoolExecutor(max_workers=self.worker_count)
        else:
            executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.worker_count)

        try:
            futures = [executor.submit(anneal, *self._run_args(i)) for i in range(self.worker_count)]
            done, _ = concurrent.futures.wait(futures, timeout=self.timeout)
            outcomes: list[AnnealingResult | BaseException | None] = []
            for future in futures:
                if future not in done:
                    future.cancel()
                    outcomes.append(None)
                elif future.exception() is not None:
                    outcomes.append(future.exception())
                else:
                    outcomes.append(future.result())
            return outcomes
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def run(self) -> AnnealingResult:
        """Execute all runs and return the best result.

        Raises:
            SearchFailure: If no run produced a schedule with at least one class.
        """
        logger.info(
            f"Starting {self.worker_count} annealing run(s) ({self.mode.value}) "
            f"for {len(self.classes)} classes"
        )
        if self.mode == ExecutionMode.SEQUENTIAL:
            outcomes = self._run_sequential()
        else:
            outcomes = self._run_pooled()

        self.results = []
        self.faults = []
        best: AnnealingResult | None = None
        for index, outcome in enumerate(outcomes):
            fault = self._check_outcome(index, outcome)
            if fault is not None:
                self.faults.append(fault)
                self.results.append(None)
                logger.warning(f"Excluding run {index}: {fault.cause}")
                continue
            self.results.append(outcome)
            # Strictly greater: ties keep the earlier run
            if best is None or outcome.aggregate > best.aggregate:
                best = outcome

        if best is None:
            raise SearchFailure(self.worker_count, self.faults)

        unscheduled = best.schedule.get_unscheduled_classes()
        if unscheduled:
            logger.warning(
                f"{len(unscheduled)} class(es) could not be scheduled: "
                f"{', '.join(c.id for c in unscheduled[:10])}"
            )
        logger.info(
            f"Best run scheduled {best.schedule.get_scheduled_class_count()}/"
            f"{len(self.classes)} classes with score {best.aggregate:.4f}"
        )
        return best

    def _check_outcome(self, index: int, outcome) -> WorkerFault | None:
        if outcome is None:
            return WorkerFault(index, "timed out")
        if isinstance(outcome, BaseException):
            return WorkerFault(index, outcome)
        if outcome.schedule.get_scheduled_class_count() == 0:
            return WorkerFault(index, "no classes scheduled")
        return None

    def generate_schedule(self) -> Schedule:
        """Run the search and return the best schedule."""
        return self.run().schedule
