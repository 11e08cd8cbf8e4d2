"""Custom exceptions for the class scheduler."""

from typing import Any


class SchedulerError(Exception):
    """Base exception for scheduler errors."""

    pass


class ConfigurationError(SchedulerError):
    """A constraint or search setting has an invalid value."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{field}': {value!r} ({reason})")


class InvalidInputError(SchedulerError):
    """A scheduling request could not be read."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        location = f" in '{source}'" if source else ""
        super().__init__(f"Invalid input{location}: {message}")


class WorkerFault(SchedulerError):
    """One annealing run failed or produced nothing usable."""

    def __init__(self, run_index: int, cause: BaseException | str):
        self.run_index = run_index
        self.cause = cause
        super().__init__(f"Run {run_index} failed: {cause}")


class SearchFailure(SchedulerError):
    """Every annealing run failed or scheduled zero classes."""

    def __init__(self, run_count: int, faults: list[WorkerFault] | None = None):
        self.run_count = run_count
        self.faults = faults or []
        message = f"No usable schedule produced by {run_count} run(s)"
        if self.faults:
            message += ": " + "; ".join(str(f) for f in self.faults)
        super().__init__(message)
