"""Search configuration for the annealer and the multi-run scheduler."""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from ..exceptions import ConfigurationError
from .constants import (
    COOLING_RATE_STEP,
    DEFAULT_ACCEPTANCE_PROBABILITY,
    DEFAULT_WINDOW_DAYS,
    ITERATIONS_PER_TEMP_STEP,
    MIN_TEMPERATURE_STEP,
    TEMPERATURE_STEP,
)


@dataclass(frozen=True)
class AnnealingConfig:
    """Tunables of one simulated-annealing run."""

    initial_temperature: float = 3000.0
    cooling_rate: float = 0.99
    min_temperature: float = 0.1
    iterations_per_temp: int = 400
    max_iterations: int = 10000
    stall_limit: int = 1000
    max_restarts: int = 3
    restart_temperature_ratio: float = 0.5
    # Non-improving iterations between shake moves
    shake_interval: int = 250
    acceptance_probability: float = DEFAULT_ACCEPTANCE_PROBABILITY
    window_days: int = DEFAULT_WINDOW_DAYS
    weekdays_only: bool = False
    seed: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnnealingConfig":
        """Create a config from a dictionary, ignoring unknown keys."""
        merged = asdict(cls())
        names = {f.name for f in fields(cls)}
        for key, value in data.items():
            if key in names:
                merged[key] = value
        return cls(**merged)

    def validate(self) -> None:
        """Check search settings.

        Raises:
            ConfigurationError: If a setting is out of range.
        """
        if self.min_temperature <= 0:
            raise ConfigurationError("min_temperature", self.min_temperature, "must be positive")
        if self.initial_temperature <= self.min_temperature:
            raise ConfigurationError(
                "initial_temperature",
                self.initial_temperature,
                "must be greater than min_temperature",
            )
        if not 0 < self.cooling_rate < 1:
            raise ConfigurationError("cooling_rate", self.cooling_rate, "must be in (0, 1)")
        for name in ("iterations_per_temp", "max_iterations", "stall_limit", "shake_interval", "window_days"):
            if getattr(self, name) < 1:
                raise ConfigurationError(name, getattr(self, name), "must be at least 1")
        if self.max_restarts < 0:
            raise ConfigurationError("max_restarts", self.max_restarts, "must not be negative")
        if not 0 < self.restart_temperature_ratio <= 1:
            raise ConfigurationError(
                "restart_temperature_ratio", self.restart_temperature_ratio, "must be in (0, 1]"
            )
        if not 0 < self.acceptance_probability <= 1:
            raise ConfigurationError(
                "acceptance_probability", self.acceptance_probability, "must be in (0, 1]"
            )

    def for_run(self, index: int) -> "AnnealingConfig":
        """Diversify the settings for run number index (0-based)."""
        return replace(
            self,
            initial_temperature=self.initial_temperature * (1 + index * TEMPERATURE_STEP),
            cooling_rate=self.cooling_rate - index * COOLING_RATE_STEP,
            min_temperature=self.min_temperature * (1 + index * MIN_TEMPERATURE_STEP),
            iterations_per_temp=self.iterations_per_temp + index * ITERATIONS_PER_TEMP_STEP,
            seed=None if self.seed is None else self.seed + index,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
