"""Loading of scheduling requests from JSON files."""

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from .exceptions import InvalidInputError
from .models import ClassItem, ScheduleConstraints, SchedulePreferences, Slot, parse_date
from .scheduler.config import AnnealingConfig
from .scheduler.constants import DEFAULT_WORKER_COUNT


@dataclass
class SchedulingRequest:
    """Everything generate_schedule needs, as read from a request file."""

    classes: list[ClassItem]
    start_date: date
    constraints: ScheduleConstraints = field(default_factory=ScheduleConstraints)
    preferences: SchedulePreferences = field(default_factory=SchedulePreferences)
    blackout_periods: list[Slot] = field(default_factory=list)
    search: AnnealingConfig = field(default_factory=AnnealingConfig)
    workers: int = DEFAULT_WORKER_COUNT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SchedulingRequest":
        """Create a request from a dictionary.

        Expected keys: start_date, classes; optional constraints, preferences,
        blackout_periods, search, workers.
        """
        return cls(
            classes=[ClassItem.from_dict(c) for c in data["classes"]],
            start_date=parse_date(data["start_date"]),
            constraints=ScheduleConstraints.from_dict(data.get("constraints") or {}),
            preferences=SchedulePreferences.from_dict(data.get("preferences") or {}),
            blackout_periods=[Slot.from_dict(b) for b in (data.get("blackout_periods") or [])],
            search=AnnealingConfig.from_dict(data.get("search") or {}),
            workers=int(data.get("workers", DEFAULT_WORKER_COUNT)),
        )


def load_json(input_path: Path | str) -> dict:
    """Load a JSON object from a file.

    Raises:
        InvalidInputError: If the file is not valid JSON or not an object.
    """
    try:
        with open(input_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"not valid JSON ({e})", str(input_path)) from e
    if not isinstance(data, dict):
        raise InvalidInputError("top-level value must be an object", str(input_path))
    return data


def load_request(input_path: Path | str) -> SchedulingRequest:
    """Load a scheduling request from a JSON file.

    Args:
        input_path: Path to the request JSON file

    Returns:
        Parsed SchedulingRequest

    Raises:
        InvalidInputError: If required fields are missing or malformed.
    """
    data = load_json(input_path)
    try:
        return SchedulingRequest.from_dict(data)
    except KeyError as e:
        raise InvalidInputError(f"missing field {e}", str(input_path)) from e
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidInputError(str(e), str(input_path)) from e
