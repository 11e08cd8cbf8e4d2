"""Writers that persist a generated schedule as JSON, CSV or Excel."""

import json
from abc import ABC, abstractmethod
from datetime import date, timedelta
from pathlib import Path

import pandas as pd

from .models import parse_date
from .scheduler.schedule import Schedule
from .scheduler.utils import week_start

SCHEDULE_COLUMNS = ["date", "period", "id", "name", "grade_level", "grade_group", "teacher"]


def in_week_range(day: date, week_range: tuple[date, date]) -> bool:
    """Check if the Monday-Friday week holding day lies inside week_range."""
    monday = week_start(day)
    start, end = week_range
    return monday >= start and monday + timedelta(days=4) <= end


def schedule_frame(
    schedule: Schedule, week_range: tuple[date, date] | None = None
) -> pd.DataFrame:
    """One row per scheduled class, ordered by date and period.

    With week_range, only whole weeks inside the range are kept.
    """
    rows = schedule.to_dict()["classes"]
    if week_range is not None:
        rows = [r for r in rows if in_week_range(parse_date(r["date"]), week_range)]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


class BaseExporter(ABC):
    """Common interface of schedule writers."""

    @staticmethod
    def _target(output_path: str | Path) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @abstractmethod
    def export(self, schedule: Schedule, output_path: str | Path) -> Path:
        """Write schedule to output_path, creating parent folders.

        Returns:
            Path of the written file
        """


class JSONExporter(BaseExporter):
    """Full schedule document: placements, unscheduled ids, score, constraints."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, schedule: Schedule, output_path: str | Path) -> Path:
        path = self._target(output_path)
        payload = json.dumps(schedule.to_dict(), indent=self.indent, ensure_ascii=self.ensure_ascii)
        path.write_text(payload, encoding="utf-8")
        return path


class CSVExporter(BaseExporter):
    """Flat table of placements, one row per scheduled class."""

    def __init__(self, week_range: tuple[date, date] | None = None):
        self.week_range = week_range

    def export(self, schedule: Schedule, output_path: str | Path) -> Path:
        path = self._target(output_path)
        schedule_frame(schedule, self.week_range).to_csv(path, index=False)
        return path


class ExcelExporter(BaseExporter):
    """Workbook with Schedule, Score and Unscheduled sheets."""

    def __init__(self, week_range: tuple[date, date] | None = None):
        self.week_range = week_range

    def export(self, schedule: Schedule, output_path: str | Path) -> Path:
        path = self._target(output_path)
        data = schedule.to_dict()
        score = pd.DataFrame(list(data["score"].items()), columns=["Metric", "Value"])
        unscheduled = pd.DataFrame({"Class ID": data["unscheduled_class_ids"]}, columns=["Class ID"])

        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            schedule_frame(schedule, self.week_range).to_excel(writer, sheet_name="Schedule", index=False)
            score.to_excel(writer, sheet_name="Score", index=False)
            unscheduled.to_excel(writer, sheet_name="Unscheduled", index=False)
        return path


EXPORTERS: dict[str, type[BaseExporter]] = {
    "json": JSONExporter,
    "csv": CSVExporter,
    "excel": ExcelExporter,
}


def get_exporter(format_type: str, **options) -> BaseExporter:
    """Look up the exporter registered for format_type.

    options are passed to the exporter, e.g. week_range for csv and excel.

    Raises:
        ValueError: If no exporter handles the format
    """
    try:
        exporter_cls = EXPORTERS[format_type]
    except KeyError:
        raise ValueError(
            f"Unsupported format: {format_type} (expected one of {', '.join(EXPORTERS)})"
        ) from None
    return exporter_cls(**options)
