"""Tests for schedule exporters."""

import json
from datetime import date

import pandas as pd
import pytest

from class_scheduler.exporters import (
    SCHEDULE_COLUMNS,
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
    in_week_range,
    schedule_frame,
)


@pytest.fixture
def sample_schedule(make_class, make_schedule, day):
    items = [
        make_class("c1", grade_level="1", name="Reading", teacher="Ana"),
        make_class("c2", grade_level="4", name="Géographie"),
        make_class("c3", grade_level="2"),
    ]
    return make_schedule(items, [(items[1], day(1), 2), (items[0], day(0), 3)])


class TestScheduleFrame:
    """Tests for the tabular view of a schedule."""

    def test_rows_sorted_by_slot(self, sample_schedule):
        frame = schedule_frame(sample_schedule)
        assert list(frame.columns) == SCHEDULE_COLUMNS
        assert list(frame["id"]) == ["c1", "c2"]

    def test_empty_schedule(self, make_class, make_schedule):
        frame = schedule_frame(make_schedule([make_class("a")]))
        assert frame.empty
        assert list(frame.columns) == SCHEDULE_COLUMNS


class TestExporters:
    """Tests for file exporters."""

    def test_json(self, sample_schedule, tmp_path):
        path = JSONExporter().export(sample_schedule, tmp_path / "out" / "schedule.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert [c["id"] for c in data["classes"]] == ["c1", "c2"]
        assert data["unscheduled_class_ids"] == ["c3"]
        assert "Géographie" in path.read_text(encoding="utf-8")

    def test_csv(self, sample_schedule, tmp_path):
        path = CSVExporter().export(sample_schedule, tmp_path / "schedule.csv")
        frame = pd.read_csv(path)
        assert list(frame["id"]) == ["c1", "c2"]
        assert list(frame["period"]) == [3, 2]

    def test_excel(self, sample_schedule, tmp_path):
        path = ExcelExporter().export(sample_schedule, tmp_path / "schedule.xlsx")
        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert set(sheets) == {"Schedule", "Score", "Unscheduled"}
        assert list(sheets["Schedule"]["id"]) == ["c1", "c2"]
        assert list(sheets["Unscheduled"]["Class ID"]) == ["c3"]
        assert "aggregate" in list(sheets["Score"]["Metric"])


class TestGetExporter:
    """Tests for get_exporter."""

    @pytest.mark.parametrize(
        "name, cls", [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)]
    )
    def test_known_formats(self, name, cls):
        assert isinstance(get_exporter(name), cls)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported format"):
            get_exporter("pdf")


@pytest.fixture
def two_week_schedule(make_class, make_schedule, day):
    items = [make_class("a"), make_class("b"), make_class("c")]
    return make_schedule(items, [(items[0], day(0), 1), (items[1], day(8), 2), (items[2], day(15), 3)])


class TestWeekRange:
    """Tests for exporting only whole weeks inside a date range."""

    def test_week_inside_range(self):
        assert in_week_range(date(2024, 1, 3), (date(2024, 1, 1), date(2024, 1, 5)))

    def test_partial_week_excluded(self):
        assert not in_week_range(date(2024, 1, 3), (date(2024, 1, 1), date(2024, 1, 4)))
        assert not in_week_range(date(2024, 1, 10), (date(2024, 1, 9), date(2024, 1, 31)))

    def test_frame_keeps_matching_weeks(self, two_week_schedule):
        frame = schedule_frame(two_week_schedule, (date(2024, 1, 8), date(2024, 1, 19)))
        assert list(frame["id"]) == ["b", "c"]

    def test_frame_outside_range_is_empty(self, sample_schedule):
        frame = schedule_frame(sample_schedule, (date(2024, 1, 8), date(2024, 1, 31)))
        assert frame.empty
        assert list(frame.columns) == SCHEDULE_COLUMNS

    def test_csv_with_week_range(self, two_week_schedule, tmp_path):
        exporter = get_exporter("csv", week_range=(date(2024, 1, 1), date(2024, 1, 12)))
        assert exporter.week_range == (date(2024, 1, 1), date(2024, 1, 12))
        frame = pd.read_csv(exporter.export(two_week_schedule, tmp_path / "schedule.csv"))
        assert list(frame["id"]) == ["a", "b"]

    def test_excel_with_week_range(self, two_week_schedule, tmp_path):
        exporter = ExcelExporter(week_range=(date(2024, 1, 15), date(2024, 1, 19)))
        path = exporter.export(two_week_schedule, tmp_path / "schedule.xlsx")
        sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        assert list(sheets["Schedule"]["id"]) == ["c"]
