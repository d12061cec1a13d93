"""Tests for core.services.coverage and core.services.reports."""

from datetime import date, datetime

from conftest import BERLIN, time_entry_payload
from core.domain.models import DetailedReport, SummaryReport, TimeEntry
from core.services.coverage import missing_days
from core.services.reports import report_window, summarize_detailed, summary_rows


def at(year, month, day):
    return datetime(year, month, day, tzinfo=BERLIN)


def entry(start):
    return TimeEntry.model_validate(time_entry_payload(start=start))


class TestMissingDays:
    def test_weekdays_without_entries(self):
        entries = [entry("2021-01-04T09:00:00+01:00"), entry("2021-01-06T09:00:00+01:00")]

        # Mon 4th .. Sun 10th
        days = missing_days(entries, at(2021, 1, 4), at(2021, 1, 11))

        assert days == [date(2021, 1, 5), date(2021, 1, 7), date(2021, 1, 8)]

    def test_weekends_included_on_request(self):
        days = missing_days([], at(2021, 1, 9), at(2021, 1, 11), workdays_only=False)
        assert days == [date(2021, 1, 9), date(2021, 1, 10)]

    def test_entry_start_is_bucketed_in_local_time(self):
        # 23:30 UTC on the 4th is 00:30 on the 5th in Berlin.
        entries = [entry("2021-01-04T23:30:00+00:00")]

        days = missing_days(entries, at(2021, 1, 4), at(2021, 1, 6))

        assert days == [date(2021, 1, 4)]

    def test_end_is_exclusive(self):
        assert missing_days([], at(2021, 1, 4), at(2021, 1, 5)) == [date(2021, 1, 4)]


def test_report_window_makes_until_inclusive():
    assert report_window(at(2021, 1, 1), at(2021, 1, 6)) == (date(2021, 1, 1), date(2021, 1, 5))


def test_summarize_detailed_groups_by_project():
    report = DetailedReport.model_validate(
        {
            "data": [
                {"id": 1, "project": "b", "start": "2021-01-04T09:00:00+01:00", "dur": 3_600_000},
                {"id": 2, "project": "a", "start": "2021-01-04T10:00:00+01:00", "dur": 1_800_000},
                {"id": 3, "project": "b", "start": "2021-01-04T11:00:00+01:00", "dur": 5_400_000},
                {"id": 4, "start": "2021-01-04T12:00:00+01:00", "dur": 900_000},
            ]
        }
    )

    assert summarize_detailed(report) == {"(no project)": 0.25, "a": 0.5, "b": 2.5}


def test_summary_rows():
    report = SummaryReport.model_validate(
        {
            "total_grand": 9_000_000,
            "data": [
                {"id": 1, "title": {"project": "betamale gmbh", "client": "ACME"}, "time": 7_200_000},
                {"id": None, "title": {"project": None}, "time": 1_800_000},
            ],
        }
    )

    assert summary_rows(report) == [("betamale gmbh", "ACME", 2.0), ("(no project)", "", 0.5)]
