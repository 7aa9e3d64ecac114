"""Unit tests for markdown dashboard rendering."""
from __future__ import annotations

import datetime
from unittest.mock import patch

import pytest

from dept_analytics.records import FeedbackRecord
from dept_analytics.reporting.aggregator import analyze_department
from dept_analytics.reporting.context import build_dashboard_context
from dept_analytics.reporting.models import AnalyticsReport
from dept_analytics.reporting.render import render_no_data, render_report


def _sample_report() -> AnalyticsReport:
    ts = datetime.datetime(2025, 3, 5, 9, tzinfo=datetime.timezone.utc)
    records = [
        FeedbackRecord(1, "library", {"Staff helpfulness and knowledge": 9}, timestamp=ts),
        FeedbackRecord(
            2,
            "library",
            {"Staff helpfulness and knowledge": 7, "Noise": 2},
            comments="Too loud in the evenings",
            timestamp=ts,
            department="Chemistry",
            name="Meera",
        ),
    ]
    return analyze_department(records, "library")


@pytest.fixture()
def report() -> AnalyticsReport:
    return _sample_report()


def test_render_report_basic(report: AnalyticsReport):
    out = render_report(report, "Library Services")

    assert "# Department Analytics: Library Services" in out
    assert "**Total Responses:** 2 (75.0% completion)" in out
    assert "| Staff helpfulness and knowledge | 8.0 | 2 |" in out
    assert "| Below Average (3-4) | 0 |" in out
    assert "- Mar 5: 2" in out
    assert "> Too loud in the evenings" in out
    assert "_Meera, Chemistry, 2025-03-05_" in out


def test_render_report_uses_context_builder(report: AnalyticsReport):
    with patch(
        "dept_analytics.reporting.render.build_dashboard_context",
        wraps=build_dashboard_context,
    ) as build_mp:
        render_report(report)

    build_mp.assert_called_once_with(report, None, tz=None)


def test_render_report_without_comments():
    records = [FeedbackRecord(1, "library", {"A": 8})]
    out = render_report(analyze_department(records, "library"))

    assert "Feedback Comments" not in out
    assert "No dated submissions" in out


def test_render_no_data():
    out = render_no_data("registrar", "Registrar Office")

    assert "Registrar Office" in out
    assert "No feedback data available for this department." in out
