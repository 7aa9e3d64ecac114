"""Unit tests for AnalyticsReport presentation helpers."""
from __future__ import annotations

import datetime

import pytest

from dept_analytics.records import FeedbackRecord
from dept_analytics.reporting.aggregator import analyze_department
from dept_analytics.reporting.models import AnalyticsReport


def _report(*ratings: dict, comments: tuple = ()) -> AnalyticsReport:
    records = [
        FeedbackRecord(
            id=i,
            selected_dept="cafeteria",
            ratings=r,
            comments=comments[i] if i < len(comments) else "",
            timestamp=datetime.datetime(2025, 3, 1, tzinfo=datetime.timezone.utc),
        )
        for i, r in enumerate(ratings)
    ]
    return analyze_department(records, "cafeteria")


def test_percentages():
    report = _report({"Food": 9, "Price": 2}, {"Food": 5, "Price": 1}, comments=("ok",))

    assert report.satisfaction_rate == pytest.approx(25.0)
    assert report.needs_attention_rate == pytest.approx(50.0)
    assert report.comment_rate == pytest.approx(50.0)
    assert report.overall_tier == "Average"


def test_pie_segments_skip_empty_tiers():
    report = _report({"Food": 9}, {"Food": 8})
    segments = report.pie_segments()

    assert [(s.name, s.value) for s in segments] == [("Good (7-10)", 2)]
    assert report.overall_tier == "Good"


def test_satisfaction_count_lookup():
    report = _report({"Food": 10}, {"Food": 1})

    assert report.satisfaction_count("Excellent") == 1
    assert report.satisfaction_count("Poor") == 1
    assert report.satisfaction_count("Nonexistent") == 0


def test_to_dict_is_plain_and_nested():
    report = _report({"Food": 6}, comments=("needs salt",))
    as_dict = report.to_dict()

    assert as_dict["department"] == "cafeteria"
    assert as_dict["rating_distribution"] == {"good": 0, "average": 1, "poor": 0}
    assert as_dict["highest_rated_criteria"]["full_criteria"] == "Food"
    assert as_dict["feedback_comments"][0]["comments"] == "needs salt"
    assert len(as_dict["satisfaction_levels"]) == 5


def test_report_is_frozen():
    report = _report({"Food": 6})
    with pytest.raises(AttributeError):
        report.total_responses = 10  # type: ignore[misc]
