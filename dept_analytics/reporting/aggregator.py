"""Aggregate raw feedback records into a structured :class:`AnalyticsReport`."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from dept_analytics.analysis.comments import extract_comments
from dept_analytics.analysis.criteria import (
    criteria_averages,
    group_by_criterion,
    rating_trends,
)
from dept_analytics.analysis.ratings import (
    coarse_distribution,
    extract_ratings,
    mean,
    satisfaction_levels,
)
from dept_analytics.analysis.timeline import TimeZone, time_series
from dept_analytics.records import FeedbackRecord
from dept_analytics.reporting import config
from dept_analytics.reporting.models import AnalyticsReport

logger = logging.getLogger(__name__)


def filter_department(
    records: Iterable[FeedbackRecord], dept_key: str
) -> Tuple[FeedbackRecord, ...]:
    """Return the records rating *dept_key*, preserving input order."""
    return tuple(r for r in records if r.selected_dept == dept_key)


def response_rate(valid_count: int, record_count: int, criteria_count: int) -> float:
    """Percentage of ratings supplied out of ``records × criteria``.

    The criteria count is the number of distinct labels observed in the
    data, not the catalog's declared list.  Returns ``0.0`` when nothing
    could have been rated.
    """
    possible = record_count * criteria_count
    if possible <= 0:
        return 0.0
    return valid_count / possible * 100


def analyze_department(
    records: Iterable[FeedbackRecord],
    dept_key: str,
    *,
    tz: TimeZone = None,
) -> Optional[AnalyticsReport]:
    """Build the analytics report for *dept_key*.

    The function is pure and never raises for malformed record data.  It
    returns *None* when no record targets *dept_key* or when the matching
    records carry no valid numeric rating.
    """

    dept_records = filter_department(records, dept_key)
    if not dept_records:
        logger.debug("No feedback for department %s", dept_key)
        return None

    all_ratings = extract_ratings(dept_records)
    if not all_ratings:
        logger.debug(
            "Department %s has %d records but no valid ratings",
            dept_key,
            len(dept_records),
        )
        return None

    groups = group_by_criterion(dept_records)
    trends = rating_trends(groups, label_max=config.TREND_LABEL_MAX)

    report = AnalyticsReport(
        department=dept_key,
        total_responses=len(dept_records),
        total_ratings=len(all_ratings),
        average_rating=mean(all_ratings),
        rating_distribution=coarse_distribution(all_ratings),
        criteria_average=criteria_averages(
            groups, label_max=config.CRITERIA_LABEL_MAX
        ),
        feedback_comments=extract_comments(dept_records),
        time_series_data=time_series(
            dept_records, tz if tz is not None else config.TIMEZONE
        ),
        rating_trends=trends,
        satisfaction_levels=satisfaction_levels(all_ratings),
        response_rate=response_rate(len(all_ratings), len(dept_records), len(groups)),
        highest_rated_criteria=trends[0] if trends else None,
        lowest_rated_criteria=trends[-1] if trends else None,
    )

    logger.debug(
        "Analytics for %s: responses=%d ratings=%d criteria=%d",
        dept_key,
        report.total_responses,
        report.total_ratings,
        len(groups),
    )
    return report
