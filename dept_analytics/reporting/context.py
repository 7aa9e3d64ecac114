"""Context dataclass for rendering department dashboards.

This module defines `DashboardContext`, a typed container that holds all
values expected by the Jinja2 template located in
`dept_analytics/reporting/templates/report.md.j2`.

Keeping *context building* apart from *template rendering* lets the card
and insight wording be unit-tested without touching template strings.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from dept_analytics.analysis.criteria import truncate_label
from dept_analytics.analysis.timeline import TimeZone, record_day, resolve_timezone
from dept_analytics.reporting import config
from dept_analytics.reporting.models import AnalyticsReport, RatingTrend

__all__ = [
    "Card",
    "CommentEntry",
    "DashboardContext",
    "Insight",
    "build_dashboard_context",
]

_TREND_SENTENCES = {
    "Good": "Department is performing well with high satisfaction rates",
    "Average": "Department shows average performance with room for improvement",
    "Poor": "Department requires immediate attention and improvement strategies",
}


@dataclass(slots=True)
class Card:
    """One summary card: a title, a headline value and a caption."""

    title: str
    value: str
    caption: str = ""


@dataclass(slots=True)
class Insight:
    title: str
    text: str


@dataclass(slots=True)
class CommentEntry:
    """A written comment with who left it and when."""

    author: str
    department: str
    date: str
    text: str


@dataclass(slots=True)
class DashboardContext:
    """Container with all fields used by the dashboard report template."""

    # Header & meta
    department_key: str
    department_name: str

    # Summary cards and badge
    cards: List[Card]
    tier: str

    # Breakdown tables
    distribution: List[Dict[str, Any]] = field(default_factory=list)
    satisfaction_levels: List[Dict[str, Any]] = field(default_factory=list)
    criteria: List[Dict[str, Any]] = field(default_factory=list)
    timeline: List[Dict[str, Any]] = field(default_factory=list)

    # Narrative
    insights: List[Insight] = field(default_factory=list)
    quick_stats: Dict[str, str] = field(default_factory=dict)

    # Comments (capped) and how many were left out
    comments: List[CommentEntry] = field(default_factory=list)
    omitted_comments: int = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        return asdict(self)

    # Alias for convenience (e.g. template kwargs)
    __call__ = to_dict


# ---------------------------------------------------------------------------
# Local helper functions
# ---------------------------------------------------------------------------
def _insight_label(trend: RatingTrend) -> str:
    return truncate_label(trend.full_criteria, config.INSIGHT_LABEL_MAX)


def _build_cards(report: AnalyticsReport) -> List[Card]:
    top = report.highest_rated_criteria
    return [
        Card(
            "Total Responses",
            str(report.total_responses),
            f"{report.response_rate:.1f}% completion",
        ),
        Card("Average Rating", f"{report.average_rating:.1f}/10", report.overall_tier),
        Card("Satisfaction Rate", f"{report.satisfaction_rate:.1f}%", "rating 7+ out of 10"),
        Card("Needs Attention", f"{report.needs_attention_rate:.1f}%", "rating below 4"),
        Card(
            "Top Performer",
            f"{top.rating:.1f}" if top else "N/A",
            top.criteria if top else "No data",
        ),
        Card("Comments", str(len(report.feedback_comments)), "written feedback"),
    ]


def _build_insights(report: AnalyticsReport) -> List[Insight]:
    top = report.highest_rated_criteria
    low = report.lowest_rated_criteria
    return [
        Insight(
            "Top Performing Area",
            f"{_insight_label(top)} scores highest at {top.rating:.1f}/10"
            if top
            else "No data available",
        ),
        Insight(
            "Area for Improvement",
            f"{_insight_label(low)} needs attention at {low.rating:.1f}/10"
            if low
            else "No data available",
        ),
        Insight(
            "Response Engagement",
            f"{report.response_rate:.1f}% completion rate with "
            f"{len(report.feedback_comments)} detailed comments",
        ),
        Insight("Overall Trend", _TREND_SENTENCES[report.overall_tier]),
    ]


# ---------------------------------------------------------------------------
# Conversion helper
# ---------------------------------------------------------------------------
def build_dashboard_context(
    report: AnalyticsReport,
    department_name: Optional[str] = None,
    *,
    tz: TimeZone = None,
) -> DashboardContext:
    """Convert an :class:`AnalyticsReport` into a :class:`DashboardContext`.

    Comment dates use *tz* (default ``config.TIMEZONE``), which must be the
    zone the report was analyzed in so they line up with the timeline.
    The function is *pure*; it does not mutate *report*.
    """

    zone = resolve_timezone(tz if tz is not None else config.TIMEZONE)
    comments = []
    for r in report.feedback_comments[: config.MAX_COMMENTS]:
        day = record_day(r, zone)
        comments.append(
            CommentEntry(
                author=r.name or "Anonymous",
                department=r.department,
                date=day.isoformat() if day else "",
                text=r.comments.strip(),
            )
        )

    counts = {c.full_criteria: c.count for c in report.criteria_average}

    quick_stats = {
        "Excellent Ratings": str(report.satisfaction_count("Excellent")),
        "Criteria Evaluated": str(len(report.criteria_average)),
        "Days with Feedback": str(len(report.time_series_data)),
        "Left Comments": f"{report.comment_rate:.0f}%",
    }

    return DashboardContext(
        department_key=report.department,
        department_name=department_name or report.department,
        cards=_build_cards(report),
        tier=report.overall_tier,
        distribution=[asdict(s) for s in report.pie_segments()],
        satisfaction_levels=[asdict(s) for s in report.satisfaction_levels],
        criteria=[
            {
                "criteria": t.full_criteria,
                "rating": t.rating,
                "count": counts.get(t.full_criteria, 0),
            }
            for t in report.rating_trends
        ],
        timeline=[
            {"date": p.formatted_date, "count": p.count} for p in report.time_series_data
        ],
        insights=_build_insights(report),
        quick_stats=quick_stats,
        comments=comments,
        omitted_comments=max(0, len(report.feedback_comments) - len(comments)),
    )
