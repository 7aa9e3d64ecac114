"""Data structures for reporting pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from dept_analytics.analysis.criteria import CriterionAverage, RatingTrend
from dept_analytics.analysis.ratings import (
    AVERAGE_COLOR,
    GOOD_COLOR,
    POOR_COLOR,
    RatingDistribution,
    SatisfactionLevel,
    tier_label,
)
from dept_analytics.analysis.timeline import TimeSeriesPoint
from dept_analytics.records import FeedbackRecord

__all__ = [
    "AnalyticsReport",
    "CriterionAverage",
    "PieSegment",
    "RatingDistribution",
    "RatingTrend",
    "SatisfactionLevel",
    "TimeSeriesPoint",
]


@dataclass(frozen=True)
class PieSegment:
    """One slice of the coarse rating-distribution pie."""

    name: str
    value: int
    color: str


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


@dataclass(frozen=True)
class AnalyticsReport:
    """Aggregated analytics for a single department.

    Instances are built fresh from a feedback snapshot and never mutated.
    """

    department: str
    total_responses: int
    total_ratings: int
    average_rating: float
    rating_distribution: RatingDistribution
    criteria_average: Tuple[CriterionAverage, ...]
    feedback_comments: Tuple[FeedbackRecord, ...]
    time_series_data: Tuple[TimeSeriesPoint, ...]
    rating_trends: Tuple[RatingTrend, ...]
    satisfaction_levels: Tuple[SatisfactionLevel, ...]
    response_rate: float
    highest_rated_criteria: Optional[RatingTrend] = None
    lowest_rated_criteria: Optional[RatingTrend] = None

    # ------------------------------------------------------------------
    # Presentation helpers
    # ------------------------------------------------------------------
    @property
    def satisfaction_rate(self) -> float:
        """Share of ratings in the good tier, in percent."""
        dist = self.rating_distribution
        return _percent(dist.good, dist.total)

    @property
    def needs_attention_rate(self) -> float:
        """Share of ratings in the poor tier, in percent."""
        dist = self.rating_distribution
        return _percent(dist.poor, dist.total)

    @property
    def comment_rate(self) -> float:
        """Share of responses that left a comment, in percent."""
        return _percent(len(self.feedback_comments), self.total_responses)

    @property
    def overall_tier(self) -> str:
        return tier_label(self.average_rating)

    def satisfaction_count(self, level: str) -> int:
        """Return the count of the satisfaction level named *level* (0 if absent)."""
        for entry in self.satisfaction_levels:
            if entry.level == level:
                return entry.count
        return 0

    def pie_segments(self) -> List[PieSegment]:
        """Coarse tiers as pie slices, omitting empty ones."""
        dist = self.rating_distribution
        segments = [
            PieSegment("Good (7-10)", dist.good, GOOD_COLOR),
            PieSegment("Average (4-6)", dist.average, AVERAGE_COLOR),
            PieSegment("Poor (1-3)", dist.poor, POOR_COLOR),
        ]
        return [s for s in segments if s.value > 0]

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) of the report."""
        return asdict(self)
