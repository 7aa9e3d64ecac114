"""Per-criterion aggregation.

Criterion labels are not declared up front: whatever labels appear in the
ratings of the filtered records become grouping keys, so a department whose
criteria changed over time simply reports both the old and new labels.
"""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Real
from typing import Dict, Iterable, List, Mapping, Tuple

from dept_analytics.analysis.ratings import mean, tier_color, valid_ratings
from dept_analytics.records import FeedbackRecord

ELLIPSIS = "..."


def truncate_label(label: str, limit: int) -> str:
    """Cut *label* to *limit* characters plus an ellipsis when it is longer."""
    if len(label) > limit:
        return label[:limit] + ELLIPSIS
    return label


@dataclass(frozen=True)
class CriterionAverage:
    """Mean score and sample count for one criterion."""

    criteria: str  # display label, possibly truncated
    full_criteria: str
    average: float
    count: int


@dataclass(frozen=True)
class RatingTrend:
    """One entry of the ranked criteria view."""

    criteria: str
    full_criteria: str
    rating: float
    color: str


def group_by_criterion(
    records: Iterable[FeedbackRecord],
) -> Dict[str, Tuple[Real, ...]]:
    """Map each observed label to its valid scores, in first-seen label order."""
    groups: Dict[str, List[Real]] = {}
    for record in records:
        for label, value in valid_ratings(record.ratings):
            groups.setdefault(label, []).append(value)
    return {label: tuple(values) for label, values in groups.items()}


def criteria_averages(
    groups: Mapping[str, Tuple[Real, ...]], *, label_max: int = 20
) -> Tuple[CriterionAverage, ...]:
    return tuple(
        CriterionAverage(
            criteria=truncate_label(label, label_max),
            full_criteria=label,
            average=mean(values),
            count=len(values),
        )
        for label, values in groups.items()
    )


def rating_trends(
    groups: Mapping[str, Tuple[Real, ...]], *, label_max: int = 15
) -> Tuple[RatingTrend, ...]:
    """Return per-criterion means ranked highest first.

    ``sorted`` is stable, so criteria with equal means keep the order in
    which they were first observed.
    """

    trends = []
    for label, values in groups.items():
        avg = mean(values)
        trends.append(
            RatingTrend(
                criteria=truncate_label(label, label_max),
                full_criteria=label,
                rating=avg,
                color=tier_color(avg),
            )
        )
    return tuple(sorted(trends, key=lambda t: t.rating, reverse=True))
