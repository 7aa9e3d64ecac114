"""Rating extraction and tier bucketing.

Two bucketing schemes coexist and are intentionally kept apart:

* the *coarse* distribution (good / average / poor) drives the satisfaction
  and needs-attention percentages and the distribution pie;
* the *fine* satisfaction levels (Excellent … Poor) drive the detailed bar
  chart.

Their boundaries differ (a 4 is "average" coarse but "Below Average" fine).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Callable, Iterable, Tuple

from dept_analytics.records import FeedbackRecord

GOOD_COLOR = "#22c55e"
AVERAGE_COLOR = "#eab308"
POOR_COLOR = "#ef4444"

GOOD_THRESHOLD = 7
AVERAGE_THRESHOLD = 4


def is_valid_rating(value: Any) -> bool:
    """Return *True* for real numbers that are not NaN (booleans excluded).

    Integers too large for a float are rejected like any other bad value.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return not math.isnan(float(value))
    except OverflowError:
        return False


def valid_ratings(ratings: Any) -> Tuple[Tuple[str, Real], ...]:
    """Return ``(label, score)`` pairs of the valid scores in a ratings mapping."""
    if not hasattr(ratings, "items"):
        return ()
    return tuple(
        (label, value) for label, value in ratings.items() if is_valid_rating(value)
    )


def extract_ratings(records: Iterable[FeedbackRecord]) -> Tuple[Real, ...]:
    """Flatten every valid score of every record, in record then label order."""
    return tuple(
        value for record in records for _, value in valid_ratings(record.ratings)
    )


def mean(values: Tuple[Real, ...]) -> float:
    """Arithmetic mean; callers guarantee *values* is non-empty."""
    return sum(values) / len(values)


# ---------------------------------------------------------------------------
# Coarse three-tier distribution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RatingDistribution:
    """Counts of ratings per coarse tier."""

    good: int = 0
    average: int = 0
    poor: int = 0

    @property
    def total(self) -> int:
        return self.good + self.average + self.poor


def coarse_tier(value: Real) -> str:
    """Return ``"good"``, ``"average"`` or ``"poor"`` for a single rating."""
    if value >= GOOD_THRESHOLD:
        return "good"
    if value >= AVERAGE_THRESHOLD:
        return "average"
    return "poor"


def coarse_distribution(ratings: Iterable[Real]) -> RatingDistribution:
    """Count *ratings* into good (>=7), average (4 to <7) and poor (<4)."""
    counts = {"good": 0, "average": 0, "poor": 0}
    for value in ratings:
        counts[coarse_tier(value)] += 1
    return RatingDistribution(**counts)


def tier_color(value: float) -> str:
    """Return the chart colour for the coarse tier of *value*."""
    return {"good": GOOD_COLOR, "average": AVERAGE_COLOR, "poor": POOR_COLOR}[
        coarse_tier(value)
    ]


def tier_label(value: float) -> str:
    """Return ``"Good"``, ``"Average"`` or ``"Poor"`` for the badge of *value*."""
    return coarse_tier(value).capitalize()


# ---------------------------------------------------------------------------
# Fine five-tier satisfaction levels
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SatisfactionLevel:
    """One bar of the detailed satisfaction histogram."""

    level: str
    label: str
    full_level: str
    count: int
    color: str


# (level, short label, full label, colour, membership test), highest first.
_LEVELS: Tuple[Tuple[str, str, str, str, Callable[[Real], bool]], ...] = (
    ("Excellent", "Excellent", "Excellent (9-10)", "#10b981", lambda r: r >= 9),
    ("Good", "Good", "Good (7-8)", "#22c55e", lambda r: 7 <= r < 9),
    ("Average", "Average", "Average (5-6)", "#eab308", lambda r: 5 <= r < 7),
    (
        "Below Average",
        "Below Avg",
        "Below Average (3-4)",
        "#f97316",
        lambda r: 3 <= r < 5,
    ),
    ("Poor", "Poor", "Poor (1-2)", "#ef4444", lambda r: r < 3),
)


def satisfaction_level(value: Real) -> str:
    """Return the fine tier name for a single rating."""
    for level, _label, _full, _color, test in _LEVELS[:-1]:
        if test(value):
            return level
    return _LEVELS[-1][0]


def satisfaction_levels(ratings: Iterable[Real]) -> Tuple[SatisfactionLevel, ...]:
    """Histogram *ratings* into the five fixed satisfaction levels."""
    values = tuple(ratings)
    return tuple(
        SatisfactionLevel(
            level=level,
            label=label,
            full_level=full,
            count=sum(1 for r in values if test(r)),
            color=color,
        )
        for level, label, full, color, test in _LEVELS
    )
