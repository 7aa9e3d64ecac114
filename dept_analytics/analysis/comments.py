"""Comment extraction."""
from __future__ import annotations

from typing import Iterable, Tuple

from dept_analytics.records import FeedbackRecord


def extract_comments(records: Iterable[FeedbackRecord]) -> Tuple[FeedbackRecord, ...]:
    """Return the records carrying a non-blank comment, in input order."""
    return tuple(r for r in records if r.has_comment)
