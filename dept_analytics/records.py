"""Feedback records as supplied by the feedback store.

A :class:`FeedbackRecord` is one submission: a submitter (identified by a
purse number) rating one department on a set of criteria.  Records are
read-only from the analytics side; construction from raw payloads is
tolerant so that a single bad field never rejects a whole record.
"""
from __future__ import annotations

import datetime
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Union

logger = logging.getLogger(__name__)

RecordId = Union[str, int]


def parse_timestamp(value: Any) -> Optional[datetime.datetime]:
    """Return *value* as an aware UTC-based ``datetime`` or *None*.

    Accepts ``datetime`` objects, ISO-8601 strings (a trailing ``Z`` means
    UTC) and POSIX epoch numbers in seconds.  Naive values are taken as UTC.
    """

    parsed: Optional[datetime.datetime] = None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.datetime.fromisoformat(text)
        except ValueError:
            return None
    elif isinstance(value, Real) and not isinstance(value, bool):
        try:
            seconds = float(value)
            if math.isnan(seconds) or math.isinf(seconds):
                return None
            parsed = datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def _first(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    return default


@dataclass(frozen=True)
class FeedbackRecord:
    """One submitted feedback form for a single department."""

    id: RecordId
    selected_dept: str
    ratings: Mapping[str, Any] = field(default_factory=dict)
    comments: str = ""
    timestamp: Optional[datetime.datetime] = None
    department: str = ""
    purse_number: str = ""
    name: str = ""

    @property
    def has_comment(self) -> bool:
        """Return *True* if the comment is non-empty after trimming."""
        return bool(self.comments and self.comments.strip())

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "FeedbackRecord":
        """Build a record from a wire payload (camelCase or snake_case keys).

        Field contents are coerced, never rejected: non-mapping ratings
        become empty, non-string comments become ``""`` and an unparsable
        timestamp becomes *None*.
        """

        raw_ratings = payload.get("ratings")
        ratings: Dict[str, Any] = (
            {str(k): v for k, v in raw_ratings.items()}
            if isinstance(raw_ratings, Mapping)
            else {}
        )

        comments = payload.get("comments")
        if not isinstance(comments, str):
            comments = ""

        raw_ts = _first(payload, "timestamp", "created_at", "createdAt")
        timestamp = parse_timestamp(raw_ts)
        if raw_ts is not None and timestamp is None:
            logger.debug(
                "Unparsable timestamp %r on record %s", raw_ts, payload.get("id")
            )

        return cls(
            id=_first(payload, "id", "feedback_id", "feedbackId", default=""),
            selected_dept=str(
                _first(payload, "selectedDept", "selected_dept", default="") or ""
            ),
            ratings=ratings,
            comments=comments,
            timestamp=timestamp,
            department=str(payload.get("department") or ""),
            purse_number=str(
                _first(payload, "purseNumber", "purse_number", default="") or ""
            ),
            name=str(payload.get("name") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase wire form of the record."""
        return {
            "id": self.id,
            "name": self.name,
            "department": self.department,
            "purseNumber": self.purse_number,
            "selectedDept": self.selected_dept,
            "ratings": dict(self.ratings),
            "comments": self.comments,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
