import json
import logging
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from dept_analytics.exceptions import FeedbackSourceError
from dept_analytics.records import FeedbackRecord
from dept_analytics.reporting.aggregator import analyze_department
from dept_analytics.reporting.models import AnalyticsReport


logger = logging.getLogger(__name__)


def records_from_payload(payload: Any) -> List[FeedbackRecord]:
    """Convert a decoded JSON array into records.

    Entries that are not JSON objects are skipped with a warning; field
    level problems are tolerated by :meth:`FeedbackRecord.from_dict`.

    Raises:
        FeedbackSourceError: If *payload* is not a list.
    """
    if not isinstance(payload, list):
        raise FeedbackSourceError("Feedback snapshot must be a JSON array.")

    records: List[FeedbackRecord] = []
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            logger.warning("Skipping feedback entry %d: not an object", index)
            continue
        records.append(FeedbackRecord.from_dict(entry))
    return records


def load_feedback_file(path: Union[str, Path]) -> List[FeedbackRecord]:
    """Read a JSON feedback snapshot from *path*.

    Raises:
        FeedbackSourceError: If the file cannot be read or decoded, or is not
            a JSON array.
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FeedbackSourceError(
            f"Could not read feedback snapshot {path}: {exc}"
        ) from exc

    records = records_from_payload(payload)
    logger.info("Loaded %d feedback records from %s", len(records), path)
    return records


class FeedbackSnapshotStore:
    """A thread-safe holder for the current feedback snapshot.

    The snapshot is an immutable tuple; writers swap it wholesale and readers
    run the analytics engine on their own reference outside the lock.
    """

    def __init__(self, records: Optional[Iterable[FeedbackRecord]] = None):
        self._records: Tuple[FeedbackRecord, ...] = tuple(records or ())
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def replace(self, records: Iterable[FeedbackRecord]) -> None:
        """Replace the snapshot with *records*."""
        snapshot = tuple(records)
        with self._lock:
            self._records = snapshot
        self._logger.debug("Snapshot replaced with %d records", len(snapshot))

    def load(self, path: Union[str, Path]) -> None:
        """Replace the snapshot with the contents of a JSON file.

        Raises:
            FeedbackSourceError: If the file cannot be loaded. The current
                snapshot is kept in that case.
        """
        self.replace(load_feedback_file(path))

    def snapshot(self) -> Tuple[FeedbackRecord, ...]:
        """Returns the current snapshot."""
        with self._lock:
            return self._records

    def count(self) -> int:
        """Returns the number of records in the snapshot."""
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Reporting helper
    # ------------------------------------------------------------------

    def analyze(self, dept_key: str) -> Optional[AnalyticsReport]:
        """Return analytics for *dept_key* over the current snapshot, or None."""
        return analyze_department(self.snapshot(), dept_key)
