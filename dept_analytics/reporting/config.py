"""Configuration constants for the reporting pipeline."""
from __future__ import annotations

import os

# Zone used to bucket submissions into calendar days (IANA name or "UTC")
TIMEZONE: str = os.getenv("ANALYTICS_TIMEZONE", "UTC")

# Display length of criterion labels in the criteria-average chart
CRITERIA_LABEL_MAX: int = int(os.getenv("REPORT_CRITERIA_LABEL_MAX", "20"))

# Display length of criterion labels in the ranked trends chart
TREND_LABEL_MAX: int = int(os.getenv("REPORT_TREND_LABEL_MAX", "15"))

# Display length of criterion labels in the key insights
INSIGHT_LABEL_MAX: int = int(os.getenv("REPORT_INSIGHT_LABEL_MAX", "50"))

# Maximum comments to include verbatim in a rendered report (safety cap)
MAX_COMMENTS: int = int(os.getenv("REPORT_MAX_COMMENTS", "50"))
