"""Render department dashboards using Jinja2 templates."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from dept_analytics.analysis.timeline import TimeZone
from dept_analytics.reporting.context import build_dashboard_context
from dept_analytics.reporting.models import AnalyticsReport

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Markdown output doesn't need HTML escaping – it breaks apostrophes etc.
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_report(
    report: AnalyticsReport,
    department_name: Optional[str] = None,
    *,
    tz: TimeZone = None,
) -> str:
    """Render a markdown dashboard from an :class:`AnalyticsReport`.

    *tz* should match the zone the report was analyzed in.
    """

    context = build_dashboard_context(report, department_name, tz=tz)

    template = _env.get_template("report.md.j2")
    text = template.render(**context.to_dict())
    logger.debug(
        "Report rendered for department=%s len=%d", report.department, len(text)
    )
    return text


def render_no_data(dept_key: str, department_name: Optional[str] = None) -> str:
    """Render the placeholder shown when a department has nothing to analyze."""

    template = _env.get_template("no_data.md.j2")
    return template.render(
        department_key=dept_key, department_name=department_name or dept_key
    )
