"""Command-line entry point for department analytics.

Loads a feedback snapshot and prints the analytics for one department,
either as a markdown dashboard or as JSON.  Importing ``dept_analytics.app``
here (instead of at package import) keeps the analytics modules free of
logging and ``.env`` side-effects for library users and tests.
"""
from __future__ import annotations

import argparse
import datetime
import json
import sys
from typing import Any, List, Optional

from dept_analytics.app import build_catalog, build_store, logger
from dept_analytics.exceptions import CatalogError, FeedbackSourceError
from dept_analytics.reporting.render import render_no_data, render_report


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dept-analytics",
        description="Summarize department feedback ratings.",
    )
    parser.add_argument(
        "feedback_file",
        nargs="?",
        help="JSON array of feedback records (default: $ANALYTICS_FEEDBACK_FILE)",
    )
    parser.add_argument("-d", "--department", help="department key to analyze")
    parser.add_argument(
        "-c", "--catalog", help="department catalog JSON (default: built-in)"
    )
    parser.add_argument(
        "-f", "--format", choices=("markdown", "json"), default="markdown"
    )
    parser.add_argument(
        "--list-departments",
        action="store_true",
        help="print known department keys and names, then exit",
    )
    args = parser.parse_args(argv)
    if not args.list_departments and not args.department:
        parser.error("--department is required unless --list-departments is given")
    return args


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""

    args = _parse_args(argv)

    try:
        catalog = build_catalog(args.catalog)
        if args.list_departments:
            for department in catalog:
                print(f"{department.key}\t{department.name}")
            return 0
        store = build_store(args.feedback_file)
    except (CatalogError, FeedbackSourceError) as exc:
        logger.error("%s", exc)
        return 1

    if args.department not in catalog:
        logger.warning("Department %s is not in the catalog", args.department)

    report = store.analyze(args.department)
    name = catalog.name_for(args.department)

    if args.format == "json":
        payload = report.to_dict() if report is not None else None
        print(json.dumps(payload, indent=2, default=_json_default))
    elif report is None:
        print(render_no_data(args.department, name))
    else:
        print(render_report(report, name))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
