"""Tests for the command-line entry point."""
from __future__ import annotations

import json

import pytest

from dept_analytics.main import main


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    monkeypatch.delenv("ANALYTICS_FEEDBACK_FILE", raising=False)
    monkeypatch.delenv("ANALYTICS_CATALOG_FILE", raising=False)


@pytest.fixture()
def feedback_file(tmp_path):
    path = tmp_path / "feedback.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "a1",
                    "selectedDept": "library",
                    "ratings": {"A": 8, "B": 6},
                    "timestamp": "2025-03-04T10:00:00Z",
                },
                {
                    "id": "a2",
                    "selectedDept": "library",
                    "ratings": {"A": 9, "B": 4},
                    "comments": "More seats please",
                    "timestamp": "2025-03-05T10:00:00Z",
                },
                {
                    "id": "a3",
                    "selectedDept": "library",
                    "ratings": {"A": 7},
                    "timestamp": "2025-03-05T11:00:00Z",
                },
            ]
        )
    )
    return path


def test_markdown_report(feedback_file, capsys):
    assert main([str(feedback_file), "--department", "library"]) == 0

    out = capsys.readouterr().out
    assert "# Department Analytics: Library Services" in out
    assert "83.3% completion" in out
    assert "More seats please" in out


def test_json_report(feedback_file, capsys):
    assert main([str(feedback_file), "-d", "library", "-f", "json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_responses"] == 3
    assert payload["time_series_data"][0]["date"] == "2025-03-04"
    assert payload["feedback_comments"][0]["timestamp"].startswith("2025-03-05")


def test_no_data_is_not_an_error(feedback_file, capsys):
    assert main([str(feedback_file), "-d", "registrar"]) == 0
    assert "No feedback data available" in capsys.readouterr().out


def test_no_data_json_prints_null(feedback_file, capsys):
    assert main([str(feedback_file), "-d", "registrar", "-f", "json"]) == 0
    assert capsys.readouterr().out.strip() == "null"


def test_feedback_file_from_environment(feedback_file, monkeypatch, capsys):
    monkeypatch.setenv("ANALYTICS_FEEDBACK_FILE", str(feedback_file))

    assert main(["-d", "library", "-f", "json"]) == 0
    assert json.loads(capsys.readouterr().out)["total_ratings"] == 5


def test_missing_feedback_file_exits_with_error(tmp_path):
    assert main([str(tmp_path / "missing.json"), "-d", "library"]) == 1


def test_bad_catalog_exits_with_error(feedback_file, tmp_path):
    catalog = tmp_path / "catalog.json"
    catalog.write_text('{"library": "Library"}')

    assert main([str(feedback_file), "-d", "library", "-c", str(catalog)]) == 1


def test_custom_catalog_name(feedback_file, tmp_path, capsys):
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps({"library": {"name": "Main Library", "criteria": []}}))

    assert main([str(feedback_file), "-d", "library", "-c", str(catalog)]) == 0
    assert "# Department Analytics: Main Library" in capsys.readouterr().out


def test_list_departments(capsys):
    assert main(["--list-departments"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "cafeteria\tCafeteria Services"
    assert len(lines) == 6


def test_department_required():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
