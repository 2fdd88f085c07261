# tests/auditor/test_controllers.py
import io
import json
from unittest.mock import MagicMock

import pandas as pd
import pytest
import requests

from markup_auditor.controllers.audit_controller import AuditController
from markup_auditor.controllers.report_controller import ReportController, score_band, ISSUE_COLUMNS
from markup_auditor.errors import InputSourceError, EmptyInputError

BROKEN_HTML = '<html>\n<body>\n<img src="logo.png">\n<p style="a">x</p>\n</body>\n</html>'


def _response(text, ok=True, status_code=200, reason="OK"):
    response = MagicMock()
    response.ok = ok
    response.text = text
    response.content = text.encode("utf-8")
    response.status_code = status_code
    response.reason = reason
    return response


@pytest.fixture
def session():
    mock_session = MagicMock()
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def controller(session):
    return AuditController(settings={"fetch": {"timeout": 5, "user_agent": "test-agent"}}, session=session)


@pytest.fixture
def reporter():
    return ReportController()


# --- AuditController ---

def test_audit_file_uses_file_name_as_source(controller, tmp_path, minimal_html):
    page = tmp_path / "index.html"
    page.write_text(minimal_html, encoding="utf-8")
    report = controller.audit_file(page)
    assert report.metadata.source == "index.html"
    assert report.overall_score == 100


def test_audit_missing_file(controller, tmp_path):
    with pytest.raises(InputSourceError):
        controller.audit_file(tmp_path / "nope.html")


def test_audit_blank_file(controller, tmp_path):
    page = tmp_path / "blank.html"
    page.write_text("   \n", encoding="utf-8")
    with pytest.raises(EmptyInputError):
        controller.audit_file(page)


def test_audit_url(controller, session, minimal_html):
    session.get.return_value = _response(minimal_html)
    report = controller.audit_url("https://example.com/")
    session.get.assert_called_once_with("https://example.com/", timeout=5)
    assert session.headers["User-Agent"] == "test-agent"
    assert report.metadata.source == "https://example.com/"
    assert report.overall_score == 100


def test_audit_url_http_error(controller, session):
    session.get.return_value = _response("forbidden", ok=False, status_code=403, reason="Forbidden")
    with pytest.raises(InputSourceError, match="403"):
        controller.audit_url("https://example.com/private")


def test_audit_url_network_error(controller, session):
    session.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(InputSourceError):
        controller.audit_url("https://unreachable.invalid/")


def test_audit_stream(controller, minimal_html):
    report = controller.audit_stream(io.StringIO(minimal_html))
    assert report.metadata.source == "stdin"


def test_audit_many_records_failures(controller, tmp_path, minimal_html):
    good = tmp_path / "good.html"
    good.write_text(minimal_html, encoding="utf-8")
    blank = tmp_path / "blank.html"
    blank.write_text("", encoding="utf-8")

    results = controller.audit_many([good, blank, tmp_path / "missing.html"], show_progress=False)
    assert [r.report is not None for r in results] == [True, False, False]
    assert results[1].error == "Input is empty."
    assert "File not found" in results[2].error


# --- ReportController ---

@pytest.mark.parametrize("score, band", [(100, "good"), (90, "good"), (89, "fair"), (70, "fair"), (69, "poor"), (0, "poor")])
def test_score_band(score, band):
    assert score_band(score) == band


def test_render_text(controller, reporter):
    text = reporter.render_text(controller.audit_markup(BROKEN_HTML, "broken.html"))
    assert "Markup audit: broken.html" in text
    assert "Accessibility Basics: 70/100 (fair)" in text
    assert "[Critical] Image missing 'alt' attribute (src=\"logo.png\")." in text
    assert 'Line 3: <img src="logo.png">' in text


def test_render_json_round_trips_contract(controller, reporter, minimal_html):
    data = json.loads(reporter.render_json(controller.audit_markup(minimal_html)))
    assert data["overallScore"] == 100
    assert [c["name"] for c in data["categories"]] == [
        "Semantic Structure", "Accessibility Basics", "UI & Markup Hygiene", "Document Completeness"
    ]


def test_to_rows(controller, reporter):
    report = controller.audit_markup(BROKEN_HTML, "broken.html")
    rows = reporter.to_rows(report)
    assert len(rows) == len(report.issues)
    img_row = next(r for r in rows if r["code"] == "MISSING_ALT")
    assert img_row["line"] == 3
    assert img_row["category"] == "Accessibility Basics"
    assert img_row["source"] == "broken.html"


def test_export_csv(controller, reporter, tmp_path):
    report = controller.audit_markup(BROKEN_HTML)
    output = reporter.export([report], tmp_path / "out" / "issues.csv")
    df = pd.read_csv(output)
    assert list(df.columns) == ISSUE_COLUMNS
    assert len(df) == len(report.issues)


def test_export_json_single_report(controller, reporter, tmp_path, minimal_html):
    output = reporter.export([controller.audit_markup(minimal_html)], tmp_path / "report.json")
    assert json.loads(output.read_text(encoding="utf-8"))["overallScore"] == 100


def test_export_xlsx(controller, reporter, tmp_path, minimal_html):
    reports = [controller.audit_markup(minimal_html, "a"), controller.audit_markup(BROKEN_HTML, "b")]
    output = reporter.export(reports, tmp_path / "audit.xlsx")
    summary = pd.read_excel(output, sheet_name="Summary")
    assert list(summary["source"]) == ["a", "b"]
    assert summary.loc[0, "overall"] == 100


def test_export_unknown_format(controller, reporter, tmp_path, minimal_html):
    with pytest.raises(ValueError):
        reporter.export([controller.audit_markup(minimal_html)], tmp_path / "report.pdf")
