import csv
import json
from pathlib import Path

import pytest

from a11y_checker.errors import FileWriteError
from a11y_checker.html_report import rank_violations, render_report
from a11y_checker.metrics import summarize
from a11y_checker.report import (
    csv_path_for,
    generate_output_path,
    load_report,
    render_csv,
    sanitize_url,
    save_csv_summary,
    save_json_report,
)
from a11y_checker.schema import Violation, ViolationNode


def test_json_report_round_trip(make_result, tmp_path):
    result = make_result([("critical", 2), ("minor", 3), ("cosmic", 1)])
    path = save_json_report(result, tmp_path / "nested" / "dir" / "report.json")
    assert path.exists()
    data = json.loads(path.read_text(encoding="utf-8"))

    assert set(data) == {"metadata", "summary", "violations", "testDetails"}
    assert data["metadata"]["url"] == result.url
    assert data["metadata"]["timestamp"] == result.timestamp
    assert data["metadata"]["scannedAt"]
    assert data["summary"]["totalViolations"] == summarize(result).total_violations == 6
    assert data["summary"]["violationTypes"] == 3
    assert (data["summary"]["critical"], data["summary"]["minor"]) == (2, 3)
    assert data["testDetails"] == {"passes": 5, "incomplete": 1, "inapplicable": 7}
    first = data["violations"][0]
    assert first["affectedElements"] == 2
    assert first["helpUrl"] == "https://example.org/rules/0"
    assert first["nodes"][0] == {"target": ["#n0"], "html": "<div id=\"n0\"></div>", "failureSummary": None}
    assert load_report(path) == data


def test_json_report_is_indented(make_result, tmp_path):
    path = save_json_report(make_result([]), tmp_path / "r.json")
    assert path.read_text(encoding="utf-8").startswith('{\n  "metadata"')


def test_json_report_derived_path(make_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = make_result([], url="https://example.com/a?b=1")
    path = save_json_report(result)
    assert path == tmp_path / "reports" / "accessibility_example_com_a_b_1_2024-05-01T10-15-30.json"
    assert path.exists()


def test_generate_output_path_is_pure(tmp_path):
    a = generate_output_path("https://example.com", "2024-05-01T10:15:30.123Z", base_dir=tmp_path)
    b = generate_output_path("https://example.com", "2024-05-01T10:15:30.123Z", base_dir=tmp_path)
    assert a == b == tmp_path / "reports" / "accessibility_example_com_2024-05-01T10-15-30.json"


def test_sanitize_url_is_idempotent_and_bounded():
    url = "https://www.example.com/" + "deep/path/" * 10
    once = sanitize_url(url)
    assert len(once) == 50
    assert sanitize_url(once) == once
    assert sanitize_url("HTTP://Ex.com") == "Ex_com"


def test_csv_one_row_per_violation_type(make_result, tmp_path):
    result = make_result([("serious", 7), ("minor", 1), ("moderate", 3)])
    path = save_csv_summary(result, tmp_path / "out.json")
    assert path == tmp_path / "out.csv"
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "ID,Impact,Description,Help,Help URL,Affected Elements"
    assert len(lines) == len({v.id for v in result.violations}) + 1
    assert lines[1] == '"rule-0","serious","Rule 0 description","Rule 0 help","https://example.org/rules/0",7'


def test_csv_escapes_quotes(make_result):
    node = ViolationNode(html="<p>", target=("p",))
    result = make_result([]).model_copy(update={"violations": (
        Violation(id="label", impact="critical", description='Say "hi", please', help='Use "label"',
                  help_url="https://x.test", nodes=(node, node)),
    )})
    text = render_csv(result)
    assert '"Say ""hi"", please","Use ""label"""' in text
    rows = list(csv.reader(text.splitlines()))
    assert rows[1] == ["label", "critical", 'Say "hi", please', 'Use "label"', "https://x.test", "2"]


def test_csv_derived_path_matches_json(make_result, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = make_result([("minor", 1)])
    json_path = save_json_report(result)
    assert save_csv_summary(result) == json_path.with_suffix(".csv")


def test_csv_path_for_non_json_name():
    assert csv_path_for("report.JSON") == Path("report.csv")
    assert csv_path_for("out/report") == Path("out/report.csv")


def test_write_failure_raises_file_write_error(make_result, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(FileWriteError):
        save_json_report(make_result([]), blocker / "r.json")


def test_rank_violations_orders_by_severity():
    vs = [{"id": "a", "impact": "minor"}, {"id": "b", "impact": None}, {"id": "c", "impact": "critical"},
          {"id": "d", "impact": "minor"}, {"id": "e", "impact": "serious"}]
    assert [v["id"] for v in rank_violations(vs)] == ["c", "e", "a", "d", "b"]


def test_render_html_report(make_result, tmp_path):
    result = make_result([("minor", 1), ("critical", 2)])
    json_path = save_json_report(result, tmp_path / "r.json")
    html_path = render_report(json_path, tmp_path / "html" / "r.html")
    html = html_path.read_text(encoding="utf-8")
    assert "https://example.com" in html
    assert html.index("rule-1") < html.index("rule-0")
    assert "&lt;div id=" in html
    assert "<td>3</td>" in html
