"""Tests for the report exporter."""
import json
import threading
import zipfile

import pytest

from contrafuzz.config import ReportingConfig
from contrafuzz.models import ResponseInfo, TestCase, Verdict
from contrafuzz.report.exporter import (
    PLACEHOLDER,
    TestCaseExporter,
    compute_execution_details,
)


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _exporter(tmp_path, **kwargs) -> TestCaseExporter:
    config = ReportingConfig(output_dir=str(tmp_path / "report"), **kwargs)
    return TestCaseExporter(config)


def _case(number: int, path: str = "/users", method: str = "POST", time_ms: int = 10, **kwargs) -> TestCase:
    return TestCase(
        id=f"Test {number}",
        path=path,
        method=method,
        fuzzer="LeadingWhitespacesInHeaders",
        result=Verdict.SUCCESS,
        response=ResponseInfo(response_code=400, response_time_ms=time_ms),
        **kwargs,
    )


def _load_script(path, name):
    text = path.read_text(encoding="utf-8")
    prefix = f"var {name} = "
    assert text.startswith(prefix)
    return json.loads(text[len(prefix):])


def _make_template(tmp_path, index: str):
    archive = tmp_path / "template.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("index.html", index)
        zf.writestr("assets/report.js", "// js")
    return archive


# ─── Initialization ──────────────────────────────────────────────────────────

def test_initialize_creates_directory(tmp_path):
    exporter = _exporter(tmp_path)
    path = exporter.initialize()
    assert path.is_dir()
    assert path == tmp_path / "report"


def test_initialize_removes_stale_files(tmp_path):
    """Non-timestamped runs start from an empty directory, sub folders survive."""
    report_dir = tmp_path / "report"
    (report_dir / "assets").mkdir(parents=True)
    (report_dir / "Test99.js").write_text("stale")
    (report_dir / "summary.js").write_text("stale")

    exporter = _exporter(tmp_path)
    exporter.initialize()
    exporter.initialize()

    remaining = sorted(p.name for p in report_dir.iterdir())
    assert remaining == ["assets"]


def test_timestamped_run_keeps_previous_files(tmp_path):
    report_dir = tmp_path / "report"
    report_dir.mkdir()
    (report_dir / "old.js").write_text("previous run")

    exporter = _exporter(tmp_path, timestamp_reports=True)
    path = exporter.initialize()

    assert path.parent == report_dir
    assert path.name.isdigit()
    assert (report_dir / "old.js").exists()


def test_initialize_failure_is_not_fatal(tmp_path):
    blocker = tmp_path / "report"
    blocker.write_text("a file where the directory should be")

    exporter = _exporter(tmp_path, timestamp_reports=True)
    exporter.initialize()
    # the write fails and is logged, the run goes on
    assert exporter.record_case(_case(1)) is False


def test_writes_before_initialize_raise(tmp_path):
    with pytest.raises(RuntimeError):
        _exporter(tmp_path).record_case(_case(1))


# ─── Test case files ─────────────────────────────────────────────────────────

def test_record_case_writes_script(tmp_path):
    exporter = _exporter(tmp_path)
    path = exporter.initialize()

    case = _case(1, ignore_for_execution_statistics=True)
    case.request.payload = {"id": 12345678901234567890123}
    assert exporter.record_case(case)

    data = _load_script(path / "Test1.js", "Test1")
    assert data["id"] == "Test 1"
    assert data["response"]["response_code"] == 400
    assert "ignore_for_execution_statistics" not in data
    # integers keep full precision
    assert data["request"]["payload"]["id"] == 12345678901234567890123
    assert exporter.includes == ['<script type="text/javascript" src="Test1.js"></script>']


def test_failed_write_keeps_case_out_of_summary(tmp_path):
    exporter = _exporter(tmp_path)
    path = exporter.initialize()
    (path / "Test2.js").mkdir()

    assert exporter.record_case(_case(1))
    assert exporter.record_case(_case(2)) is False

    assert list(exporter.test_cases) == ["Test 1"]
    assert exporter.includes == ['<script type="text/javascript" src="Test1.js"></script>']
    report = exporter.write_summary(total=2, success=1, warnings=0, errors=1)
    assert [row.id for row in report.summary_list] == ["Test 1"]


def test_concurrent_recording_keeps_every_case(tmp_path):
    exporter = _exporter(tmp_path)
    exporter.initialize()

    def record(start):
        for n in range(start, start + 25):
            exporter.record_case(_case(n))

    threads = [threading.Thread(target=record, args=(i * 25,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(exporter.test_cases) == 200
    assert len(exporter.includes) == 200


# ─── Summary ─────────────────────────────────────────────────────────────────

def test_summary_filters_skipped_and_sorts(tmp_path):
    exporter = _exporter(tmp_path)
    path = exporter.initialize()

    exporter.record_case(_case(3, path="/users", method="POST"))
    exporter.record_case(_case(1, path="/users", method="GET"))
    exporter.record_case(_case(10, path="/accounts"))
    exporter.record_case(_case(2, path="/accounts"))
    exporter.record_case(_case(4, path="/accounts", skipped=True))

    report = exporter.write_summary(total=100, success=60, warnings=30, errors=10)

    assert [s.id for s in report.summary_list] == ["Test 2", "Test 10", "Test 1", "Test 3"]
    data = _load_script(path / "summary.js", "summary")
    assert len(data["summary_list"]) == 4
    assert data["total_tests"] == 100
    assert data["success"] == 60
    assert data["warnings"] == 30
    assert data["errors"] == 10
    assert data["timestamp"].endswith("GMT")


# ─── Report bundle ───────────────────────────────────────────────────────────

def test_report_files_replace_placeholder(tmp_path):
    index = "<html>\n<head>\n    PLACEHOLDER\n</head>\n<body></body>\n</html>\n"
    exporter = TestCaseExporter(
        ReportingConfig(output_dir=str(tmp_path / "report")),
        template=_make_template(tmp_path, index),
    )
    path = exporter.initialize()
    exporter.record_case(_case(1))
    exporter.record_case(_case(2))

    assert exporter.write_report_files()

    lines = (path / "index.html").read_text(encoding="utf-8").splitlines()
    template_lines = index.splitlines()
    assert PLACEHOLDER not in "\n".join(lines)
    assert lines[:2] == template_lines[:2]
    assert lines[-3:] == template_lines[-3:]
    assert lines[2] == '    <script type="text/javascript" src="Test1.js"></script>'
    assert lines[3] == '<script type="text/javascript" src="Test2.js"></script>'
    assert (path / "assets" / "report.js").exists()


def test_report_files_rerun_on_fresh_template(tmp_path):
    index = "a\nPLACEHOLDER\nb\n"
    exporter = TestCaseExporter(
        ReportingConfig(output_dir=str(tmp_path / "report")),
        template=_make_template(tmp_path, index),
    )
    path = exporter.initialize()
    exporter.record_case(_case(1))

    exporter.write_report_files()
    first = (path / "index.html").read_text(encoding="utf-8")
    exporter.write_report_files()
    second = (path / "index.html").read_text(encoding="utf-8")

    assert first == second == 'a\n<script type="text/javascript" src="Test1.js"></script>\nb\n'


def test_bad_template_keeps_written_files(tmp_path):
    broken = tmp_path / "broken.zip"
    broken.write_text("not a zip")
    exporter = TestCaseExporter(ReportingConfig(output_dir=str(tmp_path / "report")), template=broken)
    path = exporter.initialize()
    exporter.record_case(_case(1))
    exporter.write_summary(1, 1, 0, 0)

    assert exporter.write_report_files() is False
    assert (path / "Test1.js").exists()
    assert (path / "summary.js").exists()


def test_bundled_template_has_placeholder(tmp_path):
    exporter = _exporter(tmp_path)
    path = exporter.initialize()
    exporter.record_case(_case(7))

    assert exporter.write_report_files()
    html = (path / "index.html").read_text(encoding="utf-8")
    assert "Test7.js" in html
    assert PLACEHOLDER not in html


# ─── Execution statistics ────────────────────────────────────────────────────

def test_execution_details_grouping():
    cases = [
        _case(1, time_ms=30),
        _case(2, time_ms=10),
        _case(3, time_ms=20),
        _case(4, time_ms=1000, skipped=True),
        _case(5, time_ms=5, ignore_for_execution_statistics=True),
        _case(6, path="/single", time_ms=7),
        _case(7, method="GET", time_ms=3),
        _case(8, method="GET", time_ms=9),
    ]
    details = {d.path: d for d in compute_execution_details(cases)}

    assert set(details) == {"POST /users", "GET /users"}
    post = details["POST /users"]
    assert post.average == pytest.approx(20.0)
    assert post.best_case == "Test 2 - 10ms"
    assert post.worst_case == "Test 1 - 30ms"
    assert post.executions == ["Test 2 - 10ms", "Test 3 - 20ms", "Test 1 - 30ms"]


def test_performance_report_is_optional(tmp_path):
    exporter = _exporter(tmp_path)
    exporter.initialize()
    exporter.record_case(_case(1))
    exporter.record_case(_case(2))
    assert exporter.write_performance_report() == []

    enabled = _exporter(tmp_path, print_execution_statistics=True)
    enabled.initialize()
    enabled.record_case(_case(1))
    enabled.record_case(_case(2))
    assert len(enabled.write_performance_report()) == 1
