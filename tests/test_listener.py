"""Tests for verdicts and run counters."""
import pytest

from contrafuzz.config import ReportingConfig
from contrafuzz.http import ResponseCodeFamily
from contrafuzz.models import RequestInfo, ResponseInfo, Verdict
from contrafuzz.report.exporter import TestCaseExporter
from contrafuzz.report.listener import TestCaseListener, judge


@pytest.fixture
def listener(tmp_path):
    exporter = TestCaseExporter(ReportingConfig(output_dir=str(tmp_path / "report")))
    exporter.initialize()
    return TestCaseListener(exporter, quiet=True)


@pytest.mark.parametrize(
    "status, expected, verdict",
    [
        (400, ResponseCodeFamily.FOURXX, Verdict.SUCCESS),
        (201, ResponseCodeFamily.TWOXX, Verdict.SUCCESS),
        (500, ResponseCodeFamily.FOURXX, Verdict.ERROR),
        (502, ResponseCodeFamily.TWOXX, Verdict.ERROR),
        (200, ResponseCodeFamily.FOURXX, Verdict.ERROR),
        (422, ResponseCodeFamily.TWOXX, Verdict.WARNING),
        (302, ResponseCodeFamily.FOURXX, Verdict.WARNING),
    ],
)
def test_judge(status, expected, verdict):
    result, reason = judge(status, expected)
    assert result == verdict
    assert str(status) in reason


def test_case_ids_are_sequential(listener):
    first = listener.start_case("F", "/a", "POST")
    second = listener.start_case("F", "/a", "POST")
    assert (first.id, second.id) == ("Test 1", "Test 2")


def test_report_result_updates_counters_and_exporter(listener):
    request = RequestInfo(url="http://api/a", http_method="POST")

    ok = listener.start_case("F", "/a", "POST", "scenario")
    ok = listener.report_result(ok, request, ResponseInfo(response_code=400), ResponseCodeFamily.FOURXX)
    bad = listener.start_case("F", "/a", "POST")
    listener.report_result(bad, request, ResponseInfo(response_code=200), ResponseCodeFamily.FOURXX)
    odd = listener.start_case("F", "/a", "POST")
    listener.report_result(odd, request, ResponseInfo(response_code=404), ResponseCodeFamily.TWOXX)

    assert ok.result == Verdict.SUCCESS
    assert ok.expected_result == "Should return 4XX"
    assert ok.result_details == "Received 400 for [] in 0ms, expected 4XX"
    assert (listener.total, listener.success, listener.errors, listener.warnings) == (3, 1, 1, 1)
    assert set(listener.exporter.test_cases) == {"Test 1", "Test 2", "Test 3"}


def test_skip_is_recorded_but_not_counted(listener):
    case = listener.skip(listener.start_case("F", "/a", "POST"), "nothing to fuzz")
    assert case.skipped
    assert case.result == Verdict.SKIPPED
    assert listener.total == 0
    assert "Test 1" in listener.exporter.test_cases


def test_report_error_is_ignored_for_statistics(listener):
    request = RequestInfo(url="http://api/a", http_method="POST")
    case = listener.report_error(listener.start_case("F", "/a", "POST"), request, "connection refused")
    assert case.result == Verdict.ERROR
    assert case.ignore_for_execution_statistics
    assert case.result_details == "No response from POST http://api/a"
    assert listener.errors == 1


def test_end_session_uses_listener_counters(listener):
    request = RequestInfo()
    for code in (400, 400, 500):
        case = listener.start_case("F", "/a", "POST")
        listener.report_result(case, request, ResponseInfo(response_code=code), ResponseCodeFamily.FOURXX)
    listener.skip(listener.start_case("F", "/a", "POST"), "skip")

    report = listener.end_session()

    assert report.total_tests == 3
    assert report.success == 2
    assert report.errors == 1
    assert len(report.summary_list) == 3
    assert (listener.exporter.path / "summary.js").exists()
    assert (listener.exporter.path / "index.html").exists()
