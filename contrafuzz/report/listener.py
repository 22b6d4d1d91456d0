"""
Test case listener — turns responses into verdicts and feeds the exporter.
"""

from __future__ import annotations

import itertools
import logging
import threading

from contrafuzz.http import ResponseCodeFamily
from contrafuzz.models import RequestInfo, ResponseInfo, TestCase, TestReport, Verdict
from contrafuzz.report.exporter import TestCaseExporter
from contrafuzz.ui import print_case, print_summary

logger = logging.getLogger(__name__)


def judge(status_code: int, expected: ResponseCodeFamily) -> tuple[Verdict, str]:
    """
    Compare an observed status code with the expected family.

    Returns:
        (verdict, reason). A match is a success. A 5XX, or a 2XX where a 4XX
        was expected, is an error. Anything else is a warning.
    """
    if expected.matches(status_code):
        return Verdict.SUCCESS, f"Response code {status_code} matches expected {expected}"
    if ResponseCodeFamily.FIVEXX.matches(status_code):
        return Verdict.ERROR, f"Server error {status_code}, expected {expected}"
    if expected == ResponseCodeFamily.FOURXX and ResponseCodeFamily.TWOXX.matches(status_code):
        return Verdict.ERROR, f"Invalid input accepted with {status_code}, expected {expected}"
    return Verdict.WARNING, f"Unexpected response code {status_code}, expected {expected}"


class TestCaseListener:
    """Numbers test cases, keeps the run counters and records finished cases."""
    __test__ = False

    def __init__(self, exporter: TestCaseExporter, quiet: bool = False):
        self.exporter = exporter
        self.quiet = quiet
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.total = 0
        self.success = 0
        self.warnings = 0
        self.errors = 0

    def start_case(self, fuzzer: str, path: str, method: str, scenario: str = "") -> TestCase:
        with self._lock:
            case_id = f"Test {next(self._ids)}"
        return TestCase(id=case_id, fuzzer=fuzzer, path=path, method=method, scenario=scenario)

    def _count(self, verdict: Verdict) -> None:
        with self._lock:
            self.total += 1
            if verdict == Verdict.SUCCESS:
                self.success += 1
            elif verdict == Verdict.WARNING:
                self.warnings += 1
            elif verdict == Verdict.ERROR:
                self.errors += 1

    def _finish(self, case: TestCase, verdict: Verdict, reason: str) -> TestCase:
        case = case.model_copy(update={"result": verdict, "result_reason": reason})
        if verdict != Verdict.SKIPPED:
            self._count(verdict)
            if not self.quiet:
                print_case(case.id, case.fuzzer, verdict.value, reason)
        self.exporter.record_case(case)
        return case

    def report_result(
        self,
        case: TestCase,
        request: RequestInfo,
        response: ResponseInfo,
        expected: ResponseCodeFamily,
    ) -> TestCase:
        verdict, reason = judge(response.response_code, expected)
        case = case.model_copy(update={
            "request": request,
            "response": response,
            "expected_result": f"Should return {expected}",
            "result_details": (
                f"Received {response.response_code} for [{response.fuzzed_field}] "
                f"in {response.response_time_ms}ms, expected {expected}"
            ),
        })
        return self._finish(case, verdict, reason)

    def report_error(self, case: TestCase, request: RequestInfo, reason: str) -> TestCase:
        """The request could not be executed at all."""
        case = case.model_copy(update={
            "request": request,
            "result_details": f"No response from {request.http_method} {request.url}",
            "ignore_for_execution_statistics": True,
        })
        logger.warning("%s failed: %s", case.id, reason)
        return self._finish(case, Verdict.ERROR, reason)

    def skip(self, case: TestCase, reason: str) -> TestCase:
        case = case.model_copy(update={"skipped": True})
        logger.debug("Skipping %s: %s", case.id, reason)
        return self._finish(case, Verdict.SKIPPED, reason)

    def end_session(self) -> TestReport:
        report = self.exporter.finalize(self.total, self.success, self.warnings, self.errors)
        if not self.quiet:
            print_summary(self.total, self.success, self.warnings, self.errors)
        return report
