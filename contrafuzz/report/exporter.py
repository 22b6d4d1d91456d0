"""
Test case exporter — writes the HTML report bundle for a run.

Layout of the report directory:
    <output_dir>[/<epoch millis>]/
        Test1.js, Test2.js, ...   one `var <id> = {...}` per test case
        summary.js                `var summary = {...}`
        index.html + assets       unpacked from templates/report.zip
"""

from __future__ import annotations

import json
import logging
import threading
import time
import zipfile
from collections import defaultdict
from datetime import datetime, timezone
from email.utils import format_datetime
from importlib import resources
from pathlib import Path
from typing import Iterable

from contrafuzz.config import ReportingConfig
from contrafuzz.models import TestCase, TestCaseSummary, TestReport, TimeExecutionDetails
from contrafuzz.ui import print_execution_details, print_section

logger = logging.getLogger(__name__)

SCRIPT = '<script type="text/javascript" src="{source}"></script>'
PLACEHOLDER = "PLACEHOLDER"
REPORT_ZIP = "report.zip"
REPORT_HTML = "index.html"
SUMMARY = "summary"
JAVASCRIPT_EXTENSION = ".js"


def _to_json(model) -> str:
    # json mode keeps Python ints, so large integers are written exactly
    return json.dumps(model.model_dump(mode="json"), indent=2)


def compute_execution_details(cases: Iterable[TestCase]) -> list[TimeExecutionDetails]:
    """
    Response time statistics per endpoint.

    Skipped cases and cases flagged as ignored for statistics are left out.
    Only endpoints hit by more than one test case are reported.
    """
    groups: dict[str, list[TestCase]] = defaultdict(list)
    for case in cases:
        if case.counts_for_statistics:
            groups[case.endpoint].append(case)

    details = []
    for endpoint, runs in groups.items():
        if len(runs) < 2:
            continue
        runs = sorted(runs, key=lambda c: c.response.response_time_ms)
        average = sum(c.response.response_time_ms for c in runs) / len(runs)
        details.append(TimeExecutionDetails(
            path=endpoint,
            average=average,
            best_case=runs[0].execution_time_string(),
            worst_case=runs[-1].execution_time_string(),
            executions=[c.execution_time_string() for c in runs],
        ))
    return details


class TestCaseExporter:
    """Collects test cases for one run and writes the report files."""
    __test__ = False

    def __init__(self, config: ReportingConfig | None = None, template: str | Path | None = None):
        self.config = config or ReportingConfig()
        self.template = template
        self.path: Path | None = None
        self._cases: dict[str, TestCase] = {}
        self._includes: list[str] = []
        self._lock = threading.Lock()

    # ── Setup ────────────────────────────────────────────────────────────────

    def initialize(self) -> Path:
        """Resolve the report directory and clear files left by a previous run."""
        sub_folder = str(int(time.time() * 1000)) if self.config.timestamp_reports else ""
        path = Path(self.config.output_dir, sub_folder)

        with self._lock:
            self._cases.clear()
            self._includes.clear()
            try:
                if not self.config.timestamp_reports and path.is_dir():
                    self._delete_files(path)
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error("Exception while creating root test cases folder: %s", e)
            self.path = path
        return path

    @staticmethod
    def _delete_files(path: Path) -> None:
        for entry in path.iterdir():
            if not entry.is_dir():
                entry.unlink()

    def _require_path(self) -> Path:
        if self.path is None:
            raise RuntimeError("TestCaseExporter.initialize() must run before writing")
        return self.path

    # ── Recording ────────────────────────────────────────────────────────────

    @property
    def test_cases(self) -> dict[str, TestCase]:
        with self._lock:
            return dict(self._cases)

    @property
    def includes(self) -> list[str]:
        with self._lock:
            return list(self._includes)

    def record_case(self, case: TestCase) -> bool:
        """Write one test case to <id>.js and remember it for the summary."""
        path = self._require_path()
        case_name = case.id.replace(" ", "")
        test_path = path / f"{case_name}{JAVASCRIPT_EXTENSION}"

        content = f"var {case_name} = {_to_json(case)}"
        if not self._write(case_name, test_path, content):
            return False

        # Unwritten cases stay out of the summary
        with self._lock:
            self._cases[case.id] = case
            self._includes.append(SCRIPT.format(source=test_path.name))
        return True

    def _write(self, name: str, target: Path, content: str) -> bool:
        try:
            with open(target, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.warning("Something went wrong while writing test case %s: %s", name, e)
            return False
        logger.debug("Finish writing test case %s to file %s", name, target)
        return True

    # ── Finalize ─────────────────────────────────────────────────────────────

    def write_summary(self, total: int, success: int, warnings: int, errors: int) -> TestReport:
        """
        Write summary.js.

        The counters come from the caller and are not derived from the
        recorded cases, which may have been filtered.
        """
        path = self._require_path()
        summaries = sorted(
            (TestCaseSummary.from_test_case(c) for c in self.test_cases.values() if c.is_not_skipped),
            key=TestCaseSummary.sort_key,
        )
        report = TestReport(
            summary_list=summaries,
            success=success,
            warnings=warnings,
            errors=errors,
            total_tests=total,
            timestamp=format_datetime(datetime.now(timezone.utc), usegmt=True),
        )
        content = f"var {SUMMARY} = {_to_json(report)}"
        self._write(SUMMARY, path / f"{SUMMARY}{JAVASCRIPT_EXTENSION}", content)
        return report

    def _open_template(self):
        if self.template is not None:
            return open(self.template, "rb")
        return (resources.files("contrafuzz.report") / "templates" / REPORT_ZIP).open("rb")

    def write_report_files(self) -> bool:
        """Unpack the dashboard and point index.html at the test case scripts."""
        path = self._require_path()
        includes = "\n".join(self.includes)
        try:
            with self._open_template() as stream, zipfile.ZipFile(stream) as archive:
                archive.extractall(path)
            index = path / REPORT_HTML
            with open(index, encoding="utf-8", newline="") as f:
                lines = f.readlines()
            with open(index, "w", encoding="utf-8", newline="") as f:
                f.writelines(line.replace(PLACEHOLDER, includes) for line in lines)
        except (OSError, zipfile.BadZipFile) as e:
            logger.error("Unable to write reporting files: %s", e)
            return False
        return True

    def execution_statistics(self) -> list[TimeExecutionDetails]:
        return compute_execution_details(self.test_cases.values())

    def write_performance_report(self) -> list[TimeExecutionDetails]:
        if not self.config.print_execution_statistics:
            logger.info(
                "Skip printing time execution statistics. "
                "You can use --stats to enable this feature!"
            )
            return []
        details = self.execution_statistics()
        print_section("Execution time details", "⏱")
        for entry in details:
            print_execution_details(entry)
        return details

    def finalize(self, total: int, success: int, warnings: int, errors: int) -> TestReport:
        """Write summary, dashboard and (optionally) timing statistics."""
        report = self.write_summary(total, success, warnings, errors)
        self.write_report_files()
        self.write_performance_report()
        return report
