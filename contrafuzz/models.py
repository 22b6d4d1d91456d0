"""
Core data models for contrafuzz.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"


class FuzzingData(BaseModel):
    """One operation of the API contract, with a valid sample request."""
    path: str
    method: str = "POST"
    payload: dict[str, Any] = Field(default_factory=dict)
    required_fields: list[str] = Field(default_factory=list)
    patterns: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    required_headers: list[str] = Field(default_factory=list)

    def string_fields(self) -> list[str]:
        """Top-level payload fields holding string samples."""
        return [name for name, value in self.payload.items() if isinstance(value, str)]

    def matches_pattern(self, field: str, value: str) -> bool:
        pattern = self.patterns.get(field)
        if pattern is None:
            return True
        return re.fullmatch(pattern, value) is not None


class RequestInfo(BaseModel):
    url: str = ""
    http_method: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    payload: Any = None


class ResponseInfo(BaseModel):
    response_code: int = 0
    http_method: str = ""
    body: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    response_time_ms: int = 0
    fuzzed_field: str = ""


class TestCase(BaseModel):
    """A single executed fuzz attempt."""
    __test__ = False

    id: str
    path: str = ""
    method: str = ""
    fuzzer: str = ""
    scenario: str = ""
    expected_result: str = ""
    result: Verdict | None = None
    result_reason: str = ""
    result_details: str = ""
    request: RequestInfo = Field(default_factory=RequestInfo)
    response: ResponseInfo = Field(default_factory=ResponseInfo)
    skipped: bool = False
    # Internal bookkeeping, never written to the report
    ignore_for_execution_statistics: bool = Field(default=False, exclude=True)

    @property
    def is_not_skipped(self) -> bool:
        return not self.skipped

    @property
    def counts_for_statistics(self) -> bool:
        return not self.skipped and not self.ignore_for_execution_statistics

    @property
    def endpoint(self) -> str:
        return f"{self.method} {self.path}"

    def execution_time_string(self) -> str:
        return f"{self.id} - {self.response.response_time_ms}ms"


def _natural_key(value: str) -> tuple:
    return tuple(int(part) if part.isdigit() else part for part in re.split(r"(\d+)", value))


class TestCaseSummary(BaseModel):
    """Row of the report index."""
    __test__ = False

    id: str
    path: str
    http_method: str
    scenario: str = ""
    result: Verdict | None = None
    fuzzer: str = ""

    @classmethod
    def from_test_case(cls, case: TestCase) -> TestCaseSummary:
        return cls(
            id=case.id,
            path=case.path,
            http_method=case.method,
            scenario=case.scenario,
            result=case.result,
            fuzzer=case.fuzzer,
        )

    def sort_key(self) -> tuple:
        return (self.path, self.http_method, _natural_key(self.id))


class TestReport(BaseModel):
    """Content of summary.js."""
    __test__ = False

    summary_list: list[TestCaseSummary] = Field(default_factory=list)
    success: int = 0
    warnings: int = 0
    errors: int = 0
    total_tests: int = 0
    timestamp: str = ""


class TimeExecutionDetails(BaseModel):
    """Response time statistics for one endpoint."""
    path: str
    average: float
    best_case: str
    worst_case: str
    executions: list[str] = Field(default_factory=list)
