"""
Fuzz runner — drives the registered variants against one API operation.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from contrafuzz.client.http_caller import HttpCaller
from contrafuzz.fuzzer.expectations import Dimension
from contrafuzz.fuzzer.registry import get_variants
from contrafuzz.fuzzer.variants.base import FuzzerVariant, Target
from contrafuzz.models import FuzzingData, RequestInfo
from contrafuzz.report.listener import TestCaseListener
from contrafuzz.ui import get_progress

logger = logging.getLogger(__name__)


class FuzzRunner:
    """Runs every applicable variant over every field or header of an operation."""

    def __init__(
        self,
        caller: HttpCaller,
        listener: TestCaseListener,
        variants: list[FuzzerVariant] | None = None,
        show_progress: bool = False,
    ):
        self.caller = caller
        self.listener = listener
        self.variants = variants if variants is not None else get_variants()
        self.show_progress = show_progress

    def run(self, data: FuzzingData) -> None:
        applicable = []
        for variant in self.variants:
            if variant.is_applicable(data):
                applicable.append(variant)
            else:
                logger.debug("%s does not apply to %s %s", variant.name, data.method, data.path)

        if not self.show_progress:
            for variant in applicable:
                self._run_variant(variant, data)
            return

        with get_progress() as progress:
            task = progress.add_task("Fuzzing...", total=len(applicable))
            for variant in applicable:
                progress.update(task, description=f"[cyan]{variant.name}[/cyan]")
                self._run_variant(variant, data)
                progress.advance(task)

    def _run_variant(self, variant: FuzzerVariant, data: FuzzingData) -> None:
        if variant.target == Target.HEADERS:
            self._fuzz_headers(variant, data)
        else:
            self._fuzz_fields(variant, data)

    # ── Fields ───────────────────────────────────────────────────────────────

    @staticmethod
    def field_dimension(data: FuzzingData, field: str, fuzzed: str) -> Dimension:
        if not data.matches_pattern(field, fuzzed):
            return Dimension.PATTERN_MISMATCH_FIELD
        if field in data.required_fields:
            return Dimension.REQUIRED_FIELD
        return Dimension.OPTIONAL_FIELD

    def _fuzz_fields(self, variant: FuzzerVariant, data: FuzzingData) -> None:
        for field in data.string_fields():
            sample = data.payload[field]
            for payload in variant.payloads:
                fuzzed = variant.mutate(payload, sample)
                scenario = (
                    f"Send [{variant.strategy_for(payload).truncated_value()}] "
                    f"in request field [{field}]"
                )
                body = {**data.payload, field: fuzzed}
                self._execute(
                    variant, data, scenario,
                    headers=data.headers,
                    body=body,
                    dimension=self.field_dimension(data, field, fuzzed),
                    fuzzed_field=field,
                    unchanged=fuzzed == sample,
                )

    # ── Headers ──────────────────────────────────────────────────────────────

    @staticmethod
    def header_dimension(data: FuzzingData, header: str) -> Dimension:
        required = {h.lower() for h in data.required_headers}
        if header.lower() in required:
            return Dimension.REQUIRED_HEADER
        return Dimension.OPTIONAL_HEADER

    def _fuzz_headers(self, variant: FuzzerVariant, data: FuzzingData) -> None:
        for header, sample in data.headers.items():
            for payload in variant.payloads:
                fuzzed = variant.mutate(payload, sample)
                scenario = (
                    f"Send [{variant.strategy_for(payload).truncated_value()}] "
                    f"in request header [{header}]"
                )
                self._execute(
                    variant, data, scenario,
                    headers={**data.headers, header: fuzzed},
                    body=data.payload or None,
                    dimension=self.header_dimension(data, header),
                    fuzzed_field=header,
                    unchanged=fuzzed == sample,
                )

    # ── Execution ────────────────────────────────────────────────────────────

    def _execute(
        self,
        variant: FuzzerVariant,
        data: FuzzingData,
        scenario: str,
        headers: dict[str, str],
        body: Any,
        dimension: Dimension,
        fuzzed_field: str,
        unchanged: bool,
    ) -> None:
        case = self.listener.start_case(variant.name, data.path, data.method, scenario)
        if unchanged:
            self.listener.skip(case, "Fuzzed value is identical to the original value")
            return

        try:
            request, response = self.caller.call(data.method, data.path, headers, body)
        except httpx.LocalProtocolError as e:
            # Never left the client, e.g. h11 rejects padded header values
            self.listener.skip(case, f"HTTP client refused to send the request: {e}")
            return
        except httpx.HTTPError as e:
            request = RequestInfo(
                url=f"{self.caller.base_url}{data.path}",
                http_method=data.method,
                headers=headers,
                payload=body,
            )
            self.listener.report_error(case, request, f"Request failed: {e}")
            return

        response = response.model_copy(update={"fuzzed_field": fuzzed_field})
        self.listener.report_result(case, request, response, variant.expected_for(dimension))
