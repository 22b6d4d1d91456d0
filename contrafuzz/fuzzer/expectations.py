"""
Expectation policies — which response code family is correct per test dimension.

A policy is a plain value. Variants start from one of the presets below and
override only the dimensions where they differ, e.g. a server that validates
before trimming must reject a whitespace-padded value that a trim-first server
would accept.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum

from contrafuzz.http import ResponseCodeFamily


class Dimension(str, Enum):
    REQUIRED_FIELD = "required_field"
    OPTIONAL_FIELD = "optional_field"
    PATTERN_MISMATCH_FIELD = "pattern_mismatch_field"
    REQUIRED_HEADER = "required_header"
    OPTIONAL_HEADER = "optional_header"


@dataclass(frozen=True)
class ExpectationPolicy:
    required_field: ResponseCodeFamily = ResponseCodeFamily.FOURXX
    optional_field: ResponseCodeFamily = ResponseCodeFamily.TWOXX
    pattern_mismatch_field: ResponseCodeFamily = ResponseCodeFamily.FOURXX
    required_header: ResponseCodeFamily = ResponseCodeFamily.FOURXX
    optional_header: ResponseCodeFamily = ResponseCodeFamily.TWOXX

    def override(self, **changes: ResponseCodeFamily) -> ExpectationPolicy:
        """Return a copy with only the given dimensions changed."""
        return replace(self, **changes)

    def expected_for(self, dimension: Dimension) -> ResponseCodeFamily:
        return getattr(self, dimension.value)

    def as_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name).value for f in fields(self)}


DEFAULT_POLICY = ExpectationPolicy()

# Headers
EXPECT_4XX_HEADERS = DEFAULT_POLICY.override(
    required_header=ResponseCodeFamily.FOURXX,
    optional_header=ResponseCodeFamily.TWOXX,
)
EXPECT_ONLY_4XX_HEADERS = DEFAULT_POLICY.override(
    required_header=ResponseCodeFamily.FOURXX,
    optional_header=ResponseCodeFamily.FOURXX,
)

# Fields: the server trims first, so padding is harmless
TRIM_VALIDATE = DEFAULT_POLICY.override(
    required_field=ResponseCodeFamily.TWOXX,
    optional_field=ResponseCodeFamily.TWOXX,
    pattern_mismatch_field=ResponseCodeFamily.TWOXX,
)
# Fields: the server validates the raw value, so padding must be rejected
VALIDATE_TRIM = TRIM_VALIDATE.override(
    required_field=ResponseCodeFamily.FOURXX,
    optional_field=ResponseCodeFamily.FOURXX,
    pattern_mismatch_field=ResponseCodeFamily.FOURXX,
)

PRESETS = {
    "default": DEFAULT_POLICY,
    "expect-4xx-headers": EXPECT_4XX_HEADERS,
    "expect-only-4xx-headers": EXPECT_ONLY_4XX_HEADERS,
    "trim-validate": TRIM_VALIDATE,
    "validate-trim": VALIDATE_TRIM,
}
