"""
HTTP response code families.

A family groups status codes by their leading digit. Fuzzer expectations are
expressed as families, never as exact codes.
"""

from __future__ import annotations

from enum import Enum


class ResponseCodeFamily(str, Enum):
    ONEXX = "1XX"
    TWOXX = "2XX"
    THREEXX = "3XX"
    FOURXX = "4XX"
    FIVEXX = "5XX"

    @property
    def lower_bound(self) -> int:
        return int(self.value[0]) * 100

    @property
    def as_string(self) -> str:
        return self.value

    def matches(self, status_code: int) -> bool:
        """True if the status code falls within [lower_bound, lower_bound + 100)."""
        return self.lower_bound <= status_code < self.lower_bound + 100

    @classmethod
    def from_code(cls, status_code: int) -> "ResponseCodeFamily":
        """Return the family owning a status code in the 100-599 range."""
        for family in cls:
            if family.matches(status_code):
                return family
        raise ValueError(f"{status_code} is not a valid HTTP status code")

    def __str__(self) -> str:
        return self.value
