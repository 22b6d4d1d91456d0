"""
Fuzzing strategies — how a fuzz value is combined with a valid sample value.

Strategies:
- REPLACE: the fuzzed value replaces the generated one
- PREFIX: the fuzzed value is prepended to the generated one
- TRAIL: the fuzzed value is appended to the generated one
- INSERT: the fuzzed value is spliced into the middle of the generated one
- SKIP: the generated value is sent unchanged
- NOOP: the strategy data is sent as-is

A fuzz value is classified by the Unicode categories it contains. Control,
separator and other-symbol characters ("special" characters) are the ones that
servers tend to trim, reject or choke on.
"""

from __future__ import annotations

import json
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Any

CONTROL_CATEGORIES = frozenset({"Cc", "Cf", "Co", "Cs"})
SEPARATOR_CATEGORIES = frozenset({"Zl", "Zp", "Zs"})
OTHER_SYMBOL_CATEGORIES = frozenset({"So"})
SPECIAL_CATEGORIES = CONTROL_CATEGORIES | SEPARATOR_CATEGORIES | OTHER_SYMBOL_CATEGORIES

DISPLAY_LIMIT = 30


def is_control_char(ch: str) -> bool:
    return unicodedata.category(ch) in CONTROL_CATEGORIES


def is_separator(ch: str) -> bool:
    return unicodedata.category(ch) in SEPARATOR_CATEGORIES


def is_other_symbol(ch: str) -> bool:
    return unicodedata.category(ch) in OTHER_SYMBOL_CATEGORIES


def is_special(ch: str) -> bool:
    return unicodedata.category(ch) in SPECIAL_CATEGORIES


class StrategyKind(str, Enum):
    REPLACE = "REPLACE"
    PREFIX = "PREFIX"
    TRAIL = "TRAIL"
    INSERT = "INSERT"
    SKIP = "SKIP"
    NOOP = "NOOP"


PAYLOAD_KINDS = frozenset({
    StrategyKind.REPLACE,
    StrategyKind.PREFIX,
    StrategyKind.TRAIL,
    StrategyKind.INSERT,
})


def _as_text(value: Any) -> str:
    """Render a sample value the way it would appear in a JSON payload."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


@dataclass(frozen=True)
class FuzzStrategy:
    """A strategy kind plus the fuzz data it carries."""
    kind: StrategyKind
    data: str | None = None

    def __post_init__(self):
        if self.kind in PAYLOAD_KINDS and self.data is None:
            raise ValueError(f"{self.kind.value} strategy requires data")

    # ── Factories ────────────────────────────────────────────────────────────

    @classmethod
    def replace(cls, data: str) -> FuzzStrategy:
        return cls(StrategyKind.REPLACE, data)

    @classmethod
    def prefix(cls, data: str) -> FuzzStrategy:
        return cls(StrategyKind.PREFIX, data)

    @classmethod
    def trail(cls, data: str) -> FuzzStrategy:
        return cls(StrategyKind.TRAIL, data)

    @classmethod
    def insert(cls, data: str) -> FuzzStrategy:
        return cls(StrategyKind.INSERT, data)

    @classmethod
    def skip(cls) -> FuzzStrategy:
        return cls(StrategyKind.SKIP)

    @classmethod
    def noop(cls, data: str | None = None) -> FuzzStrategy:
        return cls(StrategyKind.NOOP, data)

    @property
    def is_skip(self) -> bool:
        return self.kind == StrategyKind.SKIP

    def process(self, value: Any) -> str | None:
        """Apply this strategy to a valid sample value."""
        text = _as_text(value)
        if self.kind == StrategyKind.REPLACE:
            return self.data
        if self.kind == StrategyKind.PREFIX:
            return self.data + text
        if self.kind == StrategyKind.TRAIL:
            return text + self.data
        if self.kind == StrategyKind.INSERT:
            middle = len(text) // 2
            return text[:middle] + self.data + text[middle:]
        if self.kind == StrategyKind.SKIP:
            return text
        return self.data

    def truncated_value(self) -> str:
        """Display form for reports; the data is cut to DISPLAY_LIMIT characters."""
        if self.data is None:
            return self.kind.value
        to_print = self.data
        if len(to_print) > DISPLAY_LIMIT:
            to_print = to_print[:DISPLAY_LIMIT] + "..."
        return f"{self.kind.value} with {format_value(to_print)}"

    def __str__(self) -> str:
        if self.data is not None:
            return f"{self.kind.value} with {self.data}"
        return self.kind.value


# ── Classification ───────────────────────────────────────────────────────────

def _leading_run(value: str) -> str:
    end = 0
    while end < len(value) and is_special(value[end]):
        end += 1
    return value[:end]


def _trailing_run(value: str) -> str:
    start = len(value)
    while start > 0 and is_special(value[start - 1]):
        start -= 1
    return value[start:]


def _first_run(value: str) -> str:
    start = 0
    while start < len(value) and not is_special(value[start]):
        start += 1
    return _leading_run(value[start:])


def classify(value: str) -> FuzzStrategy:
    """
    Work out which strategy a fuzz value encodes.

    Args:
        value: fuzz value produced by a payload generator

    Returns:
        REPLACE when the value is blank or made only of special characters,
        PREFIX/TRAIL when it starts/ends with special characters, INSERT when
        a run of them sits inside, REPLACE otherwise.
    """
    if not value or value.isspace() or all(is_special(ch) for ch in value):
        return FuzzStrategy.replace(value)
    if is_special(value[0]):
        return FuzzStrategy.prefix(_leading_run(value))
    if is_special(value[-1]):
        return FuzzStrategy.trail(_trailing_run(value))
    inner = _first_run(value)
    if inner:
        # only the first run is used, later ones are ignored
        return FuzzStrategy.insert(inner)
    return FuzzStrategy.replace(value)


def merge(fuzzed_value: str, supplied_value: Any) -> str | None:
    """Combine a fuzz value with a schema-valid sample value."""
    return classify(fuzzed_value).process(supplied_value)


# ── Display ──────────────────────────────────────────────────────────────────

def _escape(ch: str) -> str:
    code_point = ord(ch)
    if code_point > 0xFFFF:
        code_point -= 0x10000
        high = 0xD800 + (code_point >> 10)
        low = 0xDC00 + (code_point & 0x3FF)
        return "\\u%04x\\u%04x" % (high, low)
    return "\\u%04x" % code_point


def format_value(data: str | None) -> str | None:
    """Escape special characters as \\uXXXX so they are visible in logs and reports."""
    if data is None:
        return None
    return "".join(_escape(ch) if is_special(ch) else ch for ch in data)
