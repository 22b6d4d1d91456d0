from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from contrafuzz.fuzzer.expectations import DEFAULT_POLICY, Dimension, ExpectationPolicy
from contrafuzz.fuzzer.strategy import FuzzStrategy, StrategyKind, classify, merge
from contrafuzz.http import ResponseCodeFamily
from contrafuzz.models import FuzzingData


class Target(str, Enum):
    FIELDS = "fields"
    HEADERS = "headers"


@dataclass(frozen=True)
class FuzzerVariant:
    """A registered fuzzer: what it sends, where, and what a correct server returns."""
    name: str                      # Unique registry key
    description: str               # What is sent to the service
    target: Target
    kind: StrategyKind | None      # None: derive the strategy from each payload
    payloads: tuple[str, ...]
    policy: ExpectationPolicy = DEFAULT_POLICY
    applies: Callable[[FuzzingData], bool] | None = None

    def is_applicable(self, data: FuzzingData) -> bool:
        if self.target == Target.HEADERS and not data.headers:
            return False
        if self.target == Target.FIELDS and not data.string_fields():
            return False
        return self.applies is None or self.applies(data)

    def strategy_for(self, payload: str) -> FuzzStrategy:
        if self.kind is None:
            return classify(payload)
        return FuzzStrategy(self.kind, payload)

    def mutate(self, payload: str, sample: Any) -> str | None:
        """Build the value sent on the wire from a payload and a valid sample."""
        if self.kind is None:
            return merge(payload, sample)
        return FuzzStrategy(self.kind, payload).process(sample)

    def expected_for(self, dimension: Dimension) -> ResponseCodeFamily:
        return self.policy.expected_for(dimension)


def has_long_string_field(data: FuzzingData) -> bool:
    """At least one string sample is long enough to have a middle."""
    return any(len(data.payload[name]) > 1 for name in data.string_fields())
