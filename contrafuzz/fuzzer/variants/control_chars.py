"""Invisible control and format characters."""

from contrafuzz.fuzzer.expectations import (
    DEFAULT_POLICY,
    EXPECT_4XX_HEADERS,
    TRIM_VALIDATE,
    VALIDATE_TRIM,
)
from contrafuzz.fuzzer.payloads import CONTROL_CHARS, CONTROL_CHARS_HEADERS
from contrafuzz.fuzzer.strategy import StrategyKind
from contrafuzz.fuzzer.variants.base import FuzzerVariant, Target, has_long_string_field


def variants() -> list[FuzzerVariant]:
    header_chars = tuple(CONTROL_CHARS_HEADERS)
    field_chars = tuple(CONTROL_CHARS)

    cases = [
        FuzzerVariant(
            name="LeadingControlCharsInHeaders",
            description="prefix value with unicode control chars",
            target=Target.HEADERS,
            kind=StrategyKind.PREFIX,
            payloads=header_chars,
            policy=EXPECT_4XX_HEADERS,
        ),
        FuzzerVariant(
            name="TrailingControlCharsInHeaders",
            description="trail value with unicode control chars",
            target=Target.HEADERS,
            kind=StrategyKind.TRAIL,
            payloads=header_chars,
            policy=EXPECT_4XX_HEADERS,
        ),
        FuzzerVariant(
            name="WithinControlCharsInFields",
            description="insert unicode control chars in the middle of the value",
            target=Target.FIELDS,
            kind=StrategyKind.INSERT,
            payloads=field_chars,
            policy=VALIDATE_TRIM,
            applies=has_long_string_field,
        ),
        FuzzerVariant(
            name="OnlyControlCharsInFields",
            description="replace value with unicode control chars",
            target=Target.FIELDS,
            kind=None,
            payloads=field_chars,
            policy=DEFAULT_POLICY,
        ),
    ]

    for position, kind in (("Leading", StrategyKind.PREFIX), ("Trailing", StrategyKind.TRAIL)):
        for order, policy in (("TrimValidate", TRIM_VALIDATE), ("ValidateTrim", VALIDATE_TRIM)):
            cases.append(FuzzerVariant(
                name=f"{position}ControlCharsInFields{order}",
                description=f"{kind.value.lower()} value with unicode control chars",
                target=Target.FIELDS,
                kind=kind,
                payloads=field_chars,
                policy=policy,
            ))
    return cases
