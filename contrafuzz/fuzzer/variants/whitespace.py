"""Unicode whitespace and separators around and inside values."""

from contrafuzz.fuzzer.expectations import (
    DEFAULT_POLICY,
    EXPECT_ONLY_4XX_HEADERS,
    TRIM_VALIDATE,
    VALIDATE_TRIM,
)
from contrafuzz.fuzzer.payloads import SEPARATORS_HEADERS, WHITESPACES
from contrafuzz.fuzzer.strategy import StrategyKind
from contrafuzz.fuzzer.variants.base import FuzzerVariant, Target, has_long_string_field
from contrafuzz.http import ResponseCodeFamily


def variants() -> list[FuzzerVariant]:
    separators = tuple(SEPARATORS_HEADERS)
    whitespaces = tuple(WHITESPACES)

    return [
        FuzzerVariant(
            name="LeadingWhitespacesInHeaders",
            description="prefix value with unicode separators",
            target=Target.HEADERS,
            kind=StrategyKind.PREFIX,
            payloads=separators,
            policy=EXPECT_ONLY_4XX_HEADERS,
        ),
        FuzzerVariant(
            name="TrailingWhitespacesInHeaders",
            description="trail value with unicode separators",
            target=Target.HEADERS,
            kind=StrategyKind.TRAIL,
            payloads=separators,
            policy=EXPECT_ONLY_4XX_HEADERS,
        ),
        FuzzerVariant(
            name="OnlyWhitespacesInHeaders",
            description="replace value with unicode separators",
            target=Target.HEADERS,
            kind=None,
            payloads=separators,
            policy=EXPECT_ONLY_4XX_HEADERS,
        ),
        FuzzerVariant(
            name="LeadingWhitespacesInFieldsTrimValidate",
            description="prefix value with unicode whitespaces, server trims first",
            target=Target.FIELDS,
            kind=StrategyKind.PREFIX,
            payloads=whitespaces,
            policy=TRIM_VALIDATE,
        ),
        FuzzerVariant(
            name="LeadingWhitespacesInFieldsValidateTrim",
            description="prefix value with unicode whitespaces, server validates first",
            target=Target.FIELDS,
            kind=StrategyKind.PREFIX,
            payloads=whitespaces,
            policy=VALIDATE_TRIM,
        ),
        FuzzerVariant(
            name="TrailingWhitespacesInFieldsTrimValidate",
            description="trail value with unicode whitespaces, server trims first",
            target=Target.FIELDS,
            kind=StrategyKind.TRAIL,
            payloads=whitespaces,
            policy=TRIM_VALIDATE,
        ),
        FuzzerVariant(
            name="TrailingWhitespacesInFieldsValidateTrim",
            description="trail value with unicode whitespaces, server validates first",
            target=Target.FIELDS,
            kind=StrategyKind.TRAIL,
            payloads=whitespaces,
            policy=VALIDATE_TRIM,
        ),
        FuzzerVariant(
            name="WithinWhitespacesInFields",
            description="insert unicode whitespaces in the middle of the value",
            target=Target.FIELDS,
            kind=StrategyKind.INSERT,
            payloads=whitespaces,
            # whitespace inside a value is legal unless a pattern forbids it
            policy=TRIM_VALIDATE.override(pattern_mismatch_field=ResponseCodeFamily.FOURXX),
            applies=has_long_string_field,
        ),
        FuzzerVariant(
            name="OnlyWhitespacesInFields",
            description="replace value with unicode whitespaces",
            target=Target.FIELDS,
            kind=None,
            payloads=whitespaces,
            policy=DEFAULT_POLICY,
        ),
    ]
