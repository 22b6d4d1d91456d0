"""Single and multi code point emojis."""

from contrafuzz.fuzzer.expectations import EXPECT_4XX_HEADERS, TRIM_VALIDATE, VALIDATE_TRIM
from contrafuzz.fuzzer.payloads import MULTI_CODE_POINT_EMOJIS, SINGLE_CODE_POINT_EMOJIS
from contrafuzz.fuzzer.strategy import StrategyKind
from contrafuzz.fuzzer.variants.base import FuzzerVariant, Target, has_long_string_field

POSITIONS = (("Leading", StrategyKind.PREFIX), ("Trailing", StrategyKind.TRAIL))
ORDERS = (("TrimValidate", TRIM_VALIDATE), ("ValidateTrim", VALIDATE_TRIM))
FLAVOURS = (
    ("SingleCodePoint", "single code point emojis", tuple(SINGLE_CODE_POINT_EMOJIS)),
    ("MultiCodePoint", "multi code point emojis", tuple(MULTI_CODE_POINT_EMOJIS)),
)


def variants() -> list[FuzzerVariant]:
    cases = []

    for position, kind in POSITIONS:
        cases.append(FuzzerVariant(
            name=f"{position}SingleCodePointEmojisInHeaders",
            description=f"{kind.value.lower()} value with single code point emojis",
            target=Target.HEADERS,
            kind=kind,
            payloads=tuple(SINGLE_CODE_POINT_EMOJIS),
            policy=EXPECT_4XX_HEADERS,
        ))

    for flavour, label, payloads in FLAVOURS:
        for position, kind in POSITIONS:
            for order, policy in ORDERS:
                cases.append(FuzzerVariant(
                    name=f"{position}{flavour}EmojisInFields{order}",
                    description=f"{kind.value.lower()} value with {label}",
                    target=Target.FIELDS,
                    kind=kind,
                    payloads=payloads,
                    policy=policy,
                ))
        cases.append(FuzzerVariant(
            name=f"Within{flavour}EmojisInFields",
            description=f"insert {label} in the middle of the value",
            target=Target.FIELDS,
            kind=StrategyKind.INSERT,
            payloads=payloads,
            policy=VALIDATE_TRIM,
            applies=has_long_string_field,
        ))
    return cases
