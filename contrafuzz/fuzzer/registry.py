"""
Fuzzer registry — every available fuzzer variant, registered at import time.
"""

from __future__ import annotations

from contrafuzz.fuzzer.variants import control_chars, emojis, whitespace
from contrafuzz.fuzzer.variants.base import FuzzerVariant

ALL_VARIANTS: list[FuzzerVariant] = [
    *whitespace.variants(),
    *control_chars.variants(),
    *emojis.variants(),
]

VARIANT_MAP: dict[str, FuzzerVariant] = {v.name: v for v in ALL_VARIANTS}


def get_variants(names: list[str] | None = None) -> list[FuzzerVariant]:
    """Get variants by name, or all variants if no names given."""
    if not names:
        return ALL_VARIANTS
    return [VARIANT_MAP[n] for n in names if n in VARIANT_MAP]
