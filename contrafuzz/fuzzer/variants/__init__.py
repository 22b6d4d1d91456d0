from contrafuzz.fuzzer.variants.base import FuzzerVariant, Target

__all__ = ["FuzzerVariant", "Target"]
