from contrafuzz.fuzzer.strategy import FuzzStrategy, StrategyKind, classify, format_value, merge

__all__ = ["FuzzStrategy", "StrategyKind", "classify", "format_value", "merge"]
