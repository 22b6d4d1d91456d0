from contrafuzz.report.exporter import TestCaseExporter, compute_execution_details
from contrafuzz.report.listener import TestCaseListener, judge

__all__ = [
    "TestCaseExporter",
    "TestCaseListener",
    "compute_execution_details",
    "judge",
]
