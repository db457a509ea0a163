"""Built-in test runner: discovery, execution and reporting."""

from .runner import RunReport, Status, TestRunner, UnitResult
from .units import TestUnit, collect, display_name, load_module

__all__ = [
    "RunReport",
    "Status",
    "TestRunner",
    "TestUnit",
    "UnitResult",
    "collect",
    "display_name",
    "load_module",
]
