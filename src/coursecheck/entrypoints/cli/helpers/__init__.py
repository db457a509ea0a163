"""CLI helpers for COURSECHECK.

Utilities used by the command-line interface: logger-level option parsing and
message emitters with emoji→ASCII fallbacks.
"""

from .log_level_parser import parse_log_level
from .messages import error, result_line, summary_line, warn

__all__ = ["parse_log_level", "error", "result_line", "summary_line", "warn"]
