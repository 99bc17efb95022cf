"""Run lifecycle: global setup, global teardown and result collection."""

from .global_setup import global_setup, run_global_setup
from .global_teardown import build_summary, run_global_teardown
from .results import collect_outcomes, parse_junit_file

__all__ = [
    "global_setup",
    "run_global_setup",
    "build_summary",
    "run_global_teardown",
    "collect_outcomes",
    "parse_junit_file",
]
