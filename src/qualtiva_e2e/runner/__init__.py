"""Suite runner: one pytest session per browser profile."""

from .pytest_runner import (
    CATEGORY_TARGETS,
    DEFAULT_TARGET,
    SuiteResult,
    SuiteRunner,
    build_pytest_args,
)

__all__ = [
    "CATEGORY_TARGETS",
    "DEFAULT_TARGET",
    "SuiteResult",
    "SuiteRunner",
    "build_pytest_args",
]
