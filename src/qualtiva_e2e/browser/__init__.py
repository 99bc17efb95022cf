"""Browser-side helpers for the suite.

- PlaywrightManager: browser lifecycle for the global health check
- ConsoleErrorCollector: console and page error capture
- PerformanceMonitor: load-time measurement against budgets
- page_checks / site_layout: decision rules, selectors and viewport presets
"""

from qualtiva_e2e.browser.playwright_integration import PlaywrightManager
from qualtiva_e2e.browser.console_monitor import ConsoleErrorCollector
from qualtiva_e2e.browser.performance_monitor import (
    LoadMeasurement,
    PerformanceBudget,
    PerformanceMonitor,
)

__all__ = [
    "PlaywrightManager",
    "ConsoleErrorCollector",
    "LoadMeasurement",
    "PerformanceBudget",
    "PerformanceMonitor",
]
