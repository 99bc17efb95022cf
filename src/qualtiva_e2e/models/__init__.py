"""Models package for the Qualtiva end-to-end suite."""

from .browser_models import (
    BrowserType,
    DeviceType,
    Viewport,
    Geolocation,
    BrowserProfile,
)
from .run_models import (
    TestCategory,
    OutcomeStatus,
    TestOutcome,
    HealthCheckResult,
    StatusCounts,
    ExecutionSummary,
    RunSummary,
    UploadOutcome,
    UploadResult,
    UploadReport,
)

__all__ = [
    "BrowserType",
    "DeviceType",
    "Viewport",
    "Geolocation",
    "BrowserProfile",
    "TestCategory",
    "OutcomeStatus",
    "TestOutcome",
    "HealthCheckResult",
    "StatusCounts",
    "ExecutionSummary",
    "RunSummary",
    "UploadOutcome",
    "UploadResult",
    "UploadReport",
]
