"""Run result models: outcomes, health check, summary and uploads."""

from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TestCategory(str, Enum):
    """Reported test categories."""

    HOME_PAGE = "Home Page"
    NAVIGATION = "Navigation"
    CONTACT_FORMS = "Contact Forms"
    ACCESSIBILITY = "Accessibility"
    PERFORMANCE = "Performance"
    BEST_PRACTICES = "Web Build Best Practices"
    CROSS_BROWSER = "Cross-browser Compatibility"
    MOBILE_RESPONSIVENESS = "Mobile Responsiveness"

    @classmethod
    def for_module(cls, module: str) -> Optional["TestCategory"]:
        """Resolve the category of a test module (``test_forms`` or dotted path)."""
        name = module.rsplit(".", 1)[-1]
        if name.startswith("test_"):
            name = name[len("test_") :]
        return MODULE_CATEGORIES.get(name)


# Keep pytest from collecting the enum when tests import it.
TestCategory.__test__ = False

MODULE_CATEGORIES: Dict[str, TestCategory] = {
    "home_page": TestCategory.HOME_PAGE,
    "smoke": TestCategory.HOME_PAGE,
    "navigation": TestCategory.NAVIGATION,
    "contact": TestCategory.CONTACT_FORMS,
    "forms": TestCategory.CONTACT_FORMS,
    "accessibility": TestCategory.ACCESSIBILITY,
    "performance": TestCategory.PERFORMANCE,
    "best_practices": TestCategory.BEST_PRACTICES,
    "cross_browser": TestCategory.CROSS_BROWSER,
    "mobile_responsiveness": TestCategory.MOBILE_RESPONSIVENESS,
}


class OutcomeStatus(str, Enum):
    """Final status of a single test case."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    ERROR = "error"


class TestOutcome(BaseModel):
    """Outcome of one test case under one profile."""

    __test__: ClassVar[bool] = False

    profile: str = Field(description="Profile name the test ran under")
    category: Optional[TestCategory] = Field(default=None)
    name: str = Field(description="Test identifier")
    status: OutcomeStatus
    duration_s: float = Field(default=0.0, ge=0.0)


class HealthCheckResult(BaseModel):
    """Result of the global setup navigation."""

    ok: bool
    url: str
    title: Optional[str] = None
    error: Optional[str] = None
    checked_at: datetime = Field(default_factory=utc_now)


class StatusCounts(BaseModel):
    """Per-status test counts."""

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    error: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: List[TestOutcome]) -> "StatusCounts":
        counts = Counter(outcome.status for outcome in outcomes)
        return cls(
            total=len(outcomes),
            passed=counts[OutcomeStatus.PASSED],
            failed=counts[OutcomeStatus.FAILED],
            skipped=counts[OutcomeStatus.SKIPPED],
            error=counts[OutcomeStatus.ERROR],
        )

    @property
    def ok(self) -> bool:
        return self.failed == 0 and self.error == 0


class ExecutionSummary(BaseModel):
    """What actually ran, derived from collected outcomes."""

    totals: StatusCounts = Field(default_factory=StatusCounts)
    profiles: Dict[str, StatusCounts] = Field(default_factory=dict)
    categories: Dict[str, StatusCounts] = Field(default_factory=dict)
    health_check: Optional[HealthCheckResult] = None


class RunSummary(BaseModel):
    """JSON run summary written by the global teardown."""

    test_run: datetime = Field(default_factory=utc_now, alias="testRun")
    project: str = Field(default="Qualtiva Solutions Website Tests")
    browsers: List[str] = Field(default_factory=list)
    total_browsers: int = Field(default=0, alias="totalBrowsers")
    test_categories: List[str] = Field(
        default_factory=list, alias="testCategories"
    )
    execution: ExecutionSummary = Field(default_factory=ExecutionSummary)

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class UploadOutcome(str, Enum):
    """Per-file upload outcome."""

    UPLOADED = "uploaded"
    UNEXPECTED_STATUS = "unexpected_status"
    FAILED = "failed"


class UploadResult(BaseModel):
    """Result of posting one results file."""

    path: Path
    outcome: UploadOutcome
    status_code: Optional[int] = None
    message: str = ""


class UploadReport(BaseModel):
    """Aggregate of one uploader batch."""

    results: List[UploadResult] = Field(default_factory=list)
    skipped: List[Path] = Field(
        default_factory=list, description="Files older than the age cutoff"
    )

    @property
    def uploaded(self) -> int:
        return sum(1 for r in self.results if r.outcome == UploadOutcome.UPLOADED)

    @property
    def not_uploaded(self) -> int:
        return len(self.results) - self.uploaded

    def counts(self) -> Tuple[int, int, int]:
        """Return (uploaded, not uploaded, skipped)."""
        return self.uploaded, self.not_uploaded, len(self.skipped)
