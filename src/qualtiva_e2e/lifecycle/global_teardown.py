"""Global teardown: remove transient files and write the run summary."""

import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from qualtiva_e2e.config.profiles import profile_names
from qualtiva_e2e.config.settings import E2ESettings
from qualtiva_e2e.models.run_models import (
    ExecutionSummary,
    HealthCheckResult,
    RunSummary,
    StatusCounts,
    TestCategory,
    TestOutcome,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


def cleanup_temp_files(paths: Iterable[Path]) -> List[Path]:
    """Delete the given files if present; returns the ones removed."""
    removed = []
    for path in paths:
        path = Path(path)
        if path.exists():
            path.unlink()
            removed.append(path)
            logger.info(f"Cleaned up {path}")
    return removed


def _group_counts(groups: Dict[str, List[TestOutcome]]) -> Dict[str, StatusCounts]:
    return {
        key: StatusCounts.from_outcomes(items) for key, items in sorted(groups.items())
    }


def summarize_execution(
    outcomes: Sequence[TestOutcome],
    health_check: Optional[HealthCheckResult] = None,
) -> ExecutionSummary:
    """Count outcomes per profile and per category."""
    by_profile: Dict[str, List[TestOutcome]] = defaultdict(list)
    by_category: Dict[str, List[TestOutcome]] = defaultdict(list)
    for outcome in outcomes:
        by_profile[outcome.profile].append(outcome)
        category = outcome.category.value if outcome.category else UNCATEGORIZED
        by_category[category].append(outcome)

    return ExecutionSummary(
        totals=StatusCounts.from_outcomes(list(outcomes)),
        profiles=_group_counts(by_profile),
        categories=_group_counts(by_category),
        health_check=health_check,
    )


def build_summary(
    outcomes: Sequence[TestOutcome] = (),
    health_check: Optional[HealthCheckResult] = None,
) -> RunSummary:
    """Build the run summary.

    ``browsers`` and ``testCategories`` always list everything the suite is
    configured with; ``execution`` reflects what actually ran.
    """
    browsers = profile_names()
    return RunSummary(
        browsers=browsers,
        total_browsers=len(browsers),
        test_categories=[category.value for category in TestCategory],
        execution=summarize_execution(outcomes, health_check),
    )


def write_summary(summary: RunSummary, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(summary.to_json(), encoding="utf-8")
    return path


def run_global_teardown(
    settings: E2ESettings,
    outcomes: Sequence[TestOutcome] = (),
    health_check: Optional[HealthCheckResult] = None,
) -> Optional[RunSummary]:
    """Clean up and write ``summary.json``.

    Failures are logged and never raised so they cannot mask test results.

    Returns:
        The written summary, or None when teardown failed
    """
    logger.info("Starting global teardown...")

    try:
        cleanup_temp_files([settings.storage_state_path])
        summary = build_summary(outcomes, health_check)
        path = write_summary(summary, settings.summary_path)
    except (OSError, ValueError) as e:
        logger.error(f"Global teardown failed: {e}")
        return None

    logger.info("Global teardown completed successfully")
    logger.info(f"Test summary saved to {path}")
    return summary
