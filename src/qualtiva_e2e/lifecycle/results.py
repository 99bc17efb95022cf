"""Read JUnit XML written by pytest back into test outcomes."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Optional

from qualtiva_e2e.models.run_models import OutcomeStatus, TestCategory, TestOutcome

logger = logging.getLogger(__name__)


def _status_of(testcase: ET.Element) -> OutcomeStatus:
    if testcase.find("error") is not None:
        return OutcomeStatus.ERROR
    if testcase.find("failure") is not None:
        return OutcomeStatus.FAILED
    if testcase.find("skipped") is not None:
        return OutcomeStatus.SKIPPED
    return OutcomeStatus.PASSED


def _module_of(classname: str) -> str:
    """``tests.e2e.test_forms.TestNewsletter`` -> ``test_forms``."""
    for part in reversed(classname.split(".")):
        if part.startswith("test_"):
            return part
    return classname.rsplit(".", 1)[-1]


def parse_junit_file(path: Path, profile: Optional[str] = None) -> List[TestOutcome]:
    """Parse one JUnit XML file.

    Args:
        path: JUnit XML file
        profile: Profile the file belongs to; defaults to the suite name

    Raises:
        ET.ParseError: If the file is not well-formed XML
    """
    root = ET.parse(path).getroot()
    suites = [root] if root.tag == "testsuite" else root.findall("testsuite")

    outcomes = []
    for suite in suites:
        suite_profile = profile or suite.get("name", "unknown")
        for testcase in suite.iter("testcase"):
            classname = testcase.get("classname", "")
            outcomes.append(
                TestOutcome(
                    profile=suite_profile,
                    category=TestCategory.for_module(_module_of(classname)),
                    name=f"{classname}::{testcase.get('name', '')}",
                    status=_status_of(testcase),
                    duration_s=float(testcase.get("time") or 0.0),
                )
            )
    return outcomes


def collect_outcomes(paths: Iterable[Path], profile: Optional[str] = None) -> List[TestOutcome]:
    """Parse several files, skipping missing or malformed ones."""
    outcomes: List[TestOutcome] = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            logger.warning(f"JUnit results not found: {path}")
            continue
        try:
            outcomes.extend(parse_junit_file(path, profile))
        except ET.ParseError as e:
            logger.warning(f"Skipping malformed JUnit results {path}: {e}")
    return outcomes
