"""Run the live suite under one or more browser profiles.

Each profile runs in its own pytest subprocess so pytest-playwright's
``--browser``/``--device`` selection stays per session. Global setup and
teardown run once around all of them, and the per-profile JUnit files are
merged into the run summary and HTML report.
"""

import logging
import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from qualtiva_e2e.config.settings import CONFIG_ENV_VAR, E2ESettings
from qualtiva_e2e.lifecycle.global_setup import global_setup
from qualtiva_e2e.lifecycle.global_teardown import run_global_teardown
from qualtiva_e2e.lifecycle.results import collect_outcomes
from qualtiva_e2e.models.browser_models import BrowserProfile
from qualtiva_e2e.models.run_models import RunSummary
from qualtiva_e2e.reporters.html_reporter import HtmlReporter

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "tests/e2e"

# CLI sub-command -> test module
CATEGORY_TARGETS: Dict[str, str] = {
    "performance": "tests/e2e/test_performance.py",
    "accessibility": "tests/e2e/test_accessibility.py",
    "best-practices": "tests/e2e/test_best_practices.py",
    "cross-browser": "tests/e2e/test_cross_browser.py",
    "mobile-responsive": "tests/e2e/test_mobile_responsiveness.py",
}

ARTIFACT_ARGS = [
    "--tracing",
    "retain-on-failure",
    "--screenshot",
    "only-on-failure",
    "--video",
    "retain-on-failure",
]


def run_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d-%H%M%S")


def junit_file_name(profile: BrowserProfile, timestamp: str) -> str:
    return f"junit-{timestamp}-{profile.slug}.xml"


def build_pytest_args(
    profile: BrowserProfile,
    settings: E2ESettings,
    target: str = DEFAULT_TARGET,
    ci_reporters: bool = False,
    junit_path: Optional[Path] = None,
    python: str = sys.executable,
) -> List[str]:
    """
    Build the pytest command for one profile session.

    Args:
        profile: Browser profile to run
        settings: Suite settings (base URL, CI flag, artifact directories)
        target: Test path passed to pytest
        ci_reporters: Also write pytest-json-report results
        junit_path: JUnit XML output file
        python: Interpreter used to run pytest

    Returns:
        Command line as a list of arguments
    """
    junit_path = junit_path or settings.junit_dir / junit_file_name(profile, run_timestamp())

    args = [python, "-m", "pytest", target, "--live", "--skip-global-hooks"]
    args.extend(profile.pytest_args())
    args.extend(["--base-url", settings.base_url])
    args.extend(["--output", str(settings.output_dir / profile.slug)])
    args.extend(ARTIFACT_ARGS)
    args.extend(["-n", settings.workers])
    if settings.retries > 0:
        args.extend(["--reruns", str(settings.retries)])
    args.extend([f"--junitxml={junit_path}", "-o", f"junit_suite_name={profile.name}"])
    if ci_reporters:
        json_path = settings.output_dir / f"results-{profile.slug}.json"
        args.extend(["--json-report", f"--json-report-file={json_path}"])
    return args


class ProfileRun(BaseModel):
    """One profile session."""

    profile: str
    exit_code: int
    junit_path: Path


class SuiteResult(BaseModel):
    """Outcome of a multi-profile run."""

    runs: List[ProfileRun] = Field(default_factory=list)
    summary: Optional[RunSummary] = None
    report_path: Optional[Path] = None

    @property
    def exit_code(self) -> int:
        for run in self.runs:
            if run.exit_code != 0:
                return run.exit_code
        return 0

    @property
    def failed_profiles(self) -> List[str]:
        return [run.profile for run in self.runs if run.exit_code != 0]


class SuiteRunner:
    """
    Run pytest once per profile and aggregate the results.

    PATTERN: Setup once, one subprocess per profile, teardown once
    GOTCHA: A failing profile does not stop the remaining profiles
    """

    def __init__(
        self,
        settings: E2ESettings,
        python: str = sys.executable,
        run_command: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ):
        self.settings = settings
        self.python = python
        self.run_command = run_command

    def child_env(self, junit_name: str) -> Dict[str, str]:
        env = dict(os.environ)
        env["BASE_URL"] = self.settings.base_url
        env["PLAYWRIGHT_JUNIT_OUTPUT_DIR"] = str(self.settings.junit_dir)
        env["PLAYWRIGHT_JUNIT_OUTPUT_NAME"] = junit_name
        if self.settings.config_path is not None:
            env[CONFIG_ENV_VAR] = str(self.settings.config_path)
        if self.settings.ci:
            env["CI"] = "true"
        return env

    def run_profile(
        self,
        profile: BrowserProfile,
        target: str = DEFAULT_TARGET,
        ci_reporters: bool = False,
        timestamp: Optional[str] = None,
    ) -> ProfileRun:
        """Run one pytest session for ``profile``."""
        junit_name = junit_file_name(profile, timestamp or run_timestamp())
        junit_path = self.settings.junit_dir / junit_name
        args = build_pytest_args(
            profile,
            self.settings,
            target=target,
            ci_reporters=ci_reporters,
            junit_path=junit_path,
            python=self.python,
        )

        logger.info(f"Running {target} on {profile.name}")
        logger.debug(f"Command: {' '.join(args)}")
        completed = self.run_command(args, env=self.child_env(junit_name), check=False)

        if completed.returncode != 0:
            logger.warning(f"Profile {profile.name} finished with exit code {completed.returncode}")
        return ProfileRun(
            profile=profile.name, exit_code=completed.returncode, junit_path=junit_path
        )

    def run(
        self,
        profiles: Sequence[BrowserProfile],
        target: str = DEFAULT_TARGET,
        ci_reporters: bool = False,
    ) -> SuiteResult:
        """
        Run ``target`` under every profile.

        Args:
            profiles: Profiles to run, in order
            target: Test path passed to pytest
            ci_reporters: Also write JSON results per profile

        Returns:
            Per-profile exit codes plus the summary and report paths
        """
        self.settings.junit_dir.mkdir(parents=True, exist_ok=True)
        self.settings.output_dir.mkdir(parents=True, exist_ok=True)

        health_check = global_setup(self.settings)

        timestamp = run_timestamp()
        result = SuiteResult()
        for profile in profiles:
            run = self.run_profile(profile, target, ci_reporters, timestamp)
            result.runs.append(run)

        outcomes = []
        for run in result.runs:
            outcomes.extend(collect_outcomes([run.junit_path], run.profile))

        result.summary = run_global_teardown(self.settings, outcomes, health_check)
        if result.summary is not None:
            try:
                result.report_path = HtmlReporter().save_report(
                    result.summary, self.settings.report_path
                )
            except OSError as e:
                logger.error(f"Failed to write HTML report: {e}")

        return result
