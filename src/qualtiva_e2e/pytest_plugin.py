"""pytest plugin wiring the suite settings into pytest-playwright.

Loaded from the root ``conftest.py``. Adds the ``--live``, ``--profile`` and
``--skip-global-hooks`` options, layers the profile on top of
pytest-playwright's browser and context fixtures, gates ``tests/e2e`` behind
``--live`` and runs global setup/teardown around live sessions.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
from playwright.sync_api import BrowserContext, expect

from qualtiva_e2e.config.profiles import DEFAULT_PROFILE, get_profile
from qualtiva_e2e.config.settings import E2ESettings, load_settings
from qualtiva_e2e.exceptions import ConfigurationError
from qualtiva_e2e.lifecycle.global_setup import global_setup
from qualtiva_e2e.lifecycle.global_teardown import run_global_teardown
from qualtiva_e2e.models.browser_models import BrowserProfile
from qualtiva_e2e.models.run_models import (
    HealthCheckResult,
    OutcomeStatus,
    TestCategory,
    TestOutcome,
)

logger = logging.getLogger(__name__)

LIVE_DIRECTORY = "e2e"
RECORDER_NAME = "qualtiva-e2e-recorder"


def pytest_addoption(parser):
    group = parser.getgroup("qualtiva-e2e", "Qualtiva website end-to-end suite")
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run the live browser tests under tests/e2e against BASE_URL",
    )
    group.addoption(
        "--profile",
        action="store",
        default=DEFAULT_PROFILE,
        help="Browser profile to run (e.g. chromium, 'Mobile Safari', iPad)",
    )
    group.addoption(
        "--skip-global-hooks",
        action="store_true",
        default=False,
        help="Do not run global setup/teardown (the CLI runs them once per run)",
    )


def _apply_profile_defaults(config, profile: BrowserProfile) -> None:
    """Select the profile's engine and device unless given on the command line."""
    option = config.option
    if not getattr(option, "browser", None):
        option.browser = [profile.browser.value]
    if not getattr(option, "device", None):
        option.device = profile.device
    if profile.channel and not getattr(option, "browser_channel", None):
        option.browser_channel = profile.channel


def pytest_configure(config):
    config.addinivalue_line("markers", "live: test drives a real browser against BASE_URL")
    config.addinivalue_line("markers", "mobile: test only applies to mobile profiles")

    try:
        settings = load_settings()
        profile = get_profile(config.getoption("profile"))
    except ConfigurationError as e:
        raise pytest.UsageError(str(e)) from e
    config.e2e_settings = settings
    config.e2e_profile = profile

    expect.set_options(timeout=settings.expect_timeout_ms)

    if not config.getoption("live"):
        return

    if settings.forbid_only and config.getoption("keyword"):
        raise pytest.UsageError("Test selection with -k is not allowed on CI")

    _apply_profile_defaults(config, profile)
    if not getattr(config.option, "base_url", None):
        config.option.base_url = settings.base_url

    # xdist workers report to the controller, which owns the global hooks
    is_worker = hasattr(config, "workerinput")
    if not is_worker and not config.getoption("skip_global_hooks"):
        config.pluginmanager.register(OutcomeRecorder(settings, profile), RECORDER_NAME)


def pytest_collection_modifyitems(config, items):
    run_live = config.getoption("live")
    skip_live = pytest.mark.skip(reason="need --live option to run")
    for item in items:
        if LIVE_DIRECTORY not in item.path.parts:
            continue
        item.add_marker(pytest.mark.live)
        if not run_live:
            item.add_marker(skip_live)


class OutcomeRecorder:
    """Run global setup/teardown and record each test's final status."""

    def __init__(self, settings: E2ESettings, profile: BrowserProfile):
        self.settings = settings
        self.profile = profile
        self.health_check: Optional[HealthCheckResult] = None
        self.statuses: Dict[str, TestOutcome] = {}

    def pytest_sessionstart(self, session):
        self.health_check = global_setup(self.settings)

    def pytest_runtest_logreport(self, report):
        status = self._status_of(report)
        if status is None:
            return
        module = report.nodeid.split("::", 1)[0]
        self.statuses[report.nodeid] = TestOutcome(
            profile=self.profile.name,
            category=TestCategory.for_module(Path(module).stem),
            name=report.nodeid,
            status=status,
            duration_s=max(report.duration, 0.0),
        )

    @staticmethod
    def _status_of(report) -> Optional[OutcomeStatus]:
        # rerunfailures reports intermediate attempts as "rerun"
        if report.outcome not in ("passed", "failed", "skipped"):
            return None
        if report.when == "call":
            return OutcomeStatus(report.outcome)
        if report.skipped:
            return OutcomeStatus.SKIPPED
        if report.failed:
            return OutcomeStatus.ERROR
        return None

    def pytest_sessionfinish(self, session, exitstatus):
        run_global_teardown(
            self.settings, list(self.statuses.values()), self.health_check
        )


@pytest.fixture(scope="session")
def e2e_settings(pytestconfig) -> E2ESettings:
    return pytestconfig.e2e_settings


@pytest.fixture(scope="session")
def profile(pytestconfig) -> BrowserProfile:
    return pytestconfig.e2e_profile


def merge_launch_args(base: Dict[str, Any], profile: BrowserProfile) -> Dict[str, Any]:
    """Append the profile's browser flags and pick its channel."""
    args = dict(base)
    args["args"] = [*args.get("args", []), *profile.launch_args]
    if profile.channel:
        args.setdefault("channel", profile.channel)
    return args


def merge_context_args(
    base: Dict[str, Any], settings: E2ESettings, profile: BrowserProfile
) -> Dict[str, Any]:
    """Global context defaults, then the device descriptor, then profile headers."""
    args = {**settings.context_defaults(), **base}
    args.pop("default_browser_type", None)
    headers = {**args.get("extra_http_headers", {}), **profile.extra_http_headers}
    if headers:
        args["extra_http_headers"] = headers
    return args


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args, profile) -> Dict[str, Any]:
    return merge_launch_args(browser_type_launch_args, profile)


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args, e2e_settings, profile) -> Dict[str, Any]:
    return merge_context_args(browser_context_args, e2e_settings, profile)


@pytest.fixture(scope="session")
def is_mobile(browser_context_args) -> bool:
    return bool(browser_context_args.get("is_mobile", False))


@pytest.fixture
def context(context: BrowserContext, e2e_settings) -> BrowserContext:
    context.set_default_timeout(e2e_settings.test_timeout_ms)
    context.set_default_navigation_timeout(e2e_settings.test_timeout_ms)
    return context
