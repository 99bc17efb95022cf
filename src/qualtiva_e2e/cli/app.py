"""Main CLI application entry point."""

import functools
import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import click

from qualtiva_e2e.config.profiles import get_profile, profiles_for_group
from qualtiva_e2e.config.settings import (
    DEFAULT_BASE_URL,
    E2ESettings,
    load_settings,
    load_uploader_settings,
)
from qualtiva_e2e.exceptions import E2EError
from qualtiva_e2e.models.browser_models import BrowserProfile
from qualtiva_e2e.runner.pytest_runner import CATEGORY_TARGETS, DEFAULT_TARGET, SuiteRunner
from qualtiva_e2e.uploader.results_uploader import ResultsUploader

from .output import StatusPrinter

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 9)

CATEGORY_DESCRIPTIONS = {
    "performance": "Performance tests",
    "accessibility": "Accessibility tests",
    "best-practices": "Web build best practices tests",
    "cross-browser": "Cross-browser compatibility tests",
    "mobile-responsive": "Mobile responsiveness tests",
}


class CLIState:
    """Options shared by all sub-commands."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        config_path: Optional[str] = None,
        verbose: bool = False,
        status: Optional[StatusPrinter] = None,
    ):
        self.base_url = base_url
        self.config_path = config_path
        self.verbose = verbose
        self.status = status or StatusPrinter()

    def settings(self) -> E2ESettings:
        return load_settings(self.config_path, base_url=self.base_url)

    def announce_base_url(self, settings: E2ESettings) -> None:
        if settings.base_url == DEFAULT_BASE_URL:
            self.status.info(f"Using default BASE_URL: {DEFAULT_BASE_URL}")
        else:
            self.status.info(f"Using BASE_URL: {settings.base_url}")


def reports_errors(func: Callable) -> Callable:
    """Turn E2EError into ``Error: ...`` on stderr and exit code 1."""

    @functools.wraps(func)
    def wrapper(ctx: click.Context, *args, **kwargs):
        try:
            return func(ctx, *args, **kwargs)
        except E2EError as e:
            if ctx.obj.verbose:
                logger.exception("CLI error")
            else:
                click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def _run_suite(
    ctx: click.Context,
    profiles: Sequence[BrowserProfile],
    description: str,
    target: str = DEFAULT_TARGET,
    ci_reporters: bool = False,
) -> None:
    state: CLIState = ctx.obj
    status = state.status

    status.info(f"Running {description}...")
    settings = state.settings()
    state.announce_base_url(settings)

    result = SuiteRunner(settings).run(profiles, target=target, ci_reporters=ci_reporters)

    if result.summary is not None:
        execution = result.summary.execution
        status.render_counts(
            "Profiles", {name: c.model_dump() for name, c in execution.profiles.items()}
        )
        if execution.health_check is not None and not execution.health_check.ok:
            status.warning(f"Health check failed: {execution.health_check.error}")
    if result.report_path is not None:
        status.info(f"HTML report: {result.report_path}")

    if result.exit_code == 0:
        status.success(f"{description} completed successfully")
        return

    status.error(f"{description} failed ({', '.join(result.failed_profiles)})")
    sys.exit(result.exit_code)


def _run_step(args: List[str], description: str, status: StatusPrinter) -> None:
    status.info(f"{description}...")
    try:
        subprocess.run(args, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise E2EError(f"{description} failed: {e}") from e


@click.group(invoke_without_command=True)
@click.option(
    "--base-url",
    envvar="BASE_URL",
    help=f"Base URL for tests (default: {DEFAULT_BASE_URL})",
)
@click.option(
    "--config", "config_path",
    type=click.Path(),
    help="Config file path",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging",
)
@click.pass_context
def main(
    ctx: click.Context,
    base_url: Optional[str],
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """
    Qualtiva Solutions Website Test Runner.

    Run all tests against the dev site:
        qualtiva-e2e all

    Run against production:
        BASE_URL=https://www.qualtiva.solutions qualtiva-e2e all

    Environment variables: BASE_URL, CI, and AQA_USER, AQA_PASSWORD,
    AQA_ENDPOINT for the upload command.
    """
    # Configure logging
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    if base_url:
        os.environ["BASE_URL"] = base_url

    ctx.obj = CLIState(base_url=base_url, config_path=config_path, verbose=verbose)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command(name="all")
@click.pass_context
@reports_errors
def run_all(ctx: click.Context) -> None:
    """Run all tests across all browsers."""
    _run_suite(ctx, profiles_for_group("all"), "All browser tests")


@main.command()
@click.pass_context
@reports_errors
def desktop(ctx: click.Context) -> None:
    """Run tests on desktop browsers only."""
    _run_suite(ctx, profiles_for_group("desktop"), "Desktop browser tests")


@main.command()
@click.pass_context
@reports_errors
def mobile(ctx: click.Context) -> None:
    """Run tests on mobile browsers only."""
    _run_suite(ctx, profiles_for_group("mobile"), "Mobile browser tests")


def _add_category_command(name: str, description: str) -> None:
    @main.command(name=name, help=f"Run {description[0].lower()}{description[1:]} only.")
    @click.option(
        "--profile", "profile_names",
        multiple=True,
        help="Profile to run (repeatable, default: all profiles)",
    )
    @click.pass_context
    @reports_errors
    def command(ctx: click.Context, profile_names: Sequence[str]) -> None:
        profiles = [get_profile(n) for n in profile_names] or profiles_for_group("all")
        _run_suite(ctx, profiles, description, target=CATEGORY_TARGETS[name])


for _name, _description in CATEGORY_DESCRIPTIONS.items():
    _add_category_command(_name, _description)


@main.command()
@click.pass_context
@reports_errors
def ci(ctx: click.Context) -> None:
    """Run tests with CI reporters (html, junit, json)."""
    _run_suite(ctx, profiles_for_group("all"), "CI test run", ci_reporters=True)


@main.command()
@click.pass_context
@reports_errors
def codegen(ctx: click.Context) -> None:
    """Run Playwright codegen against the site."""
    state: CLIState = ctx.obj
    url = state.settings().base_url
    state.status.info(f"Launching Playwright codegen for: {url}")
    _run_step(
        [sys.executable, "-m", "playwright", "codegen", url],
        "Playwright codegen",
        state.status,
    )


def check_dependencies(project_dir: Path, status: StatusPrinter) -> None:
    """
    Verify the interpreter and project layout before installing.

    Raises:
        E2EError: If Python is too old or setup.py is missing
    """
    status.info("Checking dependencies...")
    if sys.version_info < MIN_PYTHON:
        raise E2EError(
            f"Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]} or higher is required"
        )
    if not (project_dir / "setup.py").exists():
        raise E2EError(
            "setup.py not found. Please run this command from the test directory."
        )
    status.success("Dependencies check passed")


@main.command()
@click.pass_context
@reports_errors
def setup(ctx: click.Context) -> None:
    """Install dependencies and browsers."""
    status = ctx.obj.status
    check_dependencies(Path.cwd(), status)
    _run_step(
        [sys.executable, "-m", "pip", "install", "-e", ".[dev]"],
        "Installing dependencies",
        status,
    )
    status.success("Dependencies installed")
    _run_step(
        [sys.executable, "-m", "playwright", "install", "--with-deps"],
        "Installing Playwright browsers",
        status,
    )
    status.success("Browsers installed")
    status.success("Setup completed successfully")


@main.command()
@click.pass_context
@reports_errors
def report(ctx: click.Context) -> None:
    """Show test report."""
    state: CLIState = ctx.obj
    report_path = state.settings().report_path
    if not report_path.exists():
        state.status.warning("No test report found. Run tests first to generate a report.")
        return
    state.status.info("Opening test report...")
    click.launch(str(report_path.resolve()))


@main.command()
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with code 1 when any file was not uploaded",
)
@click.pass_context
@reports_errors
def upload(ctx: click.Context, strict: bool) -> None:
    """Upload recent JUnit results to the results endpoint."""
    state: CLIState = ctx.obj
    settings = load_uploader_settings(state.config_path)

    with ResultsUploader(settings) as uploader:
        upload_report = uploader.upload_all()

    uploaded, not_uploaded, skipped = upload_report.counts()
    for result in upload_report.results:
        if result.message:
            state.status.warning(result.message)
    state.status.info(
        f"Uploaded {uploaded}, not uploaded {not_uploaded}, skipped {skipped} (stale)"
    )
    if not_uploaded == 0:
        state.status.success("Upload finished")
    elif strict:
        sys.exit(1)


@main.command(name="help")
@click.pass_context
def show_help(ctx: click.Context) -> None:
    """Show this help message."""
    click.echo(ctx.parent.get_help())
