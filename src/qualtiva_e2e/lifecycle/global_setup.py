"""Global setup: a single health-check navigation before the suite runs.

The check launches Chromium, loads the base URL until the network is idle,
reads the page title and snapshots the storage state. A failing check is
logged as a warning and never aborts the run.
"""

import asyncio
import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError

from qualtiva_e2e.browser.playwright_integration import PlaywrightManager
from qualtiva_e2e.config.settings import E2ESettings
from qualtiva_e2e.exceptions import BrowserError
from qualtiva_e2e.models.browser_models import BrowserType
from qualtiva_e2e.models.run_models import HealthCheckResult

logger = logging.getLogger(__name__)


async def run_global_setup(
    settings: E2ESettings,
    manager: Optional[PlaywrightManager] = None,
) -> HealthCheckResult:
    """Check that the site answers before tests start.

    Args:
        settings: Suite settings (base URL, timeout, storage-state path)
        manager: Playwright manager to use; a new one is created if omitted

    Returns:
        Health check result; ``ok`` is False when the check failed
    """
    logger.info("Starting global setup for Qualtiva Solutions tests...")
    manager = manager or PlaywrightManager()
    url = settings.base_url

    try:
        browser = await manager.launch_browser(BrowserType.CHROMIUM)
        context = await manager.create_context(browser)
        page = await manager.create_page(context)

        logger.info(f"Checking website accessibility: {url}")
        await manager.navigate(
            page, url, wait_until="networkidle", timeout=settings.test_timeout_ms
        )
        title = await page.title()
        logger.info(f"Website loaded successfully. Title: {title}")

        await manager.save_storage_state(context, settings.storage_state_path)
        result = HealthCheckResult(ok=True, url=url, title=title)
        logger.info("Global setup completed successfully")
    except (BrowserError, PlaywrightError) as e:
        logger.warning(f"Global setup health check failed, continuing with tests: {e}")
        result = HealthCheckResult(ok=False, url=url, error=str(e))
    finally:
        try:
            await manager.cleanup()
        except BrowserError as e:
            logger.warning(f"Global setup cleanup incomplete: {e}")

    return result


def global_setup(settings: E2ESettings) -> HealthCheckResult:
    """Synchronous entry point for pytest hooks and the CLI runner."""
    return asyncio.run(run_global_setup(settings))
