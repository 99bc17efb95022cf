"""Playwright browser lifecycle management for suite hooks.

This module provides the PlaywrightManager class used by the global setup to
launch a browser, open a context and page, and release them again. Test
cases themselves get their browser from pytest-playwright fixtures.

CRITICAL: Proper cleanup is essential to avoid leaking browser processes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
    Response,
)

from qualtiva_e2e.exceptions import BrowserError
from qualtiva_e2e.models.browser_models import BrowserType

logger = logging.getLogger(__name__)


class PlaywrightManager:
    """Manage Playwright browser instances and contexts.

    PATTERN: One browser per engine, isolated contexts per task.

    CRITICAL: Always call cleanup() or use as async context manager to ensure
    proper resource cleanup.
    """

    def __init__(self):
        """Initialize the Playwright manager."""
        self.playwright: Optional[Playwright] = None
        self.browsers: Dict[str, Browser] = {}
        self.contexts: Dict[str, BrowserContext] = {}
        self.pages: Dict[str, Page] = {}
        self._initialized = False

    async def __aenter__(self):
        """Async context manager entry."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.cleanup()

    async def initialize(self) -> None:
        """Start the Playwright driver.

        Raises:
            BrowserError: If initialization fails
        """
        if self._initialized:
            return

        try:
            self.playwright = await async_playwright().start()
            self._initialized = True
            logger.info("Playwright initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize Playwright: {e}")
            raise BrowserError(f"Playwright initialization failed: {e}") from e

    async def launch_browser(
        self,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        headless: bool = True,
        **options: Any,
    ) -> Browser:
        """Launch a browser instance, reusing one already running for the engine.

        Args:
            browser_type: Type of browser to launch
            headless: Whether to run in headless mode
            **options: Additional launch options (args, channel, ...)

        Returns:
            Browser instance

        Raises:
            BrowserError: If the browser fails to launch
        """
        if not self._initialized:
            await self.initialize()

        browser_key = browser_type.value
        if browser_key in self.browsers:
            logger.debug(f"Reusing existing {browser_key} browser")
            return self.browsers[browser_key]

        try:
            browser_launcher = getattr(self.playwright, browser_key)
            browser = await browser_launcher.launch(headless=headless, **options)
            self.browsers[browser_key] = browser
            logger.info(f"Launched {browser_key} browser (headless={headless})")
            return browser
        except Exception as e:
            logger.error(f"Failed to launch {browser_key} browser: {e}")
            raise BrowserError(f"Browser launch failed: {e}") from e

    async def create_context(self, browser: Browser, **options: Any) -> BrowserContext:
        """Create an isolated browser context.

        Args:
            browser: Browser instance to create context in
            **options: Context options (viewport, geolocation, permissions, ...)

        Returns:
            Browser context

        Raises:
            BrowserError: If context creation fails
        """
        try:
            context = await browser.new_context(**options)
            context_id = f"context_{id(context)}"
            self.contexts[context_id] = context
            logger.debug(f"Created browser context: {context_id}")
            return context
        except Exception as e:
            logger.error(f"Failed to create browser context: {e}")
            raise BrowserError(f"Context creation failed: {e}") from e

    async def create_page(self, context: BrowserContext) -> Page:
        """Create a new page in the specified context.

        Raises:
            BrowserError: If page creation fails
        """
        try:
            page = await context.new_page()
            page_id = f"page_{id(page)}"
            self.pages[page_id] = page
            logger.debug(f"Created page: {page_id}")
            return page
        except Exception as e:
            logger.error(f"Failed to create page: {e}")
            raise BrowserError(f"Page creation failed: {e}") from e

    async def navigate(
        self,
        page: Page,
        url: str,
        wait_until: str = "load",
        timeout: int = 30000,
    ) -> Optional[Response]:
        """Navigate page to URL.

        Args:
            page: Page instance
            url: Target URL
            wait_until: Wait condition (load, domcontentloaded, networkidle)
            timeout: Navigation timeout in milliseconds

        Returns:
            Main resource response, if any

        Raises:
            BrowserError: If navigation fails
        """
        try:
            response = await page.goto(url, wait_until=wait_until, timeout=timeout)
            logger.debug(f"Navigated to {url}")
            return response
        except Exception as e:
            logger.error(f"Navigation to {url} failed: {e}")
            raise BrowserError(f"Navigation failed: {e}") from e

    async def save_storage_state(
        self, context: BrowserContext, path: Union[str, Path]
    ) -> None:
        """Write the context's cookies and local storage to a JSON file.

        Raises:
            BrowserError: If the snapshot cannot be written
        """
        try:
            await context.storage_state(path=str(path))
            logger.debug(f"Saved storage state to {path}")
        except Exception as e:
            logger.error(f"Failed to save storage state: {e}")
            raise BrowserError(f"Storage state snapshot failed: {e}") from e

    async def _close_all(self, kind: str, resources: Dict[str, Any], errors: List[str]) -> None:
        for key, resource in list(resources.items()):
            try:
                await resource.close()
                logger.debug(f"Closed {kind}: {key}")
            except Exception as e:
                errors.append(f"Failed to close {kind} {key}: {e}")
        resources.clear()

    async def cleanup(self) -> None:
        """Close every page, context and browser, then stop the driver.

        A failing close does not stop the others; failures are collected.

        Raises:
            BrowserError: If any resource failed to close
        """
        errors: List[str] = []
        # Pages before contexts before browsers
        await self._close_all("page", self.pages, errors)
        await self._close_all("context", self.contexts, errors)
        await self._close_all("browser", self.browsers, errors)

        if self.playwright:
            try:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully")
            except Exception as e:
                errors.append(f"Failed to stop Playwright: {e}")
            self.playwright = None

        self._initialized = False

        if errors:
            error_msg = "; ".join(errors)
            logger.warning(f"Cleanup completed with errors: {error_msg}")
            raise BrowserError(f"Cleanup errors: {error_msg}")
        logger.info("Cleanup completed successfully")
