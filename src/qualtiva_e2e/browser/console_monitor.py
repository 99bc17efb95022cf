"""Console and page error collection for live tests."""

import logging
from typing import List, Sequence

from playwright.sync_api import ConsoleMessage, Error, Page

from qualtiva_e2e.browser.page_checks import IGNORED_CONSOLE_ERRORS, filter_critical_errors

logger = logging.getLogger(__name__)


class ConsoleErrorCollector:
    """Record ``console.error`` messages and uncaught page errors.

    Example:
        collector = ConsoleErrorCollector().attach(page)
        page.goto("/")
        assert collector.critical() == []
    """

    def __init__(self):
        self.console_errors: List[str] = []
        self.page_errors: List[str] = []

    def attach(self, page: Page) -> "ConsoleErrorCollector":
        page.on("console", self.on_console)
        page.on("pageerror", self.on_page_error)
        return self

    def detach(self, page: Page) -> None:
        page.remove_listener("console", self.on_console)
        page.remove_listener("pageerror", self.on_page_error)

    def on_console(self, message: ConsoleMessage) -> None:
        if message.type == "error":
            self.console_errors.append(message.text)
            logger.debug(f"Console error: {message.text}")

    def on_page_error(self, error: Error) -> None:
        self.page_errors.append(error.message)
        logger.debug(f"Uncaught page error: {error.message}")

    def critical(self, ignored: Sequence[str] = IGNORED_CONSOLE_ERRORS) -> List[str]:
        """Console errors left after dropping known non-critical noise."""
        return filter_critical_errors(self.console_errors, ignored)
