"""Shared fixtures for the live suite."""

import pytest
from playwright.sync_api import Page

from qualtiva_e2e.browser.console_monitor import ConsoleErrorCollector


@pytest.fixture
def home_page(page: Page) -> Page:
    """Page already navigated to the site root."""
    page.goto("/")
    return page


@pytest.fixture
def console_errors(page: Page) -> ConsoleErrorCollector:
    """Collector attached before navigation so load-time errors are captured."""
    return ConsoleErrorCollector().attach(page)
