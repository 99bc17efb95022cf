"""Tests for PlaywrightManager class.

Covers browser launch and reuse, context and page creation, navigation,
storage-state snapshots and resource cleanup, with Playwright mocked out.
"""

import pytest
from unittest.mock import AsyncMock, patch
from playwright.async_api import Browser, BrowserContext, Page

from qualtiva_e2e.browser.playwright_integration import PlaywrightManager
from qualtiva_e2e.exceptions import BrowserError
from qualtiva_e2e.models.browser_models import BrowserType

ASYNC_PLAYWRIGHT = "qualtiva_e2e.browser.playwright_integration.async_playwright"


@pytest.fixture
def manager():
    """Create a PlaywrightManager instance for testing."""
    return PlaywrightManager()


@pytest.fixture
def mock_playwright():
    """Create a mock Playwright instance."""
    playwright = AsyncMock()
    playwright.chromium = AsyncMock()
    playwright.firefox = AsyncMock()
    playwright.webkit = AsyncMock()
    return playwright


@pytest.fixture
def mock_browser():
    """Create a mock Browser instance."""
    browser = AsyncMock(spec=Browser)
    browser.new_context = AsyncMock()
    browser.close = AsyncMock()
    return browser


@pytest.fixture
def mock_context():
    """Create a mock BrowserContext instance."""
    context = AsyncMock(spec=BrowserContext)
    context.new_page = AsyncMock()
    context.storage_state = AsyncMock()
    context.close = AsyncMock()
    return context


@pytest.fixture
def mock_page():
    """Create a mock Page instance."""
    page = AsyncMock(spec=Page)
    page.goto = AsyncMock()
    page.close = AsyncMock()
    return page


class TestPlaywrightManagerInitialization:
    """Tests for PlaywrightManager initialization."""

    def test_init(self):
        """Test PlaywrightManager initialization."""
        manager = PlaywrightManager()
        assert manager.playwright is None
        assert manager.browsers == {}
        assert manager.contexts == {}
        assert manager.pages == {}
        assert manager._initialized is False

    @pytest.mark.asyncio
    async def test_initialize_success(self, manager):
        """Test successful Playwright initialization."""
        with patch(ASYNC_PLAYWRIGHT) as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=AsyncMock())

            await manager.initialize()

            assert manager.playwright is not None
            assert manager._initialized is True

    @pytest.mark.asyncio
    async def test_initialize_already_initialized(self, manager):
        """Test that initialize is idempotent."""
        with patch(ASYNC_PLAYWRIGHT) as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=AsyncMock())

            await manager.initialize()
            await manager.initialize()

            mock_async_pw.return_value.start.assert_called_once()

    @pytest.mark.asyncio
    async def test_initialize_failure(self, manager):
        """Test initialization failure is wrapped in BrowserError."""
        with patch(ASYNC_PLAYWRIGHT) as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(
                side_effect=Exception("driver missing")
            )

            with pytest.raises(BrowserError, match="Playwright initialization failed"):
                await manager.initialize()

            assert manager._initialized is False


class TestBrowserLaunch:
    """Tests for browser launch functionality."""

    @pytest.mark.asyncio
    async def test_launch_chromium(self, manager, mock_playwright, mock_browser):
        """Test launching Chromium browser."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)

        browser = await manager.launch_browser(BrowserType.CHROMIUM)

        assert browser is mock_browser
        assert "chromium" in manager.browsers
        mock_playwright.chromium.launch.assert_called_once_with(headless=True)

    @pytest.mark.asyncio
    async def test_launch_with_profile_args(self, manager, mock_playwright, mock_browser):
        """Test launch options such as args and channel are passed through."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)

        await manager.launch_browser(
            BrowserType.CHROMIUM,
            args=["--disable-web-security"],
            channel="msedge",
        )

        mock_playwright.chromium.launch.assert_called_once_with(
            headless=True, args=["--disable-web-security"], channel="msedge"
        )

    @pytest.mark.asyncio
    async def test_launch_browser_reuse(self, manager, mock_playwright, mock_browser):
        """Test that browsers are reused when already launched."""
        manager.playwright = mock_playwright
        manager._initialized = True
        manager.browsers["webkit"] = mock_browser
        mock_playwright.webkit.launch = AsyncMock()

        browser = await manager.launch_browser(BrowserType.WEBKIT)

        assert browser is mock_browser
        mock_playwright.webkit.launch.assert_not_called()

    @pytest.mark.asyncio
    async def test_launch_browser_not_initialized(self, manager, mock_playwright, mock_browser):
        """Test that launch_browser initializes Playwright if needed."""
        with patch(ASYNC_PLAYWRIGHT) as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=mock_playwright)
            mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)

            browser = await manager.launch_browser()

            assert manager._initialized is True
            assert browser is mock_browser

    @pytest.mark.asyncio
    async def test_launch_browser_failure(self, manager, mock_playwright):
        """Test browser launch failure handling."""
        manager.playwright = mock_playwright
        manager._initialized = True
        mock_playwright.chromium.launch = AsyncMock(side_effect=Exception("no binary"))

        with pytest.raises(BrowserError, match="Browser launch failed"):
            await manager.launch_browser()


class TestContextAndPage:
    """Tests for context and page creation."""

    @pytest.mark.asyncio
    async def test_create_context_with_options(self, manager, mock_browser, mock_context):
        """Test context options are forwarded unchanged."""
        mock_browser.new_context = AsyncMock(return_value=mock_context)

        context = await manager.create_context(
            mock_browser,
            viewport={"width": 1280, "height": 720},
            permissions=["geolocation"],
        )

        assert context is mock_context
        assert len(manager.contexts) == 1
        call_args = mock_browser.new_context.call_args[1]
        assert call_args["viewport"] == {"width": 1280, "height": 720}
        assert call_args["permissions"] == ["geolocation"]

    @pytest.mark.asyncio
    async def test_create_context_failure(self, manager, mock_browser):
        """Test context creation failure handling."""
        mock_browser.new_context = AsyncMock(side_effect=Exception("closed"))

        with pytest.raises(BrowserError, match="Context creation failed"):
            await manager.create_context(mock_browser)

    @pytest.mark.asyncio
    async def test_create_page(self, manager, mock_context, mock_page):
        """Test creating a page registers it for cleanup."""
        mock_context.new_page = AsyncMock(return_value=mock_page)

        page = await manager.create_page(mock_context)

        assert page is mock_page
        assert len(manager.pages) == 1

    @pytest.mark.asyncio
    async def test_create_page_failure(self, manager, mock_context):
        """Test page creation failure handling."""
        mock_context.new_page = AsyncMock(side_effect=Exception("crashed"))

        with pytest.raises(BrowserError, match="Page creation failed"):
            await manager.create_page(mock_context)


class TestNavigationAndState:
    """Tests for navigation and storage-state snapshots."""

    @pytest.mark.asyncio
    async def test_navigate_defaults(self, manager, mock_page):
        """Test navigation defaults and the returned response."""
        response = object()
        mock_page.goto = AsyncMock(return_value=response)

        result = await manager.navigate(mock_page, "https://example.com")

        assert result is response
        mock_page.goto.assert_called_once_with(
            "https://example.com", wait_until="load", timeout=30000
        )

    @pytest.mark.asyncio
    async def test_navigate_networkidle(self, manager, mock_page):
        """Test navigation with a custom wait condition."""
        await manager.navigate(
            mock_page, "https://example.com", wait_until="networkidle", timeout=60000
        )

        mock_page.goto.assert_called_once_with(
            "https://example.com", wait_until="networkidle", timeout=60000
        )

    @pytest.mark.asyncio
    async def test_navigate_failure(self, manager, mock_page):
        """Test navigation failure handling."""
        mock_page.goto = AsyncMock(side_effect=Exception("net::ERR_NAME_NOT_RESOLVED"))

        with pytest.raises(BrowserError, match="Navigation failed"):
            await manager.navigate(mock_page, "https://example.invalid")

    @pytest.mark.asyncio
    async def test_save_storage_state(self, manager, mock_context, tmp_path):
        """Test the storage state is written to the given path."""
        path = tmp_path / "global-state.json"

        await manager.save_storage_state(mock_context, path)

        mock_context.storage_state.assert_called_once_with(path=str(path))

    @pytest.mark.asyncio
    async def test_save_storage_state_failure(self, manager, mock_context):
        """Test snapshot failure handling."""
        mock_context.storage_state = AsyncMock(side_effect=Exception("disk full"))

        with pytest.raises(BrowserError, match="Storage state snapshot failed"):
            await manager.save_storage_state(mock_context, "state.json")


class TestCleanup:
    """Tests for resource cleanup."""

    @pytest.mark.asyncio
    async def test_cleanup_closes_everything(
        self, manager, mock_playwright, mock_browser, mock_context, mock_page
    ):
        """Test pages, contexts, browsers and the driver are all released."""
        manager.playwright = mock_playwright
        manager._initialized = True
        manager.browsers["chromium"] = mock_browser
        manager.contexts["context_1"] = mock_context
        manager.pages["page_1"] = mock_page

        await manager.cleanup()

        mock_page.close.assert_called_once()
        mock_context.close.assert_called_once()
        mock_browser.close.assert_called_once()
        mock_playwright.stop.assert_called_once()
        assert manager.playwright is None
        assert manager._initialized is False

    @pytest.mark.asyncio
    async def test_cleanup_continues_after_error(
        self, manager, mock_browser, mock_context, mock_page
    ):
        """Test a failing close does not stop the rest and is reported."""
        mock_page.close = AsyncMock(side_effect=Exception("already closed"))
        manager.browsers["chromium"] = mock_browser
        manager.contexts["context_1"] = mock_context
        manager.pages["page_1"] = mock_page

        with pytest.raises(BrowserError, match="already closed"):
            await manager.cleanup()

        mock_context.close.assert_called_once()
        mock_browser.close.assert_called_once()
        assert manager.pages == {}

    @pytest.mark.asyncio
    async def test_async_context_manager(self, mock_playwright):
        """Test the manager starts and stops Playwright as a context manager."""
        with patch(ASYNC_PLAYWRIGHT) as mock_async_pw:
            mock_async_pw.return_value.start = AsyncMock(return_value=mock_playwright)

            async with PlaywrightManager() as manager:
                assert manager._initialized is True

            mock_playwright.stop.assert_called_once()
