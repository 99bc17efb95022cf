"""Mobile responsiveness: device viewports, touch, navigation, performance, a11y."""

import logging
from typing import Optional

import pytest
from playwright.sync_api import Page, expect

from qualtiva_e2e.browser import page_checks, site_layout
from qualtiva_e2e.browser.performance_monitor import PerformanceBudget, PerformanceMonitor
from qualtiva_e2e.browser.site_layout import NamedViewport

logger = logging.getLogger(__name__)

MIN_TOUCH_TARGET_RATE = 0.8
MIN_ALT_TEXT_RATE = 0.7

MOBILE_FEATURES_SCRIPT = """
() => ({
    touchEvents: 'ontouchstart' in window,
    orientation: 'orientation' in window,
    devicePixelRatio: window.devicePixelRatio,
    userAgent: navigator.userAgent.includes('Mobile')
})
"""


def resize(page: Page, viewport: NamedViewport) -> None:
    page.set_viewport_size(viewport.size())
    page.reload()
    page.wait_for_load_state("load")


@pytest.fixture
def loaded_page(page: Page) -> Page:
    page.goto("/")
    page.wait_for_load_state("load")
    return page


@pytest.fixture
def mobile_page(loaded_page: Page) -> Page:
    """Page resized to a 375x667 phone viewport."""
    resize(loaded_page, site_layout.MOBILE_PORTRAIT)
    return loaded_page


class TestDeviceCompatibility:
    """Mobile Device Compatibility."""

    def test_iphone(self, loaded_page: Page):
        """Test the iPhone 12 Pro viewport renders with a tappable first target."""
        resize(loaded_page, site_layout.IPHONE_12_PRO)
        expect(loaded_page.locator("body")).to_be_visible()

        clickable = loaded_page.locator(site_layout.CLICKABLE)
        if clickable.count() > 0:
            box = clickable.first.bounding_box()
            if box:
                assert page_checks.is_touch_target(box), f"First tap target is {box}"

    def test_android(self, loaded_page: Page, is_mobile: bool):
        """Test the Pixel 5 viewport renders and exposes touch events."""
        resize(loaded_page, site_layout.PIXEL_5)
        expect(loaded_page.locator("body")).to_be_visible()

        if is_mobile:
            assert loaded_page.evaluate("() => 'ontouchstart' in window")

    def test_tablet(self, loaded_page: Page):
        resize(loaded_page, site_layout.IPAD_PRO)
        expect(loaded_page.locator("body")).to_be_visible()
        assert loaded_page.evaluate("() => window.innerWidth") == site_layout.IPAD_PRO.width


class TestResponsiveDesign:
    """Responsive Design Testing."""

    def test_screen_sizes(self, loaded_page: Page):
        """Test seven screen sizes render at exactly the requested size."""
        for size in site_layout.SCREEN_SIZES:
            resize(loaded_page, size)
            expect(loaded_page.locator("body")).to_be_visible()

            assert loaded_page.evaluate("() => window.innerWidth") == size.width
            assert loaded_page.evaluate("() => window.innerHeight") == size.height
            logger.info(f"{size} - Content visible")

    def test_orientation_changes(self, loaded_page: Page):
        for viewport in (site_layout.MOBILE_PORTRAIT, site_layout.MOBILE_LANDSCAPE):
            resize(loaded_page, viewport)
            expect(loaded_page.locator("body")).to_be_visible()

    def test_readability(self, loaded_page: Page):
        """Test the first text blocks stay visible and non-empty at each size."""
        for size in site_layout.READABILITY_SIZES:
            resize(loaded_page, size)
            text_elements = loaded_page.locator(site_layout.TEXT_BLOCKS)
            for i in range(min(3, text_elements.count())):
                element = text_elements.nth(i)
                text = element.text_content()
                assert text and text.strip()
                expect(element).to_be_visible()
            logger.info(f"Text readability maintained on {size.name}")


class TestTouchInteraction:
    """Touch Interaction Testing."""

    def test_touch_targets(self, mobile_page: Page):
        """Test more than 80% of tap targets are at least 44x44 pixels."""
        targets = mobile_page.locator(site_layout.TOUCH_TARGETS)
        boxes = [targets.nth(i).bounding_box() for i in range(targets.count())]

        rate, small = page_checks.touch_target_stats(boxes)
        for width, height in small:
            logger.warning(f"Small touch target found: {width}x{height}px")
        logger.info(f"Touch target success rate: {rate * 100:.1f}%")
        assert rate > MIN_TOUCH_TARGET_RATE

    def test_tap(self, mobile_page: Page):
        clickable = mobile_page.locator(site_layout.CLICKABLE)
        if clickable.count() == 0:
            pytest.skip("Nothing to tap")
        clickable.first.click()
        mobile_page.wait_for_timeout(1000)

    def test_swipe(self, mobile_page: Page):
        box = mobile_page.locator("body").bounding_box()
        if not box:
            pytest.skip("Body has no bounding box")

        mouse = mobile_page.mouse
        mouse.move(box["x"] + 50, box["y"] + 200)
        mouse.down()
        mouse.move(box["x"] + 250, box["y"] + 200, steps=10)
        mouse.up()


class TestMobileNavigation:
    """Mobile Navigation Testing."""

    def test_mobile_friendly_navigation(self, mobile_page: Page):
        """Test a mobile menu button, or failing that the navigation, is visible."""
        found: Optional[str] = None
        for selector in site_layout.MOBILE_MENU_BUTTON_CANDIDATES:
            menu_button = mobile_page.locator(selector)
            if menu_button.count() > 0:
                expect(menu_button.first).to_be_visible()
                found = selector
                break

        if found:
            logger.info(f"Mobile menu found with selector: {found}")
            return

        nav = mobile_page.locator(site_layout.NAVIGATION)
        if nav.count() > 0:
            expect(nav.first).to_be_visible()

    def test_mobile_menu_interaction(self, mobile_page: Page):
        menu_button = mobile_page.locator(site_layout.MOBILE_MENU_BUTTON)
        if menu_button.count() == 0:
            pytest.skip("No mobile menu button")

        menu_button.first.click()
        mobile_page.wait_for_timeout(1000)

        menu_items = mobile_page.locator(site_layout.MOBILE_MENU_LINKS)
        if menu_items.count() > 0:
            menu_items.first.click()
            mobile_page.wait_for_load_state("load")


class TestMobilePerformance:
    """Mobile Performance Testing."""

    def test_mobile_load_time(self, page: Page):
        """Test a throttled-header load still completes within 5 seconds."""
        page.context.set_extra_http_headers({"X-Playwright-Slow-Mo": "1000"})
        measurement = PerformanceMonitor(page).measure_load("/", wait_until="load")
        logger.info(f"Mobile load time: {measurement.elapsed_ms:.0f}ms")
        assert measurement.within(PerformanceBudget.MOBILE_MS)

    def test_responsive_images(self, mobile_page: Page):
        images = mobile_page.locator("img")
        for i in range(images.count()):
            src = images.nth(i).get_attribute("src")
            if src and page_checks.is_responsive_image(src):
                logger.info(f"Responsive image found: {src}")

    def test_touch_events(self, mobile_page: Page, is_mobile: bool):
        features = mobile_page.evaluate(MOBILE_FEATURES_SCRIPT)
        logger.info(f"Mobile features: {features}")
        if not is_mobile:
            pytest.skip("Touch events are only emulated on mobile profiles")
        assert features["touchEvents"]


class TestMobileAccessibility:
    """Mobile Accessibility Testing."""

    def test_accessibility_standards(self, mobile_page: Page):
        """Test a single h1 and alt text on more than 70% of images."""
        expect(mobile_page.locator("h1")).to_have_count(1)

        images = mobile_page.locator("img")
        alts = [images.nth(i).get_attribute("alt") for i in range(images.count())]
        rate = page_checks.alt_text_rate(alts)
        logger.info(f"Alt text coverage: {rate * 100:.1f}%")
        assert rate > MIN_ALT_TEXT_RATE

    def test_screen_reader_support(self, mobile_page: Page):
        aria_count = mobile_page.locator(site_layout.ARIA_LABELLED).count()
        logger.info(f"{aria_count} elements with ARIA attributes found")

        focusable = mobile_page.locator(site_layout.FOCUSABLE)
        if focusable.count() > 0:
            focusable.first.focus()
            expect(focusable.first).to_be_focused()
