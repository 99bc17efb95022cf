"""Tests for the offline page check rules."""

import pytest

from qualtiva_e2e.browser import page_checks


class TestConsoleErrors:
    """Tests for filter_critical_errors."""

    def test_drops_known_noise(self):
        errors = [
            "Failed to load favicon.ico",
            "analytics.js blocked",
            "Uncaught TypeError: x is undefined",
        ]

        assert page_checks.filter_critical_errors(errors) == [
            "Uncaught TypeError: x is undefined"
        ]

    def test_extended_ignore_list(self):
        errors = ["adblock detected", "chrome extension error"]

        assert page_checks.filter_critical_errors(errors) == errors
        assert (
            page_checks.filter_critical_errors(
                errors, page_checks.EXTENDED_IGNORED_CONSOLE_ERRORS
            )
            == []
        )


class TestHeadings:
    """Tests for heading_level_jumps."""

    def test_skipped_level(self):
        assert page_checks.heading_level_jumps([1, 2, 4]) == [(2, 4)]

    def test_going_up_is_fine(self):
        assert page_checks.heading_level_jumps([1, 2, 3, 1, 2]) == []

    def test_empty(self):
        assert page_checks.heading_level_jumps([]) == []


class TestRates:
    """Tests for rate helpers."""

    def test_success_rate(self):
        assert page_checks.success_rate(3, 1) == 0.75

    def test_empty_sample_is_success(self):
        assert page_checks.success_rate(0, 0) == 1.0

    def test_touch_targets(self):
        boxes = [
            {"width": 48, "height": 48},
            {"width": 44, "height": 44},
            {"width": 20, "height": 44},
            None,
        ]

        rate, small = page_checks.touch_target_stats(boxes)

        assert rate == pytest.approx(2 / 3)
        assert small == [(20, 44)]

    def test_is_touch_target_without_box(self):
        assert page_checks.is_touch_target(None) is False

    def test_alt_text_rate(self):
        assert page_checks.alt_text_rate(["Logo", "", None, "Team"]) == 0.5
        assert page_checks.alt_text_rate([]) == 1.0


class TestLinks:
    """Tests for link classification."""

    @pytest.mark.parametrize(
        "href,expected",
        [
            ("/about", True),
            ("https://dev.analytiqa.cloud/services", True),
            ("mailto:info@qualtiva.solutions", False),
            ("tel:+31200000000", False),
            ("#contact", False),
            (None, False),
            ("", False),
        ],
    )
    def test_should_follow_link(self, href, expected):
        assert page_checks.should_follow_link(href) is expected

    def test_external_link(self):
        hosts = ["analytiqa.cloud"]

        assert page_checks.is_external_link("https://github.com/x", hosts)
        assert not page_checks.is_external_link("https://dev.analytiqa.cloud/", hosts)
        assert not page_checks.is_external_link("/relative", hosts)

    def test_canonical(self):
        hosts = ["analytiqa.cloud"]

        assert page_checks.canonical_matches_site("https://dev.analytiqa.cloud/", hosts)
        assert not page_checks.canonical_matches_site(None, hosts)


class TestContent:
    """Tests for content rules."""

    def test_error_page(self):
        assert page_checks.looks_like_error_page("404 - Page Not Found")
        assert not page_checks.looks_like_error_page("Welcome")
        assert not page_checks.looks_like_error_page(None)

    def test_images(self):
        assert page_checks.is_optimized_image("/img/hero.webp")
        assert page_checks.is_optimized_image("data:image/avif;base64,AAA")
        assert page_checks.needs_image_optimization("/img/hero.png")
        assert not page_checks.needs_image_optimization("/img/logo.png")
        assert page_checks.is_responsive_image("/img/hero@2x.png")
        assert page_checks.is_decorative_image("/img/icon-arrow.svg")

    def test_title_length(self):
        assert page_checks.title_length_ok("Qualtiva Solutions")
        assert not page_checks.title_length_ok("x" * 60)
        assert not page_checks.title_length_ok("short", min_length=10)

    def test_meta_description_length(self):
        assert page_checks.meta_description_length_ok("x" * 140)
        assert not page_checks.meta_description_length_ok("x" * 120)
        assert not page_checks.meta_description_length_ok("x" * 160)
        assert not page_checks.meta_description_length_ok(None)

    def test_contact_details(self):
        assert page_checks.has_contact_details("Mail info@qualtiva.solutions")
        assert page_checks.has_contact_details("Call +31 20 123 4567")
        assert not page_checks.has_contact_details("Get in touch")


class TestSecurity:
    """Tests for security rules."""

    def test_audit_headers_case_insensitive(self):
        present, missing = page_checks.audit_security_headers(
            {"X-Frame-Options": "DENY", "Referrer-Policy": "no-referrer"}
        )

        assert present == {"x-frame-options": "DENY", "referrer-policy": "no-referrer"}
        assert missing == ["x-content-type-options", "x-xss-protection"]

    def test_sensitive_matches(self):
        source = "<script>const API_KEY = 'abc'; const token = 1;</script>"

        assert page_checks.find_sensitive_matches(source) == ["API_KEY", "token"]

    def test_clean_source(self):
        assert page_checks.find_sensitive_matches("<p>Hello</p>") == []
