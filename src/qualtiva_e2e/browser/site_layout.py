"""Selectors and viewport presets shared by the live test modules.

The site is treated as a black box, so most selectors list several common
patterns and tests accept whichever one matches.
"""

from typing import List

from pydantic import BaseModel


class NamedViewport(BaseModel):
    """A viewport size with a human-readable label."""

    name: str
    width: int
    height: int

    def size(self) -> dict:
        return {"width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"{self.name} ({self.width}x{self.height})"


# Layout landmarks
NAVIGATION = "nav, header"
NAVIGATION_LINKS = "nav a, header a"
MAIN_CONTENT = "main, .main-content, #main"
FOOTER = "footer"
HEADINGS = "h1, h2, h3, h4, h5, h6"
TEXT_BLOCKS = "h1, h2, h3, p"
LOGO = 'img[alt*="logo" i], img[alt*="qualtiva" i], .logo, [data-testid="logo"]'
HERO_CANDIDATES: List[str] = [
    ".hero",
    ".banner",
    ".jumbotron",
    "section:first-of-type",
    '[data-testid="hero"]',
]

# Mobile menu
MOBILE_MENU_BUTTON = 'button[aria-label*="menu" i], .mobile-menu-toggle, .hamburger'
MOBILE_MENU_BUTTON_CANDIDATES: List[str] = [
    'button[aria-label*="menu" i]',
    ".mobile-menu-toggle",
    ".hamburger",
    ".nav-toggle",
    '[data-testid="mobile-menu"]',
]
MOBILE_MENU_OPEN = '.mobile-menu, .mobile-nav, nav[aria-expanded="true"], .menu-open'
MOBILE_MENU_LINKS = "nav a, .mobile-menu a, .nav-menu a"

# Interactive elements
CLICKABLE = "a, button"
TOUCH_TARGETS = 'a, button, input[type="button"], input[type="submit"]'
FOCUSABLE = 'a, button, input, select, textarea, [tabindex]:not([tabindex="-1"])'
ARIA_LABELLED = "[aria-label], [aria-labelledby], [aria-describedby]"

# Forms
SUBMIT_BUTTON = 'button[type="submit"], input[type="submit"]'
CONTACT_SUBMIT_BUTTON = (
    'button[type="submit"], input[type="submit"], '
    'button:has-text("send"), button:has-text("submit")'
)
REQUIRED_FIELDS = "input[required], select[required], textarea[required]"
TEXT_INPUTS = 'input[type="text"], input[type="email"], textarea'
NAME_FIELD = 'input[name*="name" i], input[placeholder*="name" i], input[id*="name" i]'
EMAIL_FIELD = 'input[type="email"], input[name*="email" i], input[placeholder*="email" i]'
NEWSLETTER_EMAIL_FIELD = 'input[type="email"], input[name*="email" i]'
MESSAGE_FIELD = 'textarea, input[name*="message" i], input[placeholder*="message" i]'

SEMANTIC_ELEMENTS: List[str] = [
    "header",
    "nav",
    "main",
    "section",
    "article",
    "aside",
    "footer",
    "figure",
    "figcaption",
]

PRIMARY_NAV_ITEMS: List[str] = ["Home", "About", "Services", "Solutions", "Contact"]

# Viewport presets
RESPONSIVE_VIEWPORTS: List[NamedViewport] = [
    NamedViewport(name="Mobile", width=320, height=568),
    NamedViewport(name="Tablet", width=768, height=1024),
    NamedViewport(name="Desktop", width=1024, height=768),
    NamedViewport(name="Large Desktop", width=1920, height=1080),
]

SCREEN_SIZES: List[NamedViewport] = [
    NamedViewport(name="Small Mobile", width=320, height=568),
    NamedViewport(name="Medium Mobile", width=375, height=667),
    NamedViewport(name="Large Mobile", width=414, height=896),
    NamedViewport(name="Small Tablet", width=768, height=1024),
    NamedViewport(name="Large Tablet", width=1024, height=768),
    NamedViewport(name="Desktop", width=1280, height=720),
    NamedViewport(name="Large Desktop", width=1920, height=1080),
]

READABILITY_SIZES: List[NamedViewport] = [
    NamedViewport(name="Small Mobile", width=320, height=568),
    NamedViewport(name="Tablet", width=768, height=1024),
    NamedViewport(name="Desktop", width=1280, height=720),
]

IPHONE_12_PRO = NamedViewport(name="iPhone 12 Pro", width=390, height=844)
PIXEL_5 = NamedViewport(name="Pixel 5", width=393, height=851)
IPAD_PRO = NamedViewport(name="iPad Pro", width=1024, height=1366)
MOBILE_PORTRAIT = NamedViewport(name="Portrait", width=375, height=667)
MOBILE_LANDSCAPE = NamedViewport(name="Landscape", width=667, height=375)
SMALL_PORTRAIT = NamedViewport(name="Portrait", width=320, height=568)
SMALL_LANDSCAPE = NamedViewport(name="Landscape", width=568, height=320)
