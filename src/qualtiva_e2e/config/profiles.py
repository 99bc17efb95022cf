"""Browser profiles the suite runs against.

Each profile pairs a Playwright device descriptor with launch flags. The
``all``, ``desktop`` and ``mobile`` groups are what the CLI sub-commands of the
same names select.
"""

from typing import Dict, List

from qualtiva_e2e.exceptions import ConfigurationError
from qualtiva_e2e.models.browser_models import BrowserProfile, BrowserType, DeviceType

DISABLE_WEB_SECURITY = "--disable-web-security"

BROWSER_PROFILES: List[BrowserProfile] = [
    # Desktop browsers
    BrowserProfile(
        name="chromium",
        browser=BrowserType.CHROMIUM,
        device="Desktop Chrome",
        launch_args=[
            DISABLE_WEB_SECURITY,
            "--disable-features=VizDisplayCompositor",
            "--disable-dev-shm-usage",
        ],
    ),
    BrowserProfile(
        name="firefox",
        browser=BrowserType.FIREFOX,
        device="Desktop Firefox",
        launch_args=["-width", "1280", "-height", "720"],
    ),
    BrowserProfile(
        name="webkit",
        browser=BrowserType.WEBKIT,
        device="Desktop Safari",
        launch_args=[DISABLE_WEB_SECURITY],
    ),
    # Mobile browsers
    BrowserProfile(
        name="Mobile Chrome",
        browser=BrowserType.CHROMIUM,
        device="Pixel 5",
        device_type=DeviceType.MOBILE,
        launch_args=[DISABLE_WEB_SECURITY, "--disable-dev-shm-usage"],
    ),
    BrowserProfile(
        name="Mobile Safari",
        browser=BrowserType.WEBKIT,
        device="iPhone 12",
        device_type=DeviceType.MOBILE,
        launch_args=[DISABLE_WEB_SECURITY],
    ),
    # Tablet
    BrowserProfile(
        name="iPad",
        browser=BrowserType.WEBKIT,
        device="iPad Pro 11 landscape",
        device_type=DeviceType.TABLET,
        launch_args=[DISABLE_WEB_SECURITY],
    ),
    BrowserProfile(
        name="Edge",
        browser=BrowserType.CHROMIUM,
        device="Desktop Chrome",
        channel="msedge",
        launch_args=[DISABLE_WEB_SECURITY, "--disable-features=VizDisplayCompositor"],
    ),
    # Low-end device simulation
    BrowserProfile(
        name="Low-end Device",
        browser=BrowserType.CHROMIUM,
        device="Desktop Chrome",
        launch_args=[
            DISABLE_WEB_SECURITY,
            "--disable-gpu",
            "--disable-software-rasterizer",
            "--disable-dev-shm-usage",
        ],
        extra_http_headers={"X-Playwright-Slow-Mo": "1000"},
    ),
]

PROFILE_GROUPS = ("all", "desktop", "mobile")

DEFAULT_PROFILE = "chromium"


def profile_names() -> List[str]:
    return [profile.name for profile in BROWSER_PROFILES]


def _by_name() -> Dict[str, BrowserProfile]:
    return {profile.name.lower(): profile for profile in BROWSER_PROFILES}


def get_profile(name: str) -> BrowserProfile:
    """Look up a profile by name (case-insensitive) or slug.

    Raises:
        ConfigurationError: If no profile matches
    """
    key = name.strip().lower()
    profiles = _by_name()
    if key in profiles:
        return profiles[key]
    for profile in BROWSER_PROFILES:
        if profile.slug == key:
            return profile
    raise ConfigurationError(
        f"Unknown browser profile {name!r}. Available: {', '.join(profile_names())}"
    )


def profiles_for_group(group: str) -> List[BrowserProfile]:
    """Return the profiles selected by a group name (all, desktop, mobile)."""
    if group == "all":
        return list(BROWSER_PROFILES)
    if group == "desktop":
        return [p for p in BROWSER_PROFILES if p.device_type == DeviceType.DESKTOP]
    if group == "mobile":
        return [p for p in BROWSER_PROFILES if p.device_type != DeviceType.DESKTOP]
    raise ConfigurationError(
        f"Unknown profile group {group!r}. Available: {', '.join(PROFILE_GROUPS)}"
    )
