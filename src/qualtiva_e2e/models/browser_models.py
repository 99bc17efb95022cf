"""Browser profile models for the Playwright suite.

This module defines the Pydantic models describing which browser engine,
device emulation and launch flags a suite session runs with.
"""

import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class BrowserType(str, Enum):
    """Supported browser engines."""

    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class DeviceType(str, Enum):
    """Device emulation types."""

    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"


class Viewport(BaseModel):
    """Browser viewport configuration."""

    width: int = Field(default=1280, description="Viewport width")
    height: int = Field(default=720, description="Viewport height")

    def as_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


class Geolocation(BaseModel):
    """Emulated geolocation for browser contexts."""

    latitude: float = Field(default=37.7749)
    longitude: float = Field(default=-122.4194)


class BrowserProfile(BaseModel):
    """A named browser + device configuration a session runs against."""

    name: str = Field(description="Profile name as reported in results")
    browser: BrowserType = Field(description="Browser engine")
    device: str = Field(description="Playwright device descriptor name")
    device_type: DeviceType = Field(default=DeviceType.DESKTOP)
    channel: Optional[str] = Field(
        default=None, description="Browser distribution channel (e.g. msedge)"
    )
    launch_args: List[str] = Field(
        default_factory=list, description="Extra browser launch arguments"
    )
    extra_http_headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )

    @property
    def slug(self) -> str:
        """File-system friendly profile name."""
        slug = re.sub(r"[^a-zA-Z0-9]+", "-", self.name.strip().lower())
        return slug.strip("-") or "profile"

    @property
    def is_mobile(self) -> bool:
        return self.device_type != DeviceType.DESKTOP

    def pytest_args(self) -> List[str]:
        """Render the pytest-playwright options selecting this profile."""
        args = [
            "--profile",
            self.name,
            "--browser",
            self.browser.value,
            "--device",
            self.device,
        ]
        if self.channel:
            args.extend(["--browser-channel", self.channel])
        return args
