"""Suite settings and browser profiles."""

from .settings import (
    E2ESettings,
    UploaderSettings,
    load_settings,
    load_uploader_settings,
)
from .profiles import (
    BROWSER_PROFILES,
    DEFAULT_PROFILE,
    get_profile,
    profile_names,
    profiles_for_group,
)

__all__ = [
    "E2ESettings",
    "UploaderSettings",
    "load_settings",
    "load_uploader_settings",
    "BROWSER_PROFILES",
    "DEFAULT_PROFILE",
    "get_profile",
    "profile_names",
    "profiles_for_group",
]
