"""Suite configuration with environment variable and YAML loading."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from qualtiva_e2e.exceptions import ConfigurationError
from qualtiva_e2e.models.browser_models import Geolocation, Viewport

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dev.analytiqa.cloud"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
FALSY_VALUES = ("", "0", "false", "no", "off")

# Explicit config file handed down to child pytest sessions
CONFIG_ENV_VAR = "QUALTIVA_E2E_CONFIG"


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in FALSY_VALUES


def env_list(name: str, default: List[str]) -> List[str]:
    """Read a comma-separated environment variable."""
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class E2ESettings(BaseModel):
    """Configuration for suite runs."""

    model_config = ConfigDict(validate_default=True)

    # Target site
    base_url: str = Field(
        default_factory=lambda: os.getenv("BASE_URL") or DEFAULT_BASE_URL,
        description="Base URL of the site under test",
    )
    known_hosts: List[str] = Field(
        default_factory=lambda: env_list(
            "E2E_KNOWN_HOSTS", ["analytiqa.cloud", "qualtiva.solutions"]
        ),
        description="Hosts treated as internal links",
    )

    # Runner behaviour
    ci: bool = Field(
        default_factory=lambda: env_flag("CI"),
        description="Running on a CI server",
    )
    test_timeout_ms: int = Field(
        default_factory=lambda: os.getenv("E2E_TEST_TIMEOUT_MS") or "30000",
        gt=0,
        description="Default action/navigation timeout",
    )
    expect_timeout_ms: int = Field(
        default_factory=lambda: os.getenv("E2E_EXPECT_TIMEOUT_MS") or "10000",
        gt=0,
        description="Default assertion timeout",
    )

    # Context defaults applied to every profile
    viewport: Viewport = Field(default_factory=Viewport)
    geolocation: Geolocation = Field(default_factory=Geolocation)
    permissions: List[str] = Field(
        default_factory=lambda: ["geolocation", "notifications"]
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    # Artifacts
    output_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("E2E_OUTPUT_DIR") or "test-results"),
        description="Traces, screenshots, videos and JSON results",
    )
    junit_dir: Path = Field(
        default_factory=lambda: Path(
            os.getenv("PLAYWRIGHT_JUNIT_OUTPUT_DIR") or "junit-results"
        ),
        description="JUnit XML output directory",
    )
    report_dir: Path = Field(default=Path("playwright-report"))
    storage_state_path: Path = Field(default=Path("global-state.json"))
    summary_path: Path = Field(default=Path("test-results/summary.json"))
    config_path: Optional[Path] = Field(
        default=None, description="Explicit YAML config these settings were loaded from"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @property
    def retries(self) -> int:
        return 2 if self.ci else 0

    @property
    def workers(self) -> str:
        return "1" if self.ci else "auto"

    @property
    def forbid_only(self) -> bool:
        return self.ci

    @property
    def report_path(self) -> Path:
        return self.report_dir / "index.html"

    def context_defaults(self) -> Dict[str, Any]:
        """Browser context options shared by all profiles."""
        return {
            "viewport": self.viewport.as_dict(),
            "geolocation": self.geolocation.model_dump(),
            "permissions": list(self.permissions),
            "user_agent": self.user_agent,
        }


class UploaderSettings(BaseModel):
    """Configuration for posting JUnit results to the results endpoint."""

    model_config = ConfigDict(validate_default=True)

    endpoint: Optional[str] = Field(default_factory=lambda: os.getenv("AQA_ENDPOINT"))
    user: Optional[str] = Field(default_factory=lambda: os.getenv("AQA_USER"))
    password: Optional[str] = Field(
        default_factory=lambda: os.getenv("AQA_PASSWORD"), repr=False
    )

    # Header metadata
    result_format: str = Field(default="junit")
    test_engine: str = Field(default="playwright")
    tags: str = Field(default_factory=lambda: os.getenv("AQA_TAGS") or "e2e,website")
    team: str = Field(default_factory=lambda: os.getenv("AQA_TEAM") or "qualtiva")
    project: str = Field(
        default_factory=lambda: os.getenv("AQA_PROJECT") or "qualtiva-solutions-website"
    )
    application: str = Field(
        default_factory=lambda: os.getenv("AQA_APPLICATION") or "website"
    )
    product: str = Field(
        default_factory=lambda: os.getenv("AQA_PRODUCT") or "qualtiva-solutions"
    )
    environment: str = Field(
        default_factory=lambda: os.getenv("AQA_ENVIRONMENT") or "dev"
    )

    # File selection
    results_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("AQA_RESULTS_DIR") or "junit-results")
    )
    file_pattern: str = Field(
        default_factory=lambda: os.getenv("AQA_FILE_PATTERN") or "junit-*.xml"
    )
    max_age_minutes: float = Field(
        default_factory=lambda: os.getenv("AQA_MAX_AGE_MINUTES") or "60",
        gt=0,
    )
    timeout_seconds: float = Field(
        default_factory=lambda: os.getenv("AQA_TIMEOUT_SECONDS") or "30",
        gt=0,
    )

    def missing_fields(self) -> List[str]:
        """Names of the required environment variables that are unset."""
        required = {
            "AQA_ENDPOINT": self.endpoint,
            "AQA_USER": self.user,
            "AQA_PASSWORD": self.password,
        }
        return [name for name, value in required.items() if not value]


# Environment variables that override YAML values for E2ESettings
E2E_ENV_FIELDS = {
    "BASE_URL": "base_url",
    "CI": "ci",
    "E2E_KNOWN_HOSTS": "known_hosts",
    "E2E_TEST_TIMEOUT_MS": "test_timeout_ms",
    "E2E_EXPECT_TIMEOUT_MS": "expect_timeout_ms",
    "E2E_OUTPUT_DIR": "output_dir",
    "PLAYWRIGHT_JUNIT_OUTPUT_DIR": "junit_dir",
}

UPLOADER_ENV_FIELDS = {
    "AQA_ENDPOINT": "endpoint",
    "AQA_USER": "user",
    "AQA_PASSWORD": "password",
    "AQA_TAGS": "tags",
    "AQA_TEAM": "team",
    "AQA_PROJECT": "project",
    "AQA_APPLICATION": "application",
    "AQA_PRODUCT": "product",
    "AQA_ENVIRONMENT": "environment",
    "AQA_RESULTS_DIR": "results_dir",
    "AQA_FILE_PATTERN": "file_pattern",
    "AQA_MAX_AGE_MINUTES": "max_age_minutes",
    "AQA_TIMEOUT_SECONDS": "timeout_seconds",
}


def get_config_paths() -> List[Path]:
    """
    Get configuration file paths in priority order.

    Returns:
        List of paths, highest priority last
    """
    return [
        Path.home() / ".qualtiva-e2e" / "config.yaml",
        Path.cwd() / ".qualtiva-e2e.yaml",
    ]


def _read_config_files(config_path: Optional[str], section: str) -> Dict[str, Any]:
    merged: Dict[str, Any] = {}

    config_paths = get_config_paths()
    if config_path:
        explicit = Path(config_path)
        if not explicit.exists():
            raise ConfigurationError(f"Config file not found: {explicit}")
        config_paths.append(explicit)

    for path in config_paths:
        if not path.exists():
            continue
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            continue
        if not isinstance(file_config, dict):
            logger.warning(f"Ignoring config {path}: top level is not a mapping")
            continue
        merged.update(file_config.get(section) or {})
        logger.debug(f"Loaded {section} config from {path}")

    return merged


def _env_overrides(fields: Dict[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in fields.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        if field_name == "ci":
            overrides[field_name] = env_flag(env_name)
        elif field_name == "known_hosts":
            overrides[field_name] = env_list(env_name, [])
        else:
            overrides[field_name] = value
    return overrides


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> E2ESettings:
    """
    Load suite settings.

    Values are merged in this order (later overrides earlier):
    1. Default values
    2. Global config (~/.qualtiva-e2e/config.yaml, ``e2e`` section)
    3. Project config (./.qualtiva-e2e.yaml, ``e2e`` section)
    4. Explicit config_path, or the file named by QUALTIVA_E2E_CONFIG
    5. Environment variables (BASE_URL, CI, E2E_*)
    6. Keyword overrides

    Raises:
        ConfigurationError: If a value fails validation
    """
    config_path = config_path or os.getenv(CONFIG_ENV_VAR)
    merged = _read_config_files(config_path, "e2e")
    if config_path:
        merged["config_path"] = Path(config_path).resolve()
    merged.update(_env_overrides(E2E_ENV_FIELDS))
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return E2ESettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid suite settings: {e}") from e


def load_uploader_settings(
    config_path: Optional[str] = None, **overrides: Any
) -> UploaderSettings:
    """Load uploader settings from the ``uploader`` config section and AQA_* variables."""
    config_path = config_path or os.getenv(CONFIG_ENV_VAR)
    merged = _read_config_files(config_path, "uploader")
    merged.update(_env_overrides(UPLOADER_ENV_FIELDS))
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return UploaderSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid uploader settings: {e}") from e
