"""Exception types raised by the suite tooling."""


class E2EError(Exception):
    """Base error for suite tooling failures."""

    pass


class ConfigurationError(E2EError):
    """Raised when settings or profile selection are invalid."""

    pass


class BrowserError(E2EError):
    """Raised when a browser, context or page cannot be managed."""

    pass


class UploadError(E2EError):
    """Raised when the results uploader cannot start."""

    pass
