"""Decision rules applied to values read from the live site.

Live tests gather raw values through Playwright (links, headers, bounding boxes,
console messages) and hand them to these functions. Keeping the rules free of
browser calls lets them be unit-tested offline.
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

MIN_TOUCH_TARGET_PX = 44
MAX_NAVIGATION_LINKS = 10

TITLE_MAX_LENGTH = 60
META_DESCRIPTION_MIN_LENGTH = 120
META_DESCRIPTION_MAX_LENGTH = 160

# Console noise that does not indicate a site defect
IGNORED_CONSOLE_ERRORS: Tuple[str, ...] = ("favicon", "analytics", "third-party")
EXTENDED_IGNORED_CONSOLE_ERRORS: Tuple[str, ...] = IGNORED_CONSOLE_ERRORS + (
    "adblock",
    "extension",
)

SECURITY_HEADERS: Tuple[str, ...] = (
    "x-content-type-options",
    "x-frame-options",
    "x-xss-protection",
    "referrer-policy",
)

SENSITIVE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"api[_-]?key", re.IGNORECASE),
    re.compile(r"password", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
    re.compile(r"private[_-]?key", re.IGNORECASE),
)

ERROR_PAGE_PATTERN = re.compile(r"404|not found|page not found", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"[+]?[1-9][\d\s\-().]{7,15}")

SKIPPED_HREF_PREFIXES = ("mailto:", "tel:", "#")


def filter_critical_errors(
    errors: Iterable[str],
    ignored: Sequence[str] = IGNORED_CONSOLE_ERRORS,
) -> List[str]:
    """Drop console errors whose text contains any ignored fragment."""
    return [error for error in errors if not any(token in error for token in ignored)]


def heading_level_jumps(levels: Sequence[int]) -> List[Tuple[int, int]]:
    """Return consecutive heading pairs that skip more than one level down.

    ``[1, 2, 4]`` yields ``[(2, 4)]``. Going back up any number of levels is fine.
    """
    return [
        (current, following)
        for current, following in zip(levels, levels[1:])
        if following - current > 1
    ]


def success_rate(succeeded: int, failed: int) -> float:
    """Fraction of successes; an empty sample counts as fully successful."""
    total = succeeded + failed
    if total == 0:
        return 1.0
    return succeeded / total


def is_touch_target(
    box: Optional[Mapping[str, float]], min_size: int = MIN_TOUCH_TARGET_PX
) -> bool:
    """Whether a bounding box is large enough to tap."""
    if not box:
        return False
    return box["width"] >= min_size and box["height"] >= min_size


def touch_target_stats(
    boxes: Iterable[Optional[Mapping[str, float]]],
    min_size: int = MIN_TOUCH_TARGET_PX,
) -> Tuple[float, List[Tuple[float, float]]]:
    """Rate of adequately sized targets plus the sizes of undersized ones.

    Elements without a bounding box (hidden, detached) are not counted.
    """
    proper = 0
    small: List[Tuple[float, float]] = []
    for box in boxes:
        if not box:
            continue
        if is_touch_target(box, min_size):
            proper += 1
        else:
            small.append((box["width"], box["height"]))
    return success_rate(proper, len(small)), small


def alt_text_rate(alts: Sequence[Optional[str]]) -> float:
    """Fraction of images carrying a non-empty alt attribute."""
    with_alt = sum(1 for alt in alts if alt)
    return success_rate(with_alt, len(alts) - with_alt)


def should_follow_link(href: Optional[str]) -> bool:
    """Whether a navigation href leads to a page worth visiting."""
    if not href:
        return False
    return not href.startswith(SKIPPED_HREF_PREFIXES)


def is_external_link(href: str, known_hosts: Sequence[str]) -> bool:
    """Absolute links to hosts outside the site are external."""
    if not href.startswith("http"):
        return False
    return not any(host in href for host in known_hosts)


def looks_like_error_page(text: Optional[str]) -> bool:
    return bool(text) and ERROR_PAGE_PATTERN.search(text) is not None


def is_decorative_image(src: str) -> bool:
    return "icon" in src or "decoration" in src


def is_optimized_image(src: str) -> bool:
    """Modern formats (WebP/AVIF), either as files or inline data URIs."""
    return any(
        marker in src
        for marker in (".webp", ".avif", "data:image/webp", "data:image/avif")
    )


def needs_image_optimization(src: str) -> bool:
    """Non-modern images other than icons and logos."""
    if is_optimized_image(src):
        return False
    return "icon" not in src and "logo" not in src


def is_responsive_image(src: str) -> bool:
    return any(marker in src for marker in ("@2x", "mobile", "small", "data-src"))


def title_length_ok(title: str, min_length: int = 0) -> bool:
    """SEO title rule: longer than ``min_length``, shorter than 60 characters."""
    return min_length < len(title) < TITLE_MAX_LENGTH


def meta_description_length_ok(description: Optional[str]) -> bool:
    """SEO rule: a description between 120 and 160 characters (exclusive)."""
    if description is None:
        return False
    return META_DESCRIPTION_MIN_LENGTH < len(description) < META_DESCRIPTION_MAX_LENGTH


def audit_security_headers(
    headers: Mapping[str, str],
) -> Tuple[Dict[str, str], List[str]]:
    """Split the recommended security headers into present and missing.

    Header names are matched case-insensitively.
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    present = {name: lowered[name] for name in SECURITY_HEADERS if name in lowered}
    missing = [name for name in SECURITY_HEADERS if name not in lowered]
    return present, missing


def find_sensitive_matches(source: str) -> List[str]:
    """First match of each sensitive pattern found in page source."""
    matches = []
    for pattern in SENSITIVE_PATTERNS:
        match = pattern.search(source)
        if match:
            matches.append(match.group(0))
    return matches


def has_contact_details(text: Optional[str]) -> bool:
    """Whether text contains an email address or a phone number."""
    if not text:
        return False
    return bool(EMAIL_PATTERN.search(text) or PHONE_PATTERN.search(text))


def canonical_matches_site(href: Optional[str], known_hosts: Sequence[str]) -> bool:
    if not href:
        return False
    return any(host in href for host in known_hosts)
