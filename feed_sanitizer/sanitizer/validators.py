"""Attribute validators used by the article policies.

A validator receives ``(element, attribute, value)`` and returns the value to
emit, possibly normalized, or ``None`` to drop the attribute.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

import structlog

from ..urls import MalformedUrlError, complete_url

logger = structlog.get_logger(__name__)

Validator = Callable[[str, str, str], Optional[str]]

_INTEGER_PREFIX = re.compile(r"[0-9]+(?=\.|\Z)")

VIDEO_URL_PATTERN = re.compile(
    r"https?://(www\.)?youtube\.com/embed/.+"
    r"|http://player\.vimeo\.com/video/.+"
    r"|http://www\.dailymotion\.com/embed/.+"
)


def accept_value(element: str, attribute: str, value: str) -> Optional[str]:
    return value


def integer_value(element: str, attribute: str, value: str) -> Optional[str]:
    """Keep the integer part of a dimension such as ``"12"`` or ``"12.5"``."""

    match = _INTEGER_PREFIX.match(value)
    return match.group(0) if match else None


def video_attribute(element: str, attribute: str, value: str) -> Optional[str]:
    """Allow iframe dimensions, and sources pointing at a known video player."""

    if attribute in ("height", "width"):
        return value
    if attribute == "src" and VIDEO_URL_PATTERN.fullmatch(value):
        return value
    return None


def inline_style(element: str, attribute: str, value: str) -> Optional[str]:
    # The CSS sanitizer leaves an empty string when no declaration survives.
    return value if value.strip() else None


def image_src_rewriter(base_url: str) -> Validator:
    """Build a validator making image sources absolute against ``base_url``.

    When the URL cannot be resolved the original value is kept so the image
    still has a chance to display.
    """

    def rewrite_image_src(element: str, attribute: str, value: str) -> Optional[str]:
        try:
            return complete_url(base_url, value)
        except MalformedUrlError as exc:
            logger.warning(
                "image_src_resolution_failed",
                url=value,
                base_url=base_url,
                error=str(exc),
            )
            return value

    return rewrite_image_src
