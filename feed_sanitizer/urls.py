"""Resolution of relative URLs found in feed content."""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urljoin, urlsplit

_IGNORED_URL_CHARACTERS = re.compile(r"[`\x00-\x20\x7f-\xa0\s]+")


class MalformedUrlError(ValueError):
    """Raised when a URL cannot be turned into an absolute URL."""


def is_absolute(url: str) -> bool:
    parts = urlsplit(url)
    return bool(parts.scheme and parts.netloc)


def complete_url(base_url: str, url: str) -> str:
    """Return ``url`` as an absolute URL, resolving it against ``base_url``.

    Absolute URLs are returned as they are. A relative URL needs an absolute
    base URL (scheme and host), otherwise ``MalformedUrlError`` is raised.
    """

    url = url.strip()
    try:
        if is_absolute(url):
            return url
        if not base_url or not is_absolute(base_url.strip()):
            raise MalformedUrlError(f"Base URL {base_url!r} is not an absolute URL")
        return urljoin(base_url.strip(), url)
    except MalformedUrlError:
        raise
    except ValueError as exc:
        raise MalformedUrlError(
            f"Cannot resolve {url!r} against {base_url!r}: {exc}"
        ) from exc


def has_allowed_scheme(url: str, protocols: Iterable[str]) -> bool:
    """Whether ``url`` is relative or uses one of ``protocols``."""

    # Browsers ignore whitespace and control characters inside the scheme.
    normalized = _IGNORED_URL_CHARACTERS.sub("", url)
    try:
        scheme = urlsplit(normalized).scheme
    except ValueError:
        return False
    return not scheme or scheme.lower() in protocols
