"""Sanitization of feed article bodies."""

from __future__ import annotations

from functools import lru_cache, partial
from typing import Any, Dict, Iterable

import structlog
from bleach.css_sanitizer import ALLOWED_CSS_PROPERTIES, CSSSanitizer
from bleach.sanitizer import Cleaner

from ..settings import SANITIZER_CACHE_SIZE
from .filters import DISCARDED_ELEMENTS, PolicyFilter
from .policies import PolicySet, article_policy

logger = structlog.get_logger(__name__)

CSS_SANITIZER = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)


class ArticleSanitizer:
    """Sanitize the contents of an article: removes iframes, JS etc.

    Only a fixed set of block, formatting, image, link and video elements
    survives; relative image sources are made absolute with the feed's
    website URL.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.policy: PolicySet = article_policy(base_url)

    def _build_cleaner(self) -> Cleaner:
        # bleach cleaners keep parser state, so each call gets its own.
        return Cleaner(
            tags=self.policy.tags | DISCARDED_ELEMENTS,
            attributes=self.policy.allows_attribute,
            protocols=self.policy.protocols,
            strip=True,
            strip_comments=True,
            css_sanitizer=CSS_SANITIZER,
            filters=[partial(PolicyFilter, policy=self.policy)],
        )

    def sanitize(self, html: str) -> str:
        """Return ``html`` with everything outside the allow-list removed."""

        if not html:
            return ""
        return self._build_cleaner().clean(html)


@lru_cache(maxsize=SANITIZER_CACHE_SIZE)
def get_article_sanitizer(base_url: str) -> ArticleSanitizer:
    """Return the sanitizer for a feed, shared between calls."""

    logger.debug("article_sanitizer_created", base_url=base_url)
    return ArticleSanitizer(base_url)


def sanitize_html(html: str, base_url: str) -> str:
    """Sanitize an article body coming from the feed at ``base_url``."""

    return get_article_sanitizer(base_url).sanitize(html)


def sanitize_article(
    article: Dict[str, Any], keys: Iterable[str], base_url: str
) -> Dict[str, Any]:
    """Return a sanitized copy of an article for the specified keys."""

    sanitizer = get_article_sanitizer(base_url)
    sanitized = article.copy()
    for key in keys:
        value = sanitized.get(key)
        if isinstance(value, str):
            sanitized[key] = sanitizer.sanitize(value)
    return sanitized
