"""Feed article sanitizer: allow-list cleaning of untrusted article HTML."""

from .models import SanitizeRequest, SanitizeResponse
from .sanitizer import (
    ArticleSanitizer,
    get_article_sanitizer,
    sanitize_article,
    sanitize_html,
)
from .urls import MalformedUrlError, complete_url

__all__ = [
    "ArticleSanitizer",
    "MalformedUrlError",
    "SanitizeRequest",
    "SanitizeResponse",
    "complete_url",
    "get_article_sanitizer",
    "sanitize_article",
    "sanitize_html",
]
