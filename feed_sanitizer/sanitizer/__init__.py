"""Article sanitization package."""

from .article import (
    ArticleSanitizer,
    get_article_sanitizer,
    sanitize_article,
    sanitize_html,
)
from .policies import Policy, PolicySet, article_policy
from .validators import image_src_rewriter, integer_value, video_attribute

__all__ = [
    "ArticleSanitizer",
    "Policy",
    "PolicySet",
    "article_policy",
    "get_article_sanitizer",
    "image_src_rewriter",
    "integer_value",
    "sanitize_article",
    "sanitize_html",
    "video_attribute",
]
