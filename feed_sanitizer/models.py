"""Pydantic models describing the HTTP payloads of the sanitizer."""

from typing import Optional

from pydantic import BaseModel, Field


class SanitizeRequest(BaseModel):
    """HTML fragment submitted for sanitization."""

    html: str = Field(description="Untrusted HTML fragment, typically a feed article body")
    base_url: Optional[str] = Field(
        default=None,
        description="Feed website URL used to make relative image URLs absolute",
    )


class SanitizeResponse(BaseModel):
    """Sanitized HTML returned to the caller."""

    html: str = Field(description="HTML containing only allow-listed markup")
