"""Pydantic schemas for links."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator


class LinkCreate(BaseModel):
    """Validated input for creating a link."""

    url: str
    title: str | None = None

    @field_validator("url")
    @classmethod
    def require_url(cls, v: str) -> str:
        """URL is trimmed and must not be empty."""
        v = v.strip()
        if not v:
            raise ValueError("URL is required")
        return v

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str | None) -> str | None:
        """Trim the title; an empty title is stored as absent."""
        if v is None:
            return None
        return v.strip() or None


class Link(BaseModel):
    """A row of the remote `links` table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    url: str
    title: str | None = None
    created_at: datetime
