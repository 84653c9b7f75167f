"""Pydantic v2 models for SVT topic listing pages.

A listing page is transient: it lives only while the pagination walker
processes it.  Only the fields the crawler depends on are modelled; the
rest of the upstream payload is ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ListingEntry(BaseModel):
    """One teaser in a topic listing."""

    model_config = ConfigDict(frozen=True)

    url: str | None = Field(
        default=None,
        description="Article URL, absolute (https://www.svt.se/...) or site-relative.",
    )
    published: str | None = Field(
        default=None, description="ISO publication timestamp, used for debug output."
    )


class ListingPage(BaseModel):
    """A single page of a topic listing (``?q=auto``)."""

    model_config = ConfigDict(frozen=True)

    total_available_items: int = Field(
        default=0, description="Total items available for the topic."
    )
    content: list[ListingEntry] = Field(
        default_factory=list, description="Entries in listing order (newest first)."
    )

    @classmethod
    def from_api(cls, payload: Any) -> ListingPage:
        """Parse the ``auto`` block of a listing response.

        Missing blocks fall back to empty values, mirroring how the API
        answers for a topic without content.  A payload that is not a
        JSON object raises :class:`ValueError` (pydantic's
        ``ValidationError`` included).
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Listing payload is not an object: {type(payload).__name__}")

        auto = payload.get("auto") or {}
        pagination = auto.get("pagination") or {}
        return cls.model_validate(
            {
                "total_available_items": pagination.get("totalAvailableItems") or 0,
                "content": auto.get("content") or [],
            }
        )
