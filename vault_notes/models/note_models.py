"""Flat record describing one vault note, whatever the upstream source."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_SUMMARY = "No summary available."


class NoteRecord(BaseModel):
    """Normalized metadata for a book, game, show, manga or light novel."""

    title: str
    slug: str
    kind: str
    date_field: str = "year"
    date_value: str = ""
    genres: List[str] = Field(default_factory=list)
    themes: List[str] = Field(default_factory=list)
    summary: str = DEFAULT_SUMMARY
    cover_url: Optional[str] = None
    list_tag: str = "wishlist"
    slugify_tags: bool = True
