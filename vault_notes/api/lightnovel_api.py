"""RanobeDB light novel series lookup."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..models import DEFAULT_SUMMARY, NoteRecord
from ..utils.file_utils import slugify
from ..utils.http_client import HttpClient
from .errors import ItemNotFoundError

SERIES_URL = "https://ranobedb.org/api/v0/series"
IMAGE_BASE = "https://images.ranobedb.org"


def _tags_of_type(tags: Optional[List[Dict[str, Any]]], ttype: str) -> List[str]:
    return [tag["name"] for tag in tags or [] if tag.get("ttype") == ttype and tag.get("name")]


def main_book_cover_url(books: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    """Cover of the first main-line volume (lowest ``sort_order``) that has an image."""

    candidates = [
        book for book in books or [] if book.get("book_type") == "main" and (book.get("image") or {}).get("filename")
    ]
    if not candidates:
        return None
    # Volumes without a sort_order go last.
    first = min(
        candidates,
        key=lambda book: book["sort_order"] if book.get("sort_order") is not None else float("inf"),
    )
    return f"{IMAGE_BASE}/{first['image']['filename']}"


class RanobeDBAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def fetch_by_id(self, series_id: int) -> NoteRecord:
        data = self._client.get_json(f"{SERIES_URL}/{int(series_id)}")
        series = data.get("series") or {}
        title = series.get("title")
        if not title:
            raise ItemNotFoundError(f"RanobeDB returned no series for id {series_id}")

        start_date = series.get("start_date")
        cover_url = main_book_cover_url(series.get("books"))
        if not cover_url:
            logging.warning("No cover found for %s", title)
        return NoteRecord(
            title=title,
            slug=slugify(title, default=str(series_id)),
            kind="lightnovel",
            date_field="year",
            date_value=str(start_date)[:4] if start_date else "",
            genres=_tags_of_type(series.get("tags"), "genre"),
            themes=_tags_of_type(series.get("tags"), "tag"),
            summary=(series.get("book_description") or {}).get("description") or DEFAULT_SUMMARY,
            cover_url=cover_url,
        )
