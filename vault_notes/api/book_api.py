"""Google Books lookup by ISBN."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..models import DEFAULT_SUMMARY, NoteRecord
from ..utils.file_utils import slugify
from ..utils.http_client import HttpClient
from .errors import ItemNotFoundError

VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
IMAGE_SIZES = ("extraLarge", "large", "medium", "thumbnail", "smallThumbnail")


def published_year(published_date: Optional[str]) -> str:
    if not published_date:
        return ""
    return str(published_date)[:4]


def pick_cover_url(image_links: Optional[Dict[str, Any]]) -> Optional[str]:
    """Returns the largest image Google Books offers for the volume."""

    for size in IMAGE_SIZES:
        url = (image_links or {}).get(size)
        if url:
            return url
    return None


class GoogleBooksAPI:
    """Fetches a volume from Google Books and turns it into a book note."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def fetch_by_isbn(self, isbn: str) -> NoteRecord:
        isbn = isbn.replace("-", "").strip()
        data = self._client.get_json(VOLUMES_URL, params={"q": f"isbn:{isbn}"})
        items = data.get("items") or []
        if not items:
            raise ItemNotFoundError(f"No book found for ISBN {isbn}")

        volume = items[0].get("volumeInfo") or {}
        title = volume.get("title")
        if not title:
            raise ItemNotFoundError(f"Google Books returned a volume without title for ISBN {isbn}")

        record = NoteRecord(
            title=title,
            slug=slugify(title, default=isbn),
            kind="book",
            date_field="year",
            date_value=published_year(volume.get("publishedDate")),
            genres=list(volume.get("categories") or []),
            summary=volume.get("description") or DEFAULT_SUMMARY,
            cover_url=pick_cover_url(volume.get("imageLinks")),
        )
        if not record.cover_url:
            logging.info("No cover image found for %s", record.title)
        return record
