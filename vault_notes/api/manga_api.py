"""MangaDex lookups for manga/manhwa and their covers."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..models import DEFAULT_SUMMARY, NoteRecord
from ..utils.file_utils import slugify
from ..utils.http_client import ApiError, HttpClient
from .errors import ItemNotFoundError

API_BASE = "https://api.mangadex.org"
COVER_BASE = "https://uploads.mangadex.org/covers"
MANGA_KINDS = {"manga", "manhwa"}


def localized(values: Optional[Dict[str, str]], language: str = "en") -> Optional[str]:
    """Prefers ``language``, otherwise the first non-empty localisation."""

    if not values:
        return None
    if values.get(language):
        return values[language]
    return next((value for value in values.values() if value), None)


def tag_names(tags: Optional[List[Dict[str, Any]]], group: str) -> List[str]:
    names = []
    for tag in tags or []:
        attributes = tag.get("attributes") or {}
        if attributes.get("group") != group:
            continue
        name = localized(attributes.get("name"))
        if name:
            names.append(name)
    return names


class MangaDexAPI:
    """Fetches a MangaDex title and resolves its first cover art."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def fetch_by_id(self, manga_id: str, kind: str = "manga") -> NoteRecord:
        if kind not in MANGA_KINDS:
            raise ValueError(f"Unsupported manga kind {kind!r}; expected one of {sorted(MANGA_KINDS)}")
        data = self._client.get_json(f"{API_BASE}/manga/{manga_id}")
        attributes = (data.get("data") or {}).get("attributes") or {}
        title = localized(attributes.get("title"))
        if not title:
            raise ItemNotFoundError(f"MangaDex returned no title for {manga_id}")

        year = attributes.get("year")
        return NoteRecord(
            title=title,
            slug=slugify(title, default=manga_id),
            kind=kind,
            date_field="year",
            date_value=str(year) if year else "",
            genres=tag_names(attributes.get("tags"), "genre"),
            themes=tag_names(attributes.get("tags"), "theme"),
            summary=localized(attributes.get("description")) or DEFAULT_SUMMARY,
            cover_url=self.fetch_cover_url(manga_id),
        )

    def fetch_cover_url(self, manga_id: str) -> Optional[str]:
        try:
            data = self._client.get_json(f"{API_BASE}/cover", params={"manga[]": manga_id})
        except ApiError as exc:
            logging.warning("Failed to fetch cover list for %s: %s", manga_id, exc)
            return None

        covers = data.get("data") or []
        if not covers:
            logging.info("No cover available for manga %s", manga_id)
            return None
        file_name = (covers[0].get("attributes") or {}).get("fileName")
        if not file_name:
            return None
        return f"{COVER_BASE}/{manga_id}/{file_name}"
