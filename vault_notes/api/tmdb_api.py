"""TMDB lookups for movies and TV shows (series and anime)."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..models import DEFAULT_SUMMARY, NoteRecord
from ..utils.file_utils import slugify
from ..utils.http_client import HttpClient
from .errors import ItemNotFoundError

API_BASE = "https://api.themoviedb.org/3"
POSTER_BASE = "https://image.tmdb.org/t/p/original"
TV_KINDS = {"serie", "anime"}


class TMDBAPI:
    """Wraps the ``/movie/{id}`` and ``/tv/{id}`` endpoints."""

    def __init__(self, http_client: HttpClient, api_key: str, language: str = "en-US") -> None:
        self._client = http_client
        self._headers = {"Authorization": f"Bearer {api_key}", "accept": "application/json"}
        self.language = language

    def fetch_movie(self, movie_id: int) -> NoteRecord:
        data = self._get(f"movie/{int(movie_id)}")
        return self._to_record(data, data.get("title"), data.get("release_date"), kind="movie")

    def fetch_tv(self, tv_id: int, kind: str = "serie") -> NoteRecord:
        if kind not in TV_KINDS:
            raise ValueError(f"Unsupported TV kind {kind!r}; expected one of {sorted(TV_KINDS)}")
        data = self._get(f"tv/{int(tv_id)}")
        return self._to_record(data, data.get("name"), data.get("first_air_date"), kind=kind)

    def fetch(self, media_id: int, kind: str) -> NoteRecord:
        if kind == "movie":
            return self.fetch_movie(media_id)
        return self.fetch_tv(media_id, kind)

    def _get(self, path: str) -> Dict[str, Any]:
        return self._client.get_json(f"{API_BASE}/{path}", params={"language": self.language}, headers=self._headers)

    @staticmethod
    def _to_record(data: Dict[str, Any], title: str, date_value: str, kind: str) -> NoteRecord:
        if not title:
            raise ItemNotFoundError(f"TMDB returned a {kind} without a title")
        poster_path = data.get("poster_path")
        cover_url = f"{POSTER_BASE}{poster_path}" if poster_path else None
        if not cover_url:
            logging.info("No poster found for %s", title)
        return NoteRecord(
            title=title,
            slug=slugify(title, default=str(data.get("id") or kind)),
            kind=kind,
            date_field="release_date",
            date_value=date_value or "",
            genres=[genre.get("name") for genre in data.get("genres") or [] if genre.get("name")],
            summary=data.get("overview") or DEFAULT_SUMMARY,
            cover_url=cover_url,
            list_tag="watchlist",
        )
