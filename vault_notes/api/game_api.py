"""IGDB game lookup, authenticated through the cached Twitch token."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..models import DEFAULT_SUMMARY, NoteRecord
from ..utils.http_client import HttpClient
from .auth_api import CachedTokenProvider
from .errors import ItemNotFoundError

GAMES_URL = "https://api.igdb.com/v4/games"
GAME_FIELDS = "name, slug, genres.slug, themes.slug, first_release_date, cover.url, summary"


def format_release_date(timestamp: Optional[int]) -> str:
    """IGDB dates are unix seconds; notes want ``YYYY-MM-DD`` in local time."""

    if timestamp is None:
        return ""
    return datetime.fromtimestamp(int(timestamp)).strftime("%Y-%m-%d")


def original_cover_url(thumb_url: Optional[str]) -> Optional[str]:
    if not thumb_url:
        return None
    url = thumb_url.replace("t_thumb", "t_original")
    if url.startswith("//"):
        url = f"https:{url}"
    return url


def _slugs(entries: Optional[List[Dict[str, Any]]]) -> List[str]:
    slugs = [entry.get("slug") for entry in entries or [] if entry.get("slug")]
    return slugs or ["unknown"]


class IGDBAPI:
    """Queries the IGDB v4 games endpoint with an Apicalypse body."""

    def __init__(self, http_client: HttpClient, client_id: str, token_provider: CachedTokenProvider) -> None:
        self._client = http_client
        self.client_id = client_id
        self._token_provider = token_provider

    def fetch_by_id(self, game_id: int) -> NoteRecord:
        token = self._token_provider.get_token()
        headers = {
            "Client-ID": self.client_id,
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        body = f"fields {GAME_FIELDS}; where id = {int(game_id)};"
        data = self._client.post_json(GAMES_URL, data=body, headers=headers)
        if not isinstance(data, list) or not data:
            raise ItemNotFoundError(f"No game found with IGDB id {game_id}")

        game = data[0]
        title = game.get("name")
        if not title:
            raise ItemNotFoundError(f"IGDB returned a game without a name for id {game_id}")
        cover = original_cover_url((game.get("cover") or {}).get("url"))
        if not cover:
            logging.info("IGDB has no cover for %s", title)
        return NoteRecord(
            title=title,
            slug=game.get("slug") or str(game_id),
            kind="game",
            date_field="release_date",
            date_value=format_release_date(game.get("first_release_date")),
            genres=_slugs(game.get("genres")),
            themes=_slugs(game.get("themes")),
            summary=game.get("summary") or DEFAULT_SUMMARY,
            cover_url=cover,
            slugify_tags=False,
        )
