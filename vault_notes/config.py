"""Settings read from the environment (and ``.env``) plus the vault folder layout."""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

from .utils.token_cache import DEFAULT_CACHE_PATH

# kind -> (notes folder, covers folder), relative to the vault root
VAULT_LAYOUT: Dict[str, Tuple[str, str]] = {
    "book": ("Library/Books", "Attachments/book_covers"),
    "game": ("Library/Games", "Attachments/game_covers"),
    "movie": ("Library/Movies", "Attachments/movie_covers"),
    "serie": ("Library/Series", "Attachments/serie_covers"),
    "anime": ("Library/Animes", "Attachments/anime_covers"),
    "manga": ("Manga", "Attachments/manga_covers"),
    "manhwa": ("Manga", "Attachments/manga_covers"),
    "lightnovel": ("Light_Novels", "Attachments/ln_covers"),
}


class ConfigError(Exception):
    """Raised when a command needs a setting that was not provided."""


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class Settings(BaseModel):
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    tmdb_api_key: Optional[str] = None
    vault_root: str = ".."
    token_cache: str = DEFAULT_CACHE_PATH
    timeout: int = 10

    def require(self, *names: str) -> None:
        missing = [name.upper() for name in names if not getattr(self, name)]
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")

    def note_directory(self, kind: str) -> str:
        return os.path.join(self.vault_root, VAULT_LAYOUT[kind][0])

    def cover_directory(self, kind: str) -> str:
        return os.path.join(self.vault_root, VAULT_LAYOUT[kind][1])


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Loads ``.env`` (or ``VAULT_NOTES_ENV``) then builds ``Settings`` from the environment."""

    load_dotenv(env_file or _env_str("VAULT_NOTES_ENV") or find_dotenv(usecwd=True))
    token_cache = _env_str("TOKEN_CACHE")
    return Settings(
        client_id=_env_str("CLIENT_ID"),
        client_secret=_env_str("CLIENT_SECRET"),
        tmdb_api_key=_env_str("TMDB_API_KEY"),
        vault_root=_env_str("VAULT_ROOT") or "..",
        token_cache=os.path.expanduser(token_cache) if token_cache else DEFAULT_CACHE_PATH,
        timeout=_env_int("HTTP_TIMEOUT") or 10,
    )
