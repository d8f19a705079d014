"""Stores for persisting bearer tokens between runs."""

from __future__ import annotations

import json
import logging
import math
import os
from abc import ABC, abstractmethod
from typing import Optional

from ..models import CachedToken

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
DEFAULT_CACHE_PATH = os.path.join(PROJECT_ROOT, ".cache", "twitch_token.json")


class TokenStore(ABC):
    """Interface used by the token provider to read and write its cache."""

    @abstractmethod
    def load(self) -> Optional[CachedToken]: ...

    @abstractmethod
    def save(self, token: CachedToken) -> None: ...


class MemoryTokenStore(TokenStore):
    """Keeps the token in memory; handy for tests and one-shot runs."""

    def __init__(self, token: Optional[CachedToken] = None) -> None:
        self.token = token
        self.saves = 0

    def load(self) -> Optional[CachedToken]:
        return self.token

    def save(self, token: CachedToken) -> None:
        self.token = token
        self.saves += 1


class JsonFileTokenStore(TokenStore):
    """Persists ``{"access_token", "expires_at"}`` to a JSON file."""

    def __init__(self, path: str = DEFAULT_CACHE_PATH) -> None:
        self.path = path

    def load(self) -> Optional[CachedToken]:
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except FileNotFoundError:
            return None
        except (json.JSONDecodeError, OSError) as exc:
            logging.warning("Failed to read token cache %s: %s", self.path, exc)
            return None

        if not isinstance(data, dict):
            logging.warning("Ignoring token cache %s: unexpected content", self.path)
            return None

        # A missing or non-numeric expiry means the record counts as expired.
        expires_at = data.get("expires_at")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)) or not math.isfinite(expires_at):
            logging.debug("Token cache %s has no usable expires_at", self.path)
            return None
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            logging.debug("Token cache %s has no usable access_token", self.path)
            return None
        return CachedToken(access_token=access_token, expires_at=expires_at)

    def save(self, token: CachedToken) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump({"access_token": token.access_token, "expires_at": token.expires_at}, handle, indent=4)
        logging.debug("Saved access token cache to %s", self.path)

    def clear(self) -> None:
        try:
            if os.path.exists(self.path):
                os.remove(self.path)
                logging.info("Cleared cached token %s", self.path)
        except OSError as exc:  # pragma: no cover
            logging.warning("Failed to remove token cache %s: %s", self.path, exc)
