"""Twitch OAuth client-credentials flow and the cached token provider used for IGDB."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from ..models import CachedToken, TokenResponse
from ..utils.http_client import ApiError, HttpClient
from ..utils.token_cache import TokenStore

TOKEN_URL = "https://id.twitch.tv/oauth2/token"


class AuthError(Exception):
    """Raised when the client-credentials exchange does not yield a token."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class AuthAPI:
    """Exchanges a client id/secret for a fresh bearer token."""

    def __init__(self, http_client: HttpClient, client_id: str, client_secret: str, token_url: str = TOKEN_URL) -> None:
        self._client = http_client
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url

    def fetch_new_token(self) -> TokenResponse:
        form = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "client_credentials",
        }
        try:
            data = self._client.post_json(self.token_url, data=form)
        except ApiError as exc:
            raise AuthError(f"Token exchange failed: {exc.message}", exc.status_code) from exc

        try:
            return TokenResponse.model_validate(data)
        except ValidationError as exc:
            logging.error("Token endpoint returned an unexpected body: %s", data)
            raise AuthError("Token endpoint response is missing access_token/expires_in") from exc


class CachedTokenProvider:
    """Hands out a bearer token, reusing the stored one until it expires.

    The store is read on every call and only written after a successful
    exchange, so a failed refresh never leaves an expired token looking valid.
    """

    def __init__(
        self,
        auth_api: AuthAPI,
        store: TokenStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._auth_api = auth_api
        self._store = store
        self._clock = clock

    def get_token(self) -> str:
        now = self._clock()
        cached = self._store.load()
        if cached and cached.is_valid(now):
            logging.debug("Using cached access token (expires at %s)", cached.expires_at)
            return cached.access_token

        logging.info("Requesting a new access token from %s", self._auth_api.token_url)
        response = self._auth_api.fetch_new_token()
        token = CachedToken(
            access_token=response.access_token,
            expires_at=self._clock() + response.expires_in,
        )
        self._store.save(token)
        return token.access_token
