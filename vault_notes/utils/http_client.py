"""Shared HTTP helpers for the metadata APIs and their image CDNs."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

USER_AGENT = "vault-notes/0.1"

DEFAULT_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "application/json",
}

IMAGE_HEADERS: Dict[str, str] = {
    "user-agent": USER_AGENT,
    "accept": "image/*,*/*;q=0.8",
}


class ApiError(Exception):
    """Raised when an upstream API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class AuthenticationError(ApiError):
    """Raised when an API rejects our credentials (401/403)."""


class NotFoundError(ApiError):
    """Raised when the requested resource does not exist (404)."""


class RateLimitError(ApiError):
    """Raised when the API asks us to slow down (429)."""


def _upstream_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "status_message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason or "request failed"


def _error_for_response(method: str, url: str, response: requests.Response) -> ApiError:
    message = f"{method} {url}: {_upstream_message(response)}"
    if response.status_code in {401, 403}:
        return AuthenticationError(message, response.status_code)
    if response.status_code == 404:
        return NotFoundError(message, response.status_code)
    if response.status_code == 429:
        return RateLimitError(message, response.status_code)
    return ApiError(message, response.status_code)


class HttpClient:
    """Thin wrapper over a ``requests.Session`` with uniform error handling."""

    def __init__(self, timeout: int = 10, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        if headers:
            self._session.headers.update(headers)

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        response = self._send("GET", url, params=params, headers=headers)
        return self._decode_json(response, url)

    def post_json(
        self,
        url: str,
        data: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST form fields or a raw body and decode the JSON answer."""

        response = self._send("POST", url, data=data, params=params, headers=headers)
        return self._decode_json(response, url)

    def download_bytes(self, url: str) -> bytes:
        """Download a binary resource (cover image) into memory."""

        response = self._send("GET", url, headers=IMAGE_HEADERS)
        return response.content

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logging.error("HTTP %s to %s failed: %s", method, url, exc)
            raise ApiError(f"Network error while calling {url}: {exc}") from exc

        if not response.ok:
            error = _error_for_response(method, url, response)
            logging.error("%s", error)
            raise error
        return response

    @staticmethod
    def _decode_json(response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logging.error("Response from %s is not valid JSON", url)
            raise ApiError(f"Malformed JSON from {url}", response.status_code) from exc

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
