"""Utility helpers for HTTP, token caching, prompts and filesystem operations."""

from .file_utils import ensure_directory, slugify, write_binary_file, write_text_file
from .http_client import ApiError, AuthenticationError, HttpClient, NotFoundError, RateLimitError
from .token_cache import JsonFileTokenStore, MemoryTokenStore, TokenStore

__all__ = [
    "HttpClient",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "TokenStore",
    "JsonFileTokenStore",
    "MemoryTokenStore",
    "ensure_directory",
    "slugify",
    "write_text_file",
    "write_binary_file",
]
