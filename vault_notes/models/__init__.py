"""Data models for auth tokens and vault notes."""

from .auth_models import CachedToken, TokenResponse
from .note_models import DEFAULT_SUMMARY, NoteRecord

__all__ = ["CachedToken", "TokenResponse", "NoteRecord", "DEFAULT_SUMMARY"]
