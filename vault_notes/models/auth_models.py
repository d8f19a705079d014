"""Models related to the OAuth client-credentials flow."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """Body returned by the client-credentials token endpoint."""

    access_token: str = Field(min_length=1)
    expires_in: int = Field(gt=0)
    token_type: Optional[str] = None


class CachedToken(BaseModel):
    """A bearer token together with its absolute expiry (seconds since epoch)."""

    access_token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return self.expires_at > now
