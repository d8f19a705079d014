"""API layer for the token flow and each metadata source."""

from .auth_api import AuthAPI, AuthError, CachedTokenProvider
from .book_api import GoogleBooksAPI
from .errors import ItemNotFoundError
from .game_api import IGDBAPI
from .lightnovel_api import RanobeDBAPI
from .manga_api import MangaDexAPI
from .tmdb_api import TMDBAPI

__all__ = [
    "AuthAPI",
    "AuthError",
    "CachedTokenProvider",
    "GoogleBooksAPI",
    "IGDBAPI",
    "TMDBAPI",
    "MangaDexAPI",
    "RanobeDBAPI",
    "ItemNotFoundError",
]
