from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional

from .api.auth_api import AuthAPI, AuthError, CachedTokenProvider
from .api.book_api import GoogleBooksAPI
from .api.errors import ItemNotFoundError
from .api.game_api import IGDBAPI
from .api.lightnovel_api import RanobeDBAPI
from .api.manga_api import MangaDexAPI
from .api.tmdb_api import TMDBAPI
from .config import ConfigError, Settings, load_settings
from .models import NoteRecord
from .notes import CoverDownloader, NoteWriter, render_note
from .utils.http_client import ApiError, AuthenticationError, HttpClient
from .utils.prompts import InputFunc, ask_choice, ask_confirm, ask_positive_int, ask_text, parse_positive_int
from .utils.token_cache import JsonFileTokenStore

MEDIA_TYPES = ["movie", "serie", "anime"]

Fetcher = Callable[[HttpClient], NoteRecord]


def _positive_int_arg(value: str) -> int:
    number = parse_positive_int(value)
    if number is None:
        raise argparse.ArgumentTypeError("ID must be a positive integer")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vault-notes",
        description="Create vault notes and covers from book, game, movie, manga and light-novel databases.",
    )
    parser.add_argument("--vault-root", help="Vault root directory (defaults to VAULT_ROOT or '..')")
    parser.add_argument("--token-cache", help="File used to persist the Twitch token between runs")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation before writing")
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing note with the same slug")
    parser.add_argument("--no-cover", action="store_true", help="Skip downloading the cover image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    book = subparsers.add_parser("book", help="Look up a book on Google Books by ISBN")
    book.add_argument("isbn", nargs="?", help="ISBN-10 or ISBN-13")

    game = subparsers.add_parser("game", help="Look up a game on IGDB")
    game.add_argument("game_id", nargs="?", type=_positive_int_arg, help="IGDB game id")

    media = subparsers.add_parser("media", help="Look up a movie, series or anime on TMDB")
    media.add_argument("media_id", nargs="?", type=_positive_int_arg, help="TMDB id")
    media.add_argument("--type", dest="media_type", choices=MEDIA_TYPES, help="Kind of media")

    manga = subparsers.add_parser("manga", help="Look up a manga on MangaDex")
    manga.add_argument("manga_id", nargs="?", help="MangaDex UUID")
    manga.add_argument("--manhwa", action="store_true", default=None, help="Tag the note as manhwa")

    lightnovel = subparsers.add_parser("lightnovel", help="Look up a light novel series on RanobeDB")
    lightnovel.add_argument("series_id", nargs="?", type=_positive_int_arg, help="RanobeDB series id")

    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.vault_root:
        updates["vault_root"] = args.vault_root
    if args.token_cache:
        updates["token_cache"] = args.token_cache
    return settings.model_copy(update=updates) if updates else settings


def build_fetcher(args: argparse.Namespace, settings: Settings, input_func: InputFunc) -> Fetcher:
    """Prompts for whatever the command line left out and returns the lookup to run."""

    if args.command == "book":
        isbn = args.isbn or ask_text("Please enter an ISBN-13:", input_func=input_func)
        return lambda client: GoogleBooksAPI(client).fetch_by_isbn(isbn)

    if args.command == "game":
        settings.require("client_id", "client_secret")
        game_id = args.game_id or ask_positive_int("Please enter an IGDB ID:", label="IGDB ID", input_func=input_func)
        store = JsonFileTokenStore(settings.token_cache)

        def fetch_game(client: HttpClient) -> NoteRecord:
            provider = CachedTokenProvider(AuthAPI(client, settings.client_id, settings.client_secret), store)
            try:
                return IGDBAPI(client, settings.client_id, provider).fetch_by_id(game_id)
            except AuthenticationError:
                # IGDB refused a token we believed valid; make the next run refresh it.
                store.clear()
                raise

        return fetch_game

    if args.command == "media":
        settings.require("tmdb_api_key")
        media_id = args.media_id or ask_positive_int("Please enter a TMDB ID:", label="TMDB ID", input_func=input_func)
        media_type = args.media_type or ask_choice(
            "Select media type", MEDIA_TYPES, default="movie", input_func=input_func
        )
        return lambda client: TMDBAPI(client, settings.tmdb_api_key).fetch(media_id, media_type)

    if args.command == "manga":
        manga_id = args.manga_id or ask_text("Please enter a MangaDex ID:", input_func=input_func)
        if args.manhwa is None:
            is_manga = ask_confirm("Is this a manga?", default=True, input_func=input_func)
        else:
            is_manga = not args.manhwa
        kind = "manga" if is_manga else "manhwa"
        return lambda client: MangaDexAPI(client).fetch_by_id(manga_id, kind)

    if args.command == "lightnovel":
        series_id = args.series_id or ask_positive_int(
            "Please enter a RanobeDB ID:", label="RanobeDB ID", input_func=input_func
        )
        return lambda client: RanobeDBAPI(client).fetch_by_id(series_id)

    raise ValueError(f"Unknown command {args.command}")


def create_note(
    record: NoteRecord,
    settings: Settings,
    http_client: HttpClient,
    overwrite: bool = False,
    download_cover: bool = True,
) -> str:
    """Writes the note, then downloads the cover (best effort); returns the note path."""

    content = render_note(record)
    path = NoteWriter(overwrite=overwrite).write(content, settings.note_directory(record.kind), record.slug)

    if download_cover and record.cover_url:
        CoverDownloader(http_client).download(record.cover_url, settings.cover_directory(record.kind), record.slug)
    elif not record.cover_url:
        logging.info("No cover to download for %s", record.title)
    return path


def run(args: argparse.Namespace, settings: Settings, input_func: InputFunc = input) -> int:
    try:
        fetch = build_fetcher(args, settings, input_func)
    except ConfigError as exc:
        logging.error("%s", exc)
        return 1

    with HttpClient(timeout=settings.timeout) as http_client:
        try:
            record = fetch(http_client)
        except AuthError as exc:
            logging.error("Authentication failed, check CLIENT_ID and CLIENT_SECRET: %s", exc)
            return 1
        except ItemNotFoundError as exc:
            logging.error("%s", exc)
            return 1
        except ApiError as exc:
            logging.error("Lookup failed: %s", exc)
            return 1
        except OSError as exc:
            logging.error("Could not persist token cache: %s", exc)
            return 1
        logging.info("Fetched %s %r", record.kind, record.title)

        if not args.yes and not ask_confirm(
            f'Do you want to add "{record.title}" to the database?', default=True, input_func=input_func
        ):
            logging.info("Nothing written.")
            return 0

        try:
            path = create_note(
                record,
                settings,
                http_client,
                overwrite=args.overwrite,
                download_cover=not args.no_cover,
            )
        except FileExistsError as exc:
            logging.error("Note already exists at %s; re-run with --overwrite to replace it", exc.filename)
            return 1
        except OSError as exc:
            logging.error("Error creating Markdown file: %s", exc)
            return 1

    logging.info("Done: %s", path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    settings = apply_overrides(load_settings(), args)
    return run(args, settings)


if __name__ == "__main__":
    sys.exit(main())
