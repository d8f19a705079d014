from vault_notes.models import NoteRecord
from vault_notes.notes.markdown import collect_tags, render_note


def test_render_book_note():
    record = NoteRecord(
        title="Dune",
        slug="dune",
        kind="book",
        date_value="1965",
        genres=["Fiction", "Science Fiction"],
        summary="Arrakis.\nThe spice must flow.",
    )

    assert render_note(record) == (
        "---\n"
        'title: "Dune"\n'
        "rating:\n"
        'year: "1965"\n'
        "tags:\n"
        "    - book\n"
        "    - fiction\n"
        "    - science-fiction\n"
        "    - wishlist\n"
        'cover: "[[dune.jpg]]"\n'
        "---\n"
        "> [!NOTE] Summary\n"
        "> Arrakis.\n"
        "> The spice must flow.\n"
    )


def test_game_tags_are_used_verbatim():
    record = NoteRecord(
        title="Hades",
        slug="hades",
        kind="game",
        date_field="release_date",
        date_value="2020-09-17",
        genres=["role-playing-rpg", "indie"],
        themes=["action"],
        slugify_tags=False,
    )

    note = render_note(record)

    assert 'release_date: "2020-09-17"' in note
    assert "    - role-playing-rpg\n    - indie\n    - action\n    - wishlist\n" in note


def test_collect_tags_slugifies_and_deduplicates():
    record = NoteRecord(
        title="x",
        slug="x",
        kind="anime",
        genres=["Action & Adventure", "Animation", "", "animation"],
        themes=["Action & Adventure"],
        list_tag="watchlist",
    )

    assert collect_tags(record) == ["anime", "action-adventure", "animation", "watchlist"]


def test_quotes_in_title_are_escaped():
    record = NoteRecord(title='The "Best" Book', slug="the-best-book", kind="book")

    assert 'title: "The \\"Best\\" Book"' in render_note(record)


def test_blank_summary_lines_stay_inside_callout():
    record = NoteRecord(title="x", slug="x", kind="book", summary="First.\n\nSecond.")

    assert render_note(record).endswith("> First.\n>\n> Second.\n")
