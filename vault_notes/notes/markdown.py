"""Renders a ``NoteRecord`` into an Obsidian note with YAML front matter."""

from __future__ import annotations

from typing import Iterable, List

from ..models import NoteRecord
from ..utils.file_utils import slugify

TAG_INDENT = "    "


def _yaml_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def collect_tags(record: NoteRecord) -> List[str]:
    """Primary kind, then genres and themes, then the wishlist/watchlist tag."""

    raw: Iterable[str] = [record.kind, *record.genres, *record.themes, record.list_tag]
    tags: List[str] = []
    for tag in raw:
        value = slugify(tag) if record.slugify_tags else (tag or "").strip()
        if value and value not in tags:
            tags.append(value)
    return tags


def summary_callout(summary: str) -> str:
    lines = summary.splitlines() or [""]
    return "\n".join(f"> {line}".rstrip() for line in lines)


def render_note(record: NoteRecord) -> str:
    tag_lines = "\n".join(f"{TAG_INDENT}- {tag}" for tag in collect_tags(record))
    return (
        "---\n"
        f"title: {_yaml_string(record.title)}\n"
        "rating:\n"
        f"{record.date_field}: {_yaml_string(record.date_value)}\n"
        "tags:\n"
        f"{tag_lines}\n"
        f'cover: "[[{record.slug}.jpg]]"\n'
        "---\n"
        "> [!NOTE] Summary\n"
        f"{summary_callout(record.summary)}\n"
    )
