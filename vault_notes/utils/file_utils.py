"""Filesystem helpers for preparing vault folders and note filenames."""

from __future__ import annotations

import os
import re
from pathlib import Path

NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str, default: str = "") -> str:
    """Lower-cases ``value`` and collapses everything outside ``[a-z0-9]`` to ``-``."""

    slug = NON_SLUG_CHARS.sub("-", (value or "").lower()).strip("-")
    return slug or default


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def write_text_file(path: str, content: str, overwrite: bool = False) -> str:
    """Writes UTF-8 text to ``path``, refusing to clobber unless ``overwrite``."""

    ensure_directory(os.path.dirname(os.path.abspath(path)) or ".")
    mode = "w" if overwrite else "x"
    with open(path, mode, encoding="utf-8") as handle:
        handle.write(content)
    return path


def write_binary_file(path: str, payload: bytes) -> str:
    ensure_directory(os.path.dirname(os.path.abspath(path)) or ".")
    with open(path, "wb") as handle:
        handle.write(payload)
    return path
