"""Writes rendered notes into the vault."""

from __future__ import annotations

import logging
import os

from ..utils.file_utils import write_text_file


class NoteWriter:
    def __init__(self, overwrite: bool = False) -> None:
        self.overwrite = overwrite

    def write(self, content: str, directory: str, slug: str) -> str:
        path = os.path.join(directory, f"{slug}.md")
        write_text_file(path, content, overwrite=self.overwrite)
        logging.info("Markdown file created at %s", path)
        return path
