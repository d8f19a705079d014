"""Note rendering, cover downloads and vault writes."""

from .cover_downloader import CoverDownloader
from .markdown import render_note
from .writer import NoteWriter

__all__ = ["CoverDownloader", "NoteWriter", "render_note"]
