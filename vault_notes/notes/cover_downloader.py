"""Downloads cover art and stores it as ``<slug>.jpg`` in the vault."""

from __future__ import annotations

import io
import logging
import os
from typing import Optional

from PIL import Image, UnidentifiedImageError

from ..utils.file_utils import ensure_directory, write_binary_file
from ..utils.http_client import ApiError, HttpClient

JPEG_QUALITY = 95


def to_jpeg(payload: bytes) -> bytes:
    """Re-encodes non-JPEG images (PNG/WebP covers) so the ``.jpg`` name is honest."""

    with Image.open(io.BytesIO(payload)) as image:
        if image.format == "JPEG":
            return payload
        if image.mode not in ("RGB", "L"):
            image = image.convert("RGB")
        buffer = io.BytesIO()
        image.save(buffer, "JPEG", quality=JPEG_QUALITY)
        return buffer.getvalue()


class CoverDownloader:
    """Fetches a cover image; failures are logged and never abort the note."""

    def __init__(self, http_client: HttpClient) -> None:
        self._http_client = http_client

    def download(self, url: str, directory: str, slug: str) -> Optional[str]:
        ensure_directory(directory)
        output_file = os.path.join(directory, f"{slug}.jpg")
        try:
            payload = self._http_client.download_bytes(url)
        except ApiError as exc:
            logging.error("Error downloading cover from %s: %s", url, exc)
            return None

        try:
            payload = to_jpeg(payload)
        except (UnidentifiedImageError, OSError) as exc:
            logging.error("Cover from %s is not a readable image: %s", url, exc)
            return None

        write_binary_file(output_file, payload)
        logging.info("Image saved to %s", output_file)
        return output_file
