"""EXIF helpers for image files (Pillow)."""

from __future__ import annotations

import io
from typing import Any

from PIL import Image
from PIL.ExifTags import GPSTAGS, TAGS

_GPS_IFD = 0x8825
_JPEG_MARKER = b"\xff\xd8"


def is_jpeg(payload: bytes) -> bool:
    return len(payload) > 2 and payload[:2] == _JPEG_MARKER


def read_exif(payload: bytes) -> dict[str, Any]:
    """Return named EXIF tags, with GPS fields under ``"gps"``.

    Raises whatever Pillow raises for unreadable images.
    """
    with Image.open(io.BytesIO(payload)) as image:
        exif = image.getexif()
        gps_ifd = exif.get_ifd(_GPS_IFD)
        tags = {TAGS.get(tag, tag): value for tag, value in exif.items() if tag != _GPS_IFD}
    tags["gps"] = {GPSTAGS.get(tag, tag): value for tag, value in gps_ifd.items()}
    return tags
