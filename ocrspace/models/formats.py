"""
Upload content types for file payloads
"""

from typing import Dict
from pathlib import PurePath


DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Extension (lowercase, with dot) -> content type sent with the `file` part
MEDIA_TYPES: Dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".pdf": "application/pdf",
}


def guess_media_type(filename) -> str:
    """Content type from the file extension, octet-stream when unknown"""
    suffix = PurePath(str(filename)).suffix.lower()
    return MEDIA_TYPES.get(suffix, DEFAULT_MEDIA_TYPE)
