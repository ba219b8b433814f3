"""
Payload sources a request can be targeted at. Exactly one per request.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class UrlPayload:
    """Remote image or PDF referenced by URL"""
    location: str


@dataclass(frozen=True)
class FilePayload:
    """Local file uploaded as a multipart attachment"""
    path: Path

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class InlinePayload:
    """Image or PDF content already encoded as base64"""
    base64_content: str


Payload = Union[UrlPayload, FilePayload, InlinePayload]
