"""
Test utility functions for request builder tests
"""

import io
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests


@dataclass
class FormPart:
    """One decoded multipart/form-data part"""
    name: str
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("utf-8")


def make_response(
    status_code: int = 200,
    content: bytes = b'{"ParsedResults": [], "IsErroredOnProcessing": false}',
    url: str = "https://api.ocr.space/parse/image",
) -> requests.Response:
    """
    Build a real requests.Response without a network round trip

    Args:
        status_code: HTTP status
        content: Raw body bytes
        url: URL reported by the response

    Returns:
        Response that can be read and closed
    """
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.raw = io.BytesIO(content)
    response.encoding = "utf-8"
    response.url = url
    response.headers["Content-Type"] = "application/json"
    return response


def parse_multipart(prepared: requests.PreparedRequest) -> List[FormPart]:
    """
    Split a prepared multipart/form-data body into its parts

    Args:
        prepared: Request produced by TargetedRequest.prepare()

    Returns:
        Parts in body order
    """
    content_type = prepared.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data")
    boundary = content_type.split("boundary=", 1)[1].encode("ascii")

    parts = []
    for chunk in prepared.body.split(b"--" + boundary)[1:-1]:
        # Each chunk is "\r\n<headers>\r\n\r\n<data>\r\n"
        raw_headers, data = chunk[2:-2].split(b"\r\n\r\n", 1)
        headers = raw_headers.decode("utf-8")

        name = re.search(r'; name="([^"]*)"', headers).group(1)
        filename_match = re.search(r'filename="([^"]*)"', headers)
        type_match = re.search(r"Content-Type: (\S+)", headers)

        parts.append(FormPart(
            name=name,
            filename=filename_match.group(1) if filename_match else None,
            content_type=type_match.group(1) if type_match else None,
            data=data,
        ))
    return parts


def form_values(prepared: requests.PreparedRequest) -> Dict[str, str]:
    """Text parts of a multipart body as a name -> value mapping"""
    return {
        part.name: part.text
        for part in parse_multipart(prepared)
        if part.filename is None
    }


def part_names(prepared: requests.PreparedRequest) -> List[str]:
    """Part names in body order, duplicates kept"""
    return [part.name for part in parse_multipart(prepared)]
