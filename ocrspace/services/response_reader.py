"""
Helpers for reading the raw service response. The JSON itself is left to
the caller.
"""

from typing import Optional

import requests

from ocrspace.models.errors import ResponseError


def read_body(response: requests.Response) -> Optional[str]:
    """Response text, or None when the server sent no body"""
    if response is None:
        return None
    content = response.content
    if not content:
        return None
    return response.text


def require_body(response: requests.Response) -> str:
    """
    Response text for callers that treat an empty body as an error.

    Raises:
        ResponseError: if the body is missing or empty
    """
    body = read_body(response)
    if body is None:
        raise ResponseError(
            "Server returned empty body",
            details={"status_code": getattr(response, "status_code", None)},
        )
    return body
