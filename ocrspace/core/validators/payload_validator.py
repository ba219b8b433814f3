"""
Validation of request targets and endpoint configuration
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from ocrspace.core.config import is_valid_endpoint
from ocrspace.models.errors import (
    ConfigurationError,
    ErrorCode,
    ValidationError,
)

logger = logging.getLogger(__name__)


class PayloadValidator:
    """
    Checks target inputs before a request is built.
    Failures raise immediately so nothing reaches the network.
    """

    def validate_file(self, path: Optional[Union[str, os.PathLike]]) -> Path:
        """Return the path if it references an existing regular file"""
        if path is None:
            raise ValidationError(
                "File target cannot be None",
                error_code=ErrorCode.FILE_NOT_FOUND,
            )

        file_path = Path(path)
        if not file_path.is_file():
            logger.warning(f"Rejected file target, not an existing file: {file_path}")
            raise ValidationError(
                f"File is missing or does not exist: {file_path}",
                error_code=ErrorCode.FILE_NOT_FOUND,
                details={"path": str(file_path)},
            )
        return file_path

    def validate_base64(self, content: Optional[str]) -> str:
        """Return the content if it is a non-empty string"""
        if content is None or content == "":
            raise ValidationError(
                "Base64 content is empty or None",
                error_code=ErrorCode.EMPTY_CONTENT,
            )
        if not isinstance(content, str):
            raise ValidationError(
                f"Base64 content must be a string, got {type(content).__name__}",
                error_code=ErrorCode.INVALID_TARGET,
            )
        return content

    def validate_url(self, location) -> str:
        """Return the URI as a string; the remote side judges its content"""
        if location is None:
            raise ValidationError(
                "URL target cannot be None",
                error_code=ErrorCode.INVALID_TARGET,
            )
        location = str(location)
        if not location:
            raise ValidationError(
                "URL target cannot be empty",
                error_code=ErrorCode.INVALID_TARGET,
            )
        return location


def validate_endpoint(endpoint) -> str:
    """
    Parse an endpoint URL for the client.

    Raises:
        ConfigurationError: when the value is not an absolute http(s) URL
    """
    endpoint = str(endpoint) if endpoint is not None else ""
    if not is_valid_endpoint(endpoint):
        raise ConfigurationError(
            f"Malformed endpoint URL: {endpoint!r}",
            error_code=ErrorCode.INVALID_ENDPOINT,
            details={"endpoint": endpoint},
        )
    return endpoint.strip()
