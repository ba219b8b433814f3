"""
Error codes and exceptions for building and sending OCR requests
"""

from enum import Enum
from typing import Dict, Any, Optional


class ErrorCode(Enum):
    """Standard error codes for the request builder"""

    # Target input errors
    INVALID_TARGET = "INVALID_TARGET"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    EMPTY_CONTENT = "EMPTY_CONTENT"

    # Image errors
    IMAGE_ENCODING_FAILED = "IMAGE_ENCODING_FAILED"

    # Execution errors
    TRANSPORT_FAILED = "TRANSPORT_FAILED"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"

    # Configuration errors
    INVALID_ENDPOINT = "INVALID_ENDPOINT"
    INVALID_SETTINGS = "INVALID_SETTINGS"


# Error messages mapping
ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.INVALID_TARGET: "The request target is missing or of an unsupported type",
    ErrorCode.INVALID_PARAMETER: "An option was given a value of the wrong type",
    ErrorCode.FILE_NOT_FOUND: "The provided file is missing or does not exist",
    ErrorCode.EMPTY_CONTENT: "The base64 content is empty or missing",

    ErrorCode.IMAGE_ENCODING_FAILED: "Failed to encode the image to PNG",

    ErrorCode.TRANSPORT_FAILED: "The HTTP request to the OCR endpoint failed",
    ErrorCode.EMPTY_RESPONSE: "The server returned an empty body",

    ErrorCode.INVALID_ENDPOINT: "The endpoint must be an absolute http(s) URL",
    ErrorCode.INVALID_SETTINGS: "The client settings are invalid",
}


class OcrSpaceError(Exception):
    """
    Base exception for all request builder errors
    """

    default_code: ErrorCode = ErrorCode.INVALID_TARGET

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code or self.default_code
        self.message = message or ERROR_MESSAGES.get(self.error_code, "An error occurred")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and CLI output"""
        return {
            "error_code": self.error_code.value,
            "error": self.message,
            "details": self.details
        }


class ValidationError(OcrSpaceError):
    """Bad target input or an option value of the wrong type"""
    default_code = ErrorCode.INVALID_TARGET


class EncodingError(OcrSpaceError):
    """Raster image could not be re-encoded"""
    default_code = ErrorCode.IMAGE_ENCODING_FAILED


class TransportError(OcrSpaceError):
    """Connection or I/O failure while executing a request"""
    default_code = ErrorCode.TRANSPORT_FAILED


class ResponseError(OcrSpaceError):
    """Missing or empty body observed after execution"""
    default_code = ErrorCode.EMPTY_RESPONSE


class ConfigurationError(OcrSpaceError):
    """Malformed endpoint or settings, raised at configuration time"""
    default_code = ErrorCode.INVALID_ENDPOINT
