"""Request builder for the OCR.space image parse API."""

from ocrspace.core.config import DEFAULT_ENDPOINT, Settings
from ocrspace.models.errors import (
    ConfigurationError,
    EncodingError,
    ErrorCode,
    OcrSpaceError,
    ResponseError,
    TransportError,
    ValidationError,
)
from ocrspace.models.parameters import ParameterSet
from ocrspace.models.payloads import FilePayload, InlinePayload, UrlPayload
from ocrspace.services.client import OcrSpaceClient
from ocrspace.services.response_reader import read_body, require_body
from ocrspace.services.targeted_request import TargetedRequest

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ENDPOINT",
    "Settings",
    "OcrSpaceClient",
    "ParameterSet",
    "TargetedRequest",
    "UrlPayload",
    "FilePayload",
    "InlinePayload",
    "read_body",
    "require_body",
    "ErrorCode",
    "OcrSpaceError",
    "ValidationError",
    "EncodingError",
    "TransportError",
    "ResponseError",
    "ConfigurationError",
]
