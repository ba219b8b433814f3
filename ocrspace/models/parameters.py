"""
Optional recognition parameters configured before a request is targeted
"""

import os
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import requests
from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic import ValidationError as PydanticValidationError

from ocrspace.core.config import DEFAULT_ENDPOINT
from ocrspace.core.converters.image_encoder import ImageEncoder
from ocrspace.core.validators.payload_validator import PayloadValidator
from ocrspace.models.errors import ErrorCode, ValidationError
from ocrspace.models.payloads import FilePayload, InlinePayload, UrlPayload
from ocrspace.services.targeted_request import TargetedRequest

# Attributes serialized as form fields, in the order they are appended
OPTION_FIELDS = (
    "language",
    "overlay_required",
    "filetype",
    "detect_orientation",
    "create_searchable_pdf",
    "searchable_pdf_hide_text_layer",
    "scale",
    "table",
    "ocr_engine",
)


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ParameterSet(BaseModel):
    """
    Mutable builder holding the OCR options for one client session.

    Every ``set_*`` method returns the same instance so calls can be chained.
    No setter checks OCR semantics; unset options (``None``) are never sent.

    Requests targeted from this set keep a reference to it and read the
    options when they are serialized. Changing an option after targeting
    affects requests that have not been sent yet, and concurrent mutation is
    last-writer-wins per field. Use one set per request, or ``copy()``, when
    requests must not see later changes.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    # Bindings captured from the client
    api_key: str = Field(default="", repr=False, exclude=True)
    endpoint: str = Field(default=DEFAULT_ENDPOINT, exclude=True)
    transport: Any = Field(default_factory=requests.Session, repr=False, exclude=True)
    timeout: Optional[float] = Field(default=None, exclude=True)
    executor: Optional[Executor] = Field(default=None, repr=False, exclude=True)

    # OCR options
    language: Optional[str] = Field(default=None, alias="language")
    overlay_required: Optional[StrictBool] = Field(default=None, alias="isOverlayRequired")
    filetype: Optional[str] = Field(default=None, alias="filetype")
    detect_orientation: Optional[StrictBool] = Field(default=None, alias="detectOrientation")
    create_searchable_pdf: Optional[StrictBool] = Field(default=None, alias="isCreateSearchablePdf")
    searchable_pdf_hide_text_layer: Optional[StrictBool] = Field(
        default=None, alias="isSearchablePdfHideTextLayer"
    )
    scale: Optional[StrictBool] = Field(default=None, alias="scale")
    table: Optional[StrictBool] = Field(default=None, alias="isTable")
    ocr_engine: Optional[str] = Field(default=None, alias="OCREngine")

    @field_validator("language", "filetype", "ocr_engine", mode="before")
    def stringify_text(cls, v):
        # Free text on the wire, e.g. numeric engine ids
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def _assign(self, name: str, value: Any) -> "ParameterSet":
        try:
            setattr(self, name, value)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid value for {name}: {value!r}",
                error_code=ErrorCode.INVALID_PARAMETER,
                details={"field": name, "value": repr(value)},
            ) from e
        return self

    # -- fluent setters --------------------------------------------------

    def set_language(self, language: Optional[str]) -> "ParameterSet":
        """Language used by the OCR engine, e.g. ``eng`` or ``auto``"""
        return self._assign("language", language)

    def set_overlay_required(self, overlay_required: Optional[bool]) -> "ParameterSet":
        """Return word bounding boxes instead of a single text block"""
        return self._assign("overlay_required", overlay_required)

    def set_filetype(self, filetype: Optional[str]) -> "ParameterSet":
        """Override file type detection (PDF, GIF, PNG, JPG, TIF, BMP)"""
        return self._assign("filetype", filetype)

    def set_detect_orientation(self, detect_orientation: Optional[bool]) -> "ParameterSet":
        return self._assign("detect_orientation", detect_orientation)

    def set_create_searchable_pdf(self, create_searchable_pdf: Optional[bool]) -> "ParameterSet":
        """Ask the service to generate a searchable PDF.

        The service itself turns on overlays when this is set; nothing is
        changed on this side.
        """
        return self._assign("create_searchable_pdf", create_searchable_pdf)

    def set_searchable_pdf_hide_text_layer(self, hide: Optional[bool]) -> "ParameterSet":
        return self._assign("searchable_pdf_hide_text_layer", hide)

    def set_scale(self, scale: Optional[bool]) -> "ParameterSet":
        """Internal upscaling, helps with low resolution scans"""
        return self._assign("scale", scale)

    def set_table(self, table: Optional[bool]) -> "ParameterSet":
        """Return parsed text line by line, for receipts and tables"""
        return self._assign("table", table)

    def set_ocr_engine(self, ocr_engine: Optional[Union[str, int]]) -> "ParameterSet":
        return self._assign("ocr_engine", ocr_engine)

    # -- serialization ---------------------------------------------------

    def form_fields(self) -> List[Tuple[str, str]]:
        """(form name, string value) for every option currently set"""
        values = self.model_dump(by_alias=True, exclude_none=True, include=set(OPTION_FIELDS))
        fields = []
        for attr in OPTION_FIELDS:
            alias = type(self).model_fields[attr].alias
            if alias in values:
                fields.append((alias, _form_value(values[alias])))
        return fields

    def copy(self) -> "ParameterSet":
        """Independent set with the same options and bindings"""
        return self.model_copy()

    # -- targeting ---------------------------------------------------------

    def target_url(self, location) -> TargetedRequest:
        """Remote image or PDF; the URL must serve the right content type"""
        location = PayloadValidator().validate_url(location)
        return TargetedRequest(self, UrlPayload(location))

    def target_file(self, path: Optional[Union[str, os.PathLike]]) -> TargetedRequest:
        """Local image or PDF uploaded as a multipart file.

        Raises:
            ValidationError: if the path is None or not an existing file
        """
        file_path = PayloadValidator().validate_file(path)
        return TargetedRequest(self, FilePayload(file_path))

    def target_base64(self, content: Optional[str]) -> TargetedRequest:
        """Image or PDF already encoded as a base64 string.

        Raises:
            ValidationError: if the content is None or empty
        """
        content = PayloadValidator().validate_base64(content)
        return TargetedRequest(self, InlinePayload(content))

    def target_image(self, image: Optional[Image.Image]) -> TargetedRequest:
        """In-memory image, sent as base64 PNG.

        Raises:
            ValidationError: if the image is None
            EncodingError: if PNG encoding fails
        """
        return self.target_base64(ImageEncoder().to_base64(image))

    def target(self, value) -> TargetedRequest:
        """
        Dispatch on the type of ``value``:

        - ``pathlib.Path`` / ``os.PathLike``: local file
        - PIL ``Image``: in-memory image
        - ``str`` starting with ``http://`` or ``https://``: remote URL
        - any other ``str``: base64 content
        """
        if value is None:
            raise ValidationError(
                "Target cannot be None",
                error_code=ErrorCode.INVALID_TARGET,
            )
        if isinstance(value, Image.Image):
            return self.target_image(value)
        if isinstance(value, (Path, os.PathLike)):
            return self.target_file(value)
        if isinstance(value, str):
            if value.lower().startswith(("http://", "https://")):
                return self.target_url(value)
            return self.target_base64(value)
        raise ValidationError(
            f"Unsupported target type: {type(value).__name__}",
            error_code=ErrorCode.INVALID_TARGET,
        )
