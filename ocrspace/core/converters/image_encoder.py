"""
Encodes in-memory raster images for inline submission
"""

import base64
import io
import logging

from PIL import Image

from ocrspace.models.errors import EncodingError, ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class ImageEncoder:
    """
    Turns a PIL image into the base64 PNG string sent as `base64Image`
    """

    format_name = "PNG"

    def to_png_bytes(self, image: Image.Image) -> bytes:
        """Encode the image as PNG"""
        if image is None:
            raise ValidationError(
                "Image cannot be None",
                error_code=ErrorCode.INVALID_TARGET,
            )

        try:
            buffer = io.BytesIO()
            image.save(buffer, format=self.format_name)
            return buffer.getvalue()
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to encode image to {self.format_name}: {e}")
            raise EncodingError(
                f"Failed to encode image to base64: {e}",
                details={"mode": getattr(image, "mode", None), "size": getattr(image, "size", None)},
            ) from e

    def to_base64(self, image: Image.Image) -> str:
        """PNG-encode the image and return it base64 encoded"""
        png_bytes = self.to_png_bytes(image)
        return base64.b64encode(png_bytes).decode("utf-8")
