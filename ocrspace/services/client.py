"""Entry point holding the api key, endpoint and transport."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import requests
from pydantic import ValidationError as SettingsValidationError

from ocrspace.core.config import DEFAULT_ENDPOINT, Settings, settings as default_settings
from ocrspace.core.validators.payload_validator import validate_endpoint
from ocrspace.models.errors import ConfigurationError, ErrorCode
from ocrspace.models.parameters import ParameterSet
from ocrspace.utils.logging import client_logger as logger


class OcrSpaceClient:
    """Creates parameter sets bound to one api key, endpoint and transport."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        transport: Optional[Any] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Service api key, sent as the ``apikey`` header as is
            endpoint: POST endpoint (defaults to the image parse URL)
            transport: Object with a ``requests.Session``-compatible
                ``send(prepared, **kwargs)``; a new Session when omitted
            timeout: Per-request timeout in seconds passed to the transport
            max_workers: Size of the pool used by ``async_request()``

        Raises:
            ConfigurationError: if the endpoint is malformed
        """
        self.api_key = api_key
        self._endpoint = validate_endpoint(endpoint)
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else requests.Session()
        self.timeout = timeout if timeout is not None else default_settings.api_timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or default_settings.async_max_workers,
            thread_name_prefix="ocrspace-client",
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[Any] = None,
    ) -> "OcrSpaceClient":
        """Build a client from ``Settings`` (environment / .env by default)"""
        if settings is None:
            try:
                settings = Settings()
            except SettingsValidationError as e:
                raise ConfigurationError(
                    f"Invalid settings: {e}",
                    error_code=ErrorCode.INVALID_SETTINGS,
                ) from e

        return cls(
            api_key=settings.ocrspace_api_key or "",
            endpoint=settings.ocrspace_endpoint,
            transport=transport,
            timeout=settings.api_timeout,
            max_workers=settings.async_max_workers,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def set_endpoint(self, endpoint) -> "OcrSpaceClient":
        """
        Change the POST endpoint for parameter sets created from now on.

        Raises:
            ConfigurationError: if the URL is malformed
        """
        self._endpoint = validate_endpoint(endpoint)
        logger.info(f"OCR endpoint set to {self._endpoint}")
        return self

    def get_request_builder(self) -> ParameterSet:
        """New parameter set bound to the current key, endpoint and transport"""
        return ParameterSet(
            api_key=self.api_key,
            endpoint=self._endpoint,
            transport=self.transport,
            timeout=self.timeout,
            executor=self._executor,
        )

    def close(self, wait: bool = True) -> None:
        """Shut down the background pool and the transport if owned."""
        self._executor.shutdown(wait=wait)
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
