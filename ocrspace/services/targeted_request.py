"""
A parameter set bound to one payload, serialized to multipart/form-data and
sent through the transport synchronously or in the background.
"""

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, List, Optional, Tuple

import requests

from ocrspace.core.config import settings
from ocrspace.core.validators.payload_validator import PayloadValidator
from ocrspace.models.errors import TransportError
from ocrspace.models.formats import guess_media_type
from ocrspace.models.payloads import FilePayload, InlinePayload, Payload, UrlPayload
from ocrspace.utils.logging import RequestTimer, log_ocr_request, request_logger as logger

if TYPE_CHECKING:
    from ocrspace.models.parameters import ParameterSet

# Multipart part as accepted by requests' `files=`: (filename, content[, content_type])
FormPart = Tuple
FormField = Tuple[str, FormPart]

_shared_executor: Optional[ThreadPoolExecutor] = None
_shared_executor_lock = threading.Lock()


def get_shared_executor() -> ThreadPoolExecutor:
    """Bounded pool for background requests made without a client executor"""
    global _shared_executor

    with _shared_executor_lock:
        if _shared_executor is None:
            _shared_executor = ThreadPoolExecutor(
                max_workers=settings.async_max_workers,
                thread_name_prefix="ocrspace",
            )
        return _shared_executor


def payload_kind(payload: Payload) -> str:
    """Form field name carrying the payload"""
    if isinstance(payload, UrlPayload):
        return "url"
    if isinstance(payload, FilePayload):
        return "file"
    if isinstance(payload, InlinePayload):
        return "base64Image"
    raise TypeError(f"Unknown payload type: {type(payload).__name__}")


def payload_part(payload: Payload) -> FormField:
    """Build the single multipart part for a payload"""
    kind = payload_kind(payload)
    if isinstance(payload, UrlPayload):
        return kind, (None, payload.location)
    if isinstance(payload, FilePayload):
        # The file may have been removed since it was targeted
        path = PayloadValidator().validate_file(payload.path)
        return kind, (payload.filename, path.read_bytes(), guess_media_type(payload.filename))
    return kind, (None, payload.base64_content)


class TargetedRequest:
    """
    One OCR request: a parameter set plus exactly one payload.

    The payload is fixed at construction. Options are read from the
    parameter set each time the request is serialized.
    """

    def __init__(self, parameters: "ParameterSet", payload: Payload):
        self._parameters = parameters
        self._payload = payload

    @property
    def parameters(self) -> "ParameterSet":
        return self._parameters

    @property
    def payload(self) -> Payload:
        return self._payload

    @property
    def payload_kind(self) -> str:
        return payload_kind(self._payload)

    def __repr__(self) -> str:
        return f"TargetedRequest(payload={self._payload!r}, endpoint={self._parameters.endpoint!r})"

    def build_form(self) -> List[FormField]:
        """Payload part first, then one text part per option that is set"""
        form = [payload_part(self._payload)]
        for name, value in self._parameters.form_fields():
            form.append((name, (None, value)))
        return form

    def prepare(self) -> requests.PreparedRequest:
        """POST with the api key header and the multipart body"""
        request = requests.Request(
            "POST",
            self._parameters.endpoint,
            headers={"apikey": self._parameters.api_key},
            files=self.build_form(),
        )
        return request.prepare()

    def request(self) -> requests.Response:
        """
        Send the request on the calling thread.

        The caller owns the returned response and must close it, ideally
        with ``with request.request() as response:``.

        Raises:
            ValidationError: if a file payload no longer exists
            TransportError: on any connection or I/O failure
        """
        return self._send(mode="sync")

    def async_request(self, pool: Optional[Executor] = None) -> "Future[requests.Response]":
        """
        Send the request on a worker thread.

        Without ``pool`` the work goes to the executor of the client that
        created the parameter set (or a shared bounded pool). With ``pool``
        the caller's executor decides admission. Every failure, including one
        raised while building the body or submitting the work, is delivered
        through the returned future.
        """
        executor = pool or self._parameters.executor or get_shared_executor()
        try:
            return executor.submit(self._send, "async")
        except Exception as e:
            logger.error(f"Could not submit OCR request to executor: {e}")
            future: Future = Future()
            future.set_exception(e)
            return future

    def _send(self, mode: str) -> requests.Response:
        endpoint = self._parameters.endpoint
        kind = self.payload_kind

        with RequestTimer(
            "ocr request", payload_kind=kind, mode=mode, endpoint=endpoint
        ) as timer:
            prepared = self.prepare()
            try:
                response = self._parameters.transport.send(
                    prepared,
                    timeout=self._parameters.timeout,
                )
            except (requests.RequestException, OSError) as e:
                raise TransportError(
                    f"Request to {endpoint} failed: {e}",
                    details={"endpoint": endpoint, "payload_kind": kind},
                ) from e

        log_ocr_request(
            kind,
            endpoint,
            mode,
            duration=timer.duration,
            status_code=getattr(response, "status_code", None),
        )
        return response
