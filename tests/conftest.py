"""
Global pytest fixtures and test utilities
Provides a stub transport, a thread-recording pool and sample payloads
"""

import base64
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

import pytest
import requests
from PIL import Image

from ocrspace.services.client import OcrSpaceClient
from tests.utils import make_response


TEST_API_KEY = "test-api-key"


class StubTransport:
    """
    Stands in for requests.Session: records every prepared request and
    returns a canned response, or raises a configured error.
    """

    def __init__(self, response_content: bytes = b'{"ParsedResults": []}', error: Optional[Exception] = None):
        self.response_content = response_content
        self.error = error
        self.sent: List[Tuple[requests.PreparedRequest, Dict[str, Any]]] = []
        self.thread_ids: List[int] = []
        self.closed = False

    def send(self, prepared: requests.PreparedRequest, **kwargs) -> requests.Response:
        self.sent.append((prepared, kwargs))
        self.thread_ids.append(threading.get_ident())
        if self.error is not None:
            raise self.error
        return make_response(content=self.response_content, url=prepared.url)

    def close(self):
        self.closed = True

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.sent[-1][0]


class RecordingExecutor(ThreadPoolExecutor):
    """Thread pool that records the identity of the thread running each task"""

    def __init__(self, max_workers: int = 2):
        super().__init__(max_workers=max_workers, thread_name_prefix="recording")
        self.thread_ids: List[int] = []
        self.submitted = 0

    def submit(self, fn, *args, **kwargs):
        self.submitted += 1

        def run():
            self.thread_ids.append(threading.get_ident())
            return fn(*args, **kwargs)

        return super().submit(run)


@pytest.fixture
def stub_transport():
    """Transport that succeeds with a small JSON body"""
    return StubTransport()


@pytest.fixture
def failing_transport():
    """Transport whose every send raises a connection error"""
    return StubTransport(error=requests.ConnectionError("connection refused"))


@pytest.fixture
def client(stub_transport):
    """Client wired to the stub transport"""
    ocr_client = OcrSpaceClient(TEST_API_KEY, transport=stub_transport, timeout=30, max_workers=2)
    yield ocr_client
    ocr_client.close()


@pytest.fixture
def builder(client):
    """Fresh parameter set from the test client"""
    return client.get_request_builder()


@pytest.fixture
def recording_pool():
    pool = RecordingExecutor()
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def sample_png_image():
    """Create a minimal valid PNG image"""
    # 1x1 pixel transparent PNG
    png_data = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x00\x00\x00\x00IEND\xaeB`\x82'
    return png_data


@pytest.fixture
def sample_image_base64(sample_png_image):
    """Create base64 encoded sample image"""
    return base64.b64encode(sample_png_image).decode('utf-8')


@pytest.fixture
def receipt_file(tmp_path, sample_png_image):
    """An existing receipt.png on disk"""
    path = tmp_path / "receipt.png"
    path.write_bytes(sample_png_image)
    return path


@pytest.fixture
def pil_image():
    """Small RGB image held in memory"""
    return Image.new("RGB", (20, 10), color=(255, 255, 255))
