"""
Test configuration and fixtures for mojang-metadata tests.
"""
import json
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
import requests

from mojang_metadata import MojangAPI


class InlineExecutor(Executor):
    """Runs work on the submitting thread so results are ready immediately."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        future.set_running_or_notify_cancel()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


def make_response(body=None, status=200, text=None, content=None, encoding="utf-8"):
    """Build a fake requests.Response carrying a JSON, text or raw byte body."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.text = text if text is not None else json.dumps(body)
    response.content = content if content is not None else response.text.encode("utf-8")
    response.encoding = encoding

    def _json():
        return json.loads(response.text)

    response.json.side_effect = _json

    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Client Error", response=response
        )
    return response


@pytest.fixture
def mock_get():
    """Patch requests.get as seen by the client module."""
    with patch("mojang_metadata.api_clients.requests.get") as get:
        yield get


@pytest.fixture
def client():
    """Client running requests inline."""
    return MojangAPI("TestPlugin", executor=InlineExecutor())


@pytest.fixture
def pool():
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-pool")
    yield executor
    executor.shutdown(wait=True)


@pytest.fixture
def threaded_client(pool):
    """Client running requests on a real thread pool."""
    return MojangAPI("TestPlugin", executor=pool)


@pytest.fixture
def sample_profile():
    return {
        "id": "069a79f444e94726a5befca90e38aaf5",
        "name": "Notch",
        "properties": [
            {"name": "textures", "value": "ZXlKMGFXMWxjM1JoYlhBaU9q", "signature": "c2lnbmF0dXJlLWJsb2I="},
            {"name": "other", "value": "second", "signature": "ignored"},
        ],
    }
