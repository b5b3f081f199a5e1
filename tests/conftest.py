"""
Pytest configuration for the license search client.

Provides fixtures for:
- Settings isolated from the developer's environment and `.env`
- A fake license API served through `httpx.MockTransport`
- A renderer that records what the consumer hands it
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from license_search.config import Settings

TEST_TOKEN = "test-token"

# Captured before any fixture scrubs the environment; used by live API tests.
LIVE_APP_TOKEN = os.environ.get("APP_TOKEN")

_SETTINGS_ENV_VARS = (
    "APP_TOKEN",
    "LICENSE_API_URL",
    "LICENSE_PAGE_SIZE",
    "LICENSE_TIMEOUT_SECS",
    "LOG_LEVEL",
    "LOG_JSON",
)


def _make_records(count: int, start: int = 0) -> List[Dict[str, Any]]:
    return [
        {
            "license_number": f"{90000 + index}",
            "license_type": "Plumbing Contractor",
            "business_county": "HARRIS",
            "owner_name": f"OWNER {index}",
        }
        for index in range(start, start + count)
    ]


class FakeLicenseApi:
    """
    In-memory stand-in for the dataset endpoint.

    Serves ``records[$offset:$offset + $limit]`` and remembers every request.
    Set ``status_code`` or ``body`` to simulate failures.
    """

    def __init__(
        self,
        records: List[Dict[str, Any]],
        status_code: int = 200,
        body: Optional[bytes] = None,
    ) -> None:
        self.records = records
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "unavailable"})
        if self.body is not None:
            return httpx.Response(200, content=self.body)
        limit = int(request.url.params["$limit"])
        offset = int(request.url.params["$offset"])
        return httpx.Response(200, json=self.records[offset : offset + limit])

    @property
    def pages(self) -> List[Tuple[int, int]]:
        """(limit, offset) of every request, in order."""
        return [
            (int(req.url.params["$limit"]), int(req.url.params["$offset"]))
            for req in self.requests
        ]


class RecordingRenderer:
    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []
        self.errors: List[BaseException] = []

    def render_record(self, record: Dict[str, Any]) -> None:
        self.records.append(record)

    def render_error(self, error: BaseException) -> None:
        self.errors.append(error)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep real tokens and overrides in the environment out of unit tests.
    """
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        app_token=TEST_TOKEN,
        api_url="https://licenses.test/resource/licenses.json",
        page_size=5,
        timeout_seconds=5,
        log_level="DEBUG",
    )


@pytest.fixture
def make_records() -> Callable[..., List[Dict[str, Any]]]:
    return _make_records


@pytest.fixture
def fake_api_factory() -> Callable[..., FakeLicenseApi]:
    return FakeLicenseApi


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """
    Drop console handlers installed by configure_logging during a test.

    They are bound to whatever sys.stderr was at the time, which pytest and
    CliRunner replace between tests.
    """
    root = logging.getLogger()
    before = list(root.handlers)
    root_level = root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    for handler in list(root.handlers):
        if handler not in before and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(root_level)
    logging.getLogger("httpx").setLevel(httpx_level)


@pytest.fixture
def live_app_token() -> str:
    if not LIVE_APP_TOKEN:
        pytest.skip("APP_TOKEN not set")
    return LIVE_APP_TOKEN
