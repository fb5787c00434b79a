"""
Shared pytest fixtures for memex_export tests.
"""
import json
import tempfile
from pathlib import Path
from typing import Generator
from urllib.parse import parse_qs, urlsplit

import pytest

from memex_export.config import ExportConfig
from memex_export.memex_client import MemexClient

# 2024-03-10T16:00:00Z
START_TIMESTAMP = 1710086400000


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Records requests and answers them through a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.headers = {}
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        return self.handler(url)


class FakeMemexAPI:
    """Serves queued pages per endpoint, then empty pages."""

    def __init__(self, space_pages=None, content_pages=None):
        self.space_pages = list(space_pages or [])
        self.content_pages = list(content_pages or [])
        self.space_cursors = []
        self.content_cursors = []

    def __call__(self, url):
        parts = urlsplit(url)
        params = parse_qs(parts.query)

        if parts.path.endswith("/space/list"):
            self.space_cursors.append(int(params["spacesToWhen"][0]))
            page = self.space_pages.pop(0) if self.space_pages else []
            return FakeResponse(body={"type": "personal-space-list-result", "personalSpaces": page})

        if parts.path.endswith("/content/list"):
            self.content_cursors.append(int(params["contentToWhen"][0]))
            page = self.content_pages.pop(0) if self.content_pages else {}
            body = {
                "type": "personal-content-list-result",
                "metadata": page.get("metadata", []),
                "locators": page.get("locators", []),
                "annotations": page.get("annotations", []),
                "personalSpaceEntries": page.get("personalSpaceEntries", []),
            }
            return FakeResponse(body=body)

        return FakeResponse(status_code=404, body={"error": "invalid-endpoint", "endpoint": parts.path})


def make_space(space_id, title, created_when):
    return {
        "type": "personal-space",
        "personalSpaceId": space_id,
        "title": title,
        "createdWhen": created_when,
        "updatedWhen": created_when,
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def export_config(temp_dir) -> ExportConfig:
    """Configuration writing everything below the temporary directory."""
    return ExportConfig(
        key_id="test-key-id",
        key_secret="test-key-secret",
        start_timestamp=START_TIMESTAMP,
        state_file=temp_dir / "state.json",
        json_output_dir=temp_dir / "json-output",
        markdown_output_dir=temp_dir / "markdown-output",
        cache_dir=temp_dir / "cache",
        use_cache=False,
    )


@pytest.fixture
def sample_spaces() -> list:
    return [
        make_space("space-1", "Reading List", 1706745600000),   # 2024-02-01
        make_space("space-2", "Research/Papers", 1704067200000),  # 2024-01-01
    ]


@pytest.fixture
def sample_content_page() -> dict:
    """One content page of three bookmarks, newest first."""
    return {
        "type": "personal-content-list-result",
        "metadata": [
            {
                "type": "personal-content-metadata",
                "personalContentId": "content-1",
                "canonicalUrl": "https://example.com/python-tips",
                "title": "Python: Tips & Tricks",
                "createdWhen": 1709251200000,
                "updatedWhen": 1709337600000,
            },
            {
                "type": "personal-content-metadata",
                "personalContentId": "content-2",
                "canonicalUrl": "https://example.org/guide",
                "title": "A Guide",
                "createdWhen": 1706745600000,
                "updatedWhen": 1706832000000,
            },
            {
                "type": "personal-content-metadata",
                "personalContentId": "content-3",
                "canonicalUrl": "https://example.com/no-title",
                "createdWhen": 1704153600000,
                "updatedWhen": 1704240000000,
            },
        ],
        "locators": [
            {
                "type": "personal-content-locator",
                "personalContentId": "content-1",
                "locationType": "remote",
                "locationScheme": "normalized-url-v1",
                "format": "html",
                "location": "example.com/python-tips",
                "originalLocation": "https://example.com/python-tips",
                "createdWhen": 1709251200000,   # 2024-03-01
                "updatedWhen": 1709337600000,
            },
            {
                "type": "personal-content-locator",
                "personalContentId": "content-2",
                "locationType": "remote",
                "locationScheme": "normalized-url-v1",
                "format": "pdf",
                "location": "example.org/guide",
                "originalLocation": "https://example.org/guide",
                "createdWhen": 1706745600000,   # 2024-02-01
                "updatedWhen": 1706832000000,
            },
            {
                "type": "personal-content-locator",
                "personalContentId": "content-3",
                "locationType": "remote",
                "locationScheme": "normalized-url-v1",
                "format": "html",
                "location": "example.com/no-title",
                "originalLocation": "https://example.com/no-title",
                "createdWhen": 1704153600000,   # 2024-01-02
                "updatedWhen": 1704240000000,
            },
        ],
        "annotations": [
            {
                "type": "personal-annotation",
                "createdWhen": 1709337600000,
                "updatedWhen": 1709337600000,
                "highlight": "Use list comprehensions",
            },
            {
                "type": "personal-annotation",
                "createdWhen": 1706832000000,
                "updatedWhen": 1706832000000,
                "comment": {"value": "Worth re-reading"},
            },
        ],
        "personalSpaceEntries": [
            {
                "type": "personal-space-entry",
                "personalContentId": "content-1",
                "personalSpaceId": "space-1",
                "createdWhen": 1709251200000,
                "updatedWhen": 1709251200000,
            },
            {
                "type": "personal-space-entry",
                "personalContentId": "content-2",
                "personalSpaceId": "space-1",
                "createdWhen": 1706745600000,
                "updatedWhen": 1706745600000,
            },
            {
                "type": "personal-space-entry",
                "personalContentId": "content-2",
                "personalSpaceId": "space-2",
                "createdWhen": 1706745600000,
                "updatedWhen": 1706745600000,
            },
        ],
    }


@pytest.fixture
def fake_api(sample_spaces, sample_content_page) -> FakeMemexAPI:
    return FakeMemexAPI(space_pages=[sample_spaces], content_pages=[sample_content_page])


@pytest.fixture
def fake_response():
    """The FakeResponse class, for handlers built inside tests."""
    return FakeResponse


@pytest.fixture
def fake_api_factory():
    return FakeMemexAPI


@pytest.fixture
def make_client(export_config):
    """Build a MemexClient over a FakeSession; returns (client, session)."""
    def _make(handler, cache=None, config=None):
        session = FakeSession(handler)
        client = MemexClient(config or export_config, cache=cache, session=session)
        return client, session
    return _make
