"""
Shared fixtures: archive building, a fake HTTP session, progress recording.
"""
import json

import pytest
import requests

from fsgame.packager.packager import Packager
from fsgame.store.blob_store import BlobStore


class FakeResponse:
    def __init__(self, status_code: int, content: bytes = b''):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Serves canned responses by URL and records every request made."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requested = []

    def add(self, url, content=b'', status=200):
        self.routes[url] = (status, content)

    def add_json(self, url, document, status=200):
        self.add(url, json.dumps(document).encode('utf-8'), status)

    def get(self, url, timeout=None):
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404)
        if isinstance(route, Exception):
            raise route
        status, content = route
        return FakeResponse(status, content)


class RecordingProgress:
    def __init__(self):
        self.updates = []
        self.failures = []

    def update(self, percent, status):
        self.updates.append((percent, status))

    def fail(self, message):
        self.failures.append(message)

    @property
    def percents(self):
        return [p for p, _ in self.updates]


@pytest.fixture
def packager():
    return Packager(compression_level=6, version=1)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def store(tmp_path):
    s = BlobStore(str(tmp_path / 'store.db'))
    yield s
    s.close()


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
