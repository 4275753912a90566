import json
import os
import sys

import pytest
import requests

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from src.migrators import shopify_client


class FakeResponse:
    def __init__(self, status_code=200, body=None, content=b"", reason=None):
        self.status_code = status_code
        self._body = body
        self.content = content
        self.reason = reason or ("OK" if status_code < 400 else "Error")

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def text(self):
        if self._body is not None:
            return json.dumps(self._body)
        return self.content.decode("utf-8", errors="replace")

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeShopify:
    """Routes requests.get/requests.put calls to canned responses and records them."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, url, response):
        self.routes[(method, url)] = response

    def _dispatch(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self.routes.get((method, url))
        if response is None:
            raise requests.ConnectionError(f"No route for {method} {url}")
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, **kwargs)

    def put(self, url, **kwargs):
        return self._dispatch("PUT", url, **kwargs)

    def calls_for(self, method):
        return [c for c in self.calls if c["method"] == method]


@pytest.fixture(autouse=True)
def isolated_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shopify_client.set_rate_limit(600000)
    yield
    shopify_client.set_rate_limit(120)


@pytest.fixture
def fake_shopify(monkeypatch):
    fake = FakeShopify()
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(requests, "put", fake.put)
    return fake
