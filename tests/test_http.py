"""
Tests for ftchelper.io.http module.
"""

from __future__ import annotations

import pytest
import requests

from ftchelper import __version__
from ftchelper.exceptions import FetchFailedError, MalformedInputError
from ftchelper.io import fetch_json, fetch_text, github_headers


class TestFetch:
    """Tests for fetch_text and fetch_json."""

    def test_fetch_text(self, requests_mock):
        requests_mock.get("https://example.com/page", text="<html>hi</html>")

        assert fetch_text("https://example.com/page") == "<html>hi</html>"
        assert (
            requests_mock.last_request.headers["User-Agent"] == f"ftc-helper/{__version__}"
        )

    def test_fetch_json(self, requests_mock):
        requests_mock.get("https://example.com/api", json={"a": 1})

        assert fetch_json("https://example.com/api") == {"a": 1}

    def test_extra_headers_sent(self, requests_mock):
        requests_mock.get("https://example.com/api", json=[])

        fetch_json("https://example.com/api", headers=github_headers("tok"))

        sent = requests_mock.last_request.headers
        assert sent["Authorization"] == "token tok"
        assert sent["Accept"] == "application/vnd.github+json"

    def test_status_error(self, requests_mock):
        requests_mock.get("https://example.com/page", status_code=500)

        with pytest.raises(FetchFailedError) as exc_info:
            fetch_text("https://example.com/page")

        assert exc_info.value.status_code == 500
        assert exc_info.value.url == "https://example.com/page"

    def test_transport_error(self, requests_mock):
        requests_mock.get("https://example.com/page", exc=requests.exceptions.Timeout)

        with pytest.raises(FetchFailedError):
            fetch_text("https://example.com/page")

    def test_invalid_json(self, requests_mock):
        requests_mock.get("https://example.com/api", text="not json")

        with pytest.raises(MalformedInputError):
            fetch_json("https://example.com/api")


def test_github_headers_without_token():
    assert "Authorization" not in github_headers()
    assert "Authorization" not in github_headers("")
