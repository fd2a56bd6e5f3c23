"""Tests for the remote object-storage backend, using an in-process HTTP transport."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from portfolio_cms.errors import UploadError
from portfolio_cms.services.object_storage import RemoteStorage, guess_content_type

BASE_URL = "https://store.test"
PUBLIC_PREFIX = f"{BASE_URL}/storage/v1/object/public/portfolio/"


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it receives."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return respond(request)

        super().__init__(handler)


def _storage(transport: httpx.BaseTransport, **kwargs) -> RemoteStorage:
    return RemoteStorage(BASE_URL, "secret-key", "portfolio", transport=transport, **kwargs)


def test_upload_posts_to_bucket_and_returns_public_url() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"Key": "ok"}))
    storage = _storage(transport)

    stored = storage.upload(b"png-bytes", "logo.PNG", "projects")

    assert stored.url == f"{PUBLIC_PREFIX}projects/{stored.name}"
    assert stored.name.endswith(".png")
    [request] = transport.requests
    assert request.method == "POST"
    assert str(request.url) == f"{BASE_URL}/storage/v1/object/portfolio/projects/{stored.name}"
    assert request.headers["Authorization"] == "Bearer secret-key"
    assert request.headers["apikey"] == "secret-key"
    assert request.headers["Content-Type"] == "image/png"
    assert request.content == b"png-bytes"


def test_upload_falls_back_to_raw_put_with_upsert() -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(500, json={"error": "internal"})
        return httpx.Response(200, json={"Key": "ok"})

    transport = RecordingTransport(respond)
    storage = _storage(transport)

    stored = storage.upload(b"svg", "icon.svg", "skills")

    assert [request.method for request in transport.requests] == ["POST", "PUT"]
    put = transport.requests[1]
    assert put.headers["x-upsert"] == "true"
    assert put.headers["Content-Type"] == "image/svg+xml"
    assert put.headers["Authorization"] == "Bearer secret-key"
    assert stored.url == f"{PUBLIC_PREFIX}skills/{stored.name}"


def test_upload_raises_when_both_attempts_fail() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(403, json={"error": "denied"}))
    storage = _storage(transport)

    with pytest.raises(UploadError, match="portfolio"):
        storage.upload(b"x", "a.png", "projects")
    assert len(transport.requests) == 2


def test_upload_connection_error_is_an_upload_error() -> None:
    def respond(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    storage = _storage(httpx.MockTransport(respond))

    with pytest.raises(UploadError):
        storage.upload(b"x", "a.png", "projects")


def test_delete_sends_prefixes_body() -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200, json=[]))
    storage = _storage(transport)

    storage.delete(f"{PUBLIC_PREFIX}projects/abc.png?v=2")

    [request] = transport.requests
    assert request.method == "DELETE"
    assert str(request.url) == f"{BASE_URL}/storage/v1/object/portfolio"
    assert json.loads(request.content) == {"prefixes": ["projects/abc.png"]}


def test_delete_failure_raises_upload_error() -> None:
    storage = _storage(RecordingTransport(lambda request: httpx.Response(404)))

    with pytest.raises(UploadError):
        storage.delete(f"{PUBLIC_PREFIX}projects/abc.png")


@pytest.mark.parametrize(
    "url",
    [
        "/uploads/projects/abc.png",
        f"{BASE_URL}/storage/v1/object/public/other-bucket/projects/abc.png",
        f"{BASE_URL}/storage/v1/object/public/portfolio/",
    ],
)
def test_delete_rejects_foreign_urls_without_calling_the_server(url: str) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200))
    storage = _storage(transport)

    with pytest.raises(UploadError):
        storage.delete(url)
    assert transport.requests == []


def test_client_uses_configured_timeout() -> None:
    storage = _storage(httpx.MockTransport(lambda request: httpx.Response(200)), timeout=2.5)
    try:
        assert storage.timeout == 2.5
        assert storage._client.timeout == httpx.Timeout(2.5)
    finally:
        storage.close()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("a.jpg", "image/jpeg"),
        ("a.webp", "image/webp"),
        ("a.ico", "image/x-icon"),
        ("a.pdf", "application/pdf"),
        ("noext", "application/octet-stream"),
    ],
)
def test_guess_content_type(name: str, expected: str) -> None:
    assert guess_content_type(name) == expected
