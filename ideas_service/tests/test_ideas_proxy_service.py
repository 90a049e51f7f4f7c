from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import pytest

from ideas_service.app.config import UpstreamConfig
from ideas_service.app.exceptions import UpstreamError
from ideas_service.app.services.ideas_proxy_service import (
    IdeasProxyService,
    build_upstream_params,
    to_upstream_sort,
)
from ideas_service.app.services.proxy_http_source import ProxyHttpIdeasSource


UPSTREAM_URL = "https://api.example.test/api/ideas"


def _fetch(
    handler: Callable[[httpx.Request], httpx.Response],
    **kwargs: Any,
) -> Any:
    async def scenario() -> Any:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = IdeasProxyService(client, UpstreamConfig(url=UPSTREAM_URL))
            return await service.fetch_ideas(**kwargs)

    return asyncio.run(scenario())


def test_to_upstream_sort() -> None:
    assert to_upstream_sort("newest") == "-published_at"
    assert to_upstream_sort("oldest") == "published_at"
    assert to_upstream_sort(None) == "published_at"
    assert to_upstream_sort("whatever") == "published_at"


def test_build_upstream_params_defaults() -> None:
    params = build_upstream_params("", None, "newest")

    assert params == [
        ("page[number]", "1"),
        ("page[size]", "10"),
        ("append[]", "small_image"),
        ("append[]", "medium_image"),
        ("sort", "-published_at"),
    ]


def test_fetch_forwards_params_in_upstream_dialect() -> None:
    seen: list[httpx.Request] = []
    body = {"data": [{"id": 1}], "meta": {"total": 1}}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=body)

    data = _fetch(handler, page=3, per_page=20, sort="oldest")

    assert data == body
    request = seen[0]
    assert str(request.url).startswith(UPSTREAM_URL)
    assert request.url.params["page[number]"] == "3"
    assert request.url.params["page[size]"] == "20"
    assert request.url.params.get_list("append[]") == ["small_image", "medium_image"]
    assert request.url.params["sort"] == "published_at"
    assert request.headers["Accept"] == "application/json"


def test_non_2xx_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "maintenance"})

    with pytest.raises(UpstreamError) as exc_info:
        _fetch(handler, page=1, per_page=10, sort="newest")

    assert exc_info.value.status_code == 503


def test_transport_error_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        _fetch(handler, page=1, per_page=10, sort="newest")


def test_non_json_body_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(UpstreamError):
        _fetch(handler, page=1, per_page=10, sort="newest")


def test_proxy_http_source_calls_remote_proxy() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [], "meta": {"total": 0}})

    async def scenario() -> Any:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = ProxyHttpIdeasSource(client, "http://site.example.test/")
            return await source.fetch_ideas(page=2, per_page=50, sort="oldest")

    data = asyncio.run(scenario())

    assert data == {"data": [], "meta": {"total": 0}}
    assert seen[0].url.path == "/api/ideas"
    assert dict(seen[0].url.params) == {"page": "2", "per_page": "50", "sort": "oldest"}


def test_proxy_http_source_treats_non_2xx_as_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to fetch data"})

    async def scenario() -> Any:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            source = ProxyHttpIdeasSource(client, "http://site.example.test")
            return await source.fetch_ideas(page=1, per_page=10, sort="newest")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(scenario())

    assert exc_info.value.status_code == 500
