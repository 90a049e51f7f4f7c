from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from ideas_service.app.config import AppConfig, ImageHostsConfig
from ideas_service.app.exceptions import UpstreamError
from ideas_service.app.images.resolver import ImageResolver
from ideas_service.app.main import create_app


STATIC_HOST = "https://static.example.test"
BACKEND_HOST = "https://backend.example.test"
DEFAULT_IMAGE = "/static/banner-stock.svg"


def build_ideas_body(
    *,
    total: int,
    page: int = 1,
    per_page: int = 10,
    count: int | None = None,
) -> dict[str, Any]:
    """원격 API 응답 모양을 흉내 낸 본문을 만든다."""

    if count is None:
        count = max(0, min(per_page, total - (page - 1) * per_page))
    start = (page - 1) * per_page
    data = [
        {
            "id": start + index + 1,
            "title": f"Idea {start + index + 1}",
            "published_at": "2022-10-06 06:42:13",
            "small_image": [{"url": f"/storage/small/{start + index + 1}.jpg"}],
            "medium_image": [{"url": f"/storage/medium/{start + index + 1}.jpg"}],
        }
        for index in range(count)
    ]
    last_page = max(1, -(-total // per_page))
    return {
        "data": data,
        "meta": {
            "total": total,
            "current_page": page,
            "per_page": per_page,
            "last_page": last_page,
        },
    }


class FakeIdeasSource:
    """PostsFetcher 테스트용 가짜 ideas 소스."""

    def __init__(self, body: Any = None, error: Exception | None = None) -> None:
        self.body = body if body is not None else build_ideas_body(total=0)
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def fetch_ideas(
        self, page: int | str, per_page: int | str, sort: str | None
    ) -> Any:
        self.calls.append({"page": page, "per_page": per_page, "sort": sort})
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def hosts() -> ImageHostsConfig:
    return ImageHostsConfig(
        static_assets_host=STATIC_HOST,
        backend_host=BACKEND_HOST,
        default_image=DEFAULT_IMAGE,
    )


@pytest.fixture
def resolver(hosts: ImageHostsConfig) -> ImageResolver:
    return ImageResolver(hosts)


@pytest.fixture
def failing_source() -> FakeIdeasSource:
    return FakeIdeasSource(error=UpstreamError("boom", status_code=502))


@pytest.fixture
def make_app(hosts: ImageHostsConfig) -> Callable[..., Any]:
    """MockTransport 로 외부 호출을 대체한 앱을 만든다."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        config: AppConfig | None = None,
    ):
        app = create_app(config or AppConfig(images=hosts))
        app.state.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return app

    return _make
