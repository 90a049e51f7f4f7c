from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import Request

from ..config import UpstreamConfig
from ..exceptions import UpstreamError


logger = logging.getLogger(__name__)


NEWEST_SORT = "-published_at"
OLDEST_SORT = "published_at"

# 목록 카드에 쓰일 이미지 변형을 항상 함께 요청한다.
APPENDED_IMAGE_VARIANTS: tuple[str, ...] = ("small_image", "medium_image")


def to_upstream_sort(sort: str | None) -> str:
    """newest 는 발행일 내림차순, 그 밖의 값은 모두 오름차순으로 보낸다."""
    return NEWEST_SORT if sort == "newest" else OLDEST_SORT


def build_upstream_params(
    page: int | str | None, per_page: int | str | None, sort: str | None
) -> list[tuple[str, str]]:
    """프록시 파라미터를 원격 API 의 페이지네이션 문법으로 바꾼다."""

    params: list[tuple[str, str]] = [
        ("page[number]", str(page) if page not in (None, "") else "1"),
        ("page[size]", str(per_page) if per_page not in (None, "") else "10"),
    ]
    params.extend(("append[]", variant) for variant in APPENDED_IMAGE_VARIANTS)
    params.append(("sort", to_upstream_sort(sort)))
    return params


class IdeasProxyService:
    """원격 콘텐츠 API 로 요청을 전달하고 응답 본문을 그대로 돌려주는 프록시.

    - 재시도하지 않는다. 전송 실패, 타임아웃, 2xx 가 아닌 응답, JSON 이 아닌 본문은
      모두 UpstreamError 로 올린다.
    """

    def __init__(self, client: httpx.AsyncClient, upstream: UpstreamConfig) -> None:
        self._client = client
        self._upstream = upstream

    async def fetch_ideas(
        self, page: int | str, per_page: int | str, sort: str | None
    ) -> Any:
        params = build_upstream_params(page, per_page, sort)

        try:
            resp = await self._client.get(
                self._upstream.url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self._upstream.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"failed to reach ideas API: {exc!r}") from exc

        if not resp.is_success:
            raise UpstreamError(
                f"ideas API responded with status {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamError(
                "ideas API returned a non-JSON body",
                status_code=resp.status_code,
            ) from exc

        logger.debug(
            "fetched ideas from upstream",
            extra={
                "upstream_url": self._upstream.url,
                "upstream_status": resp.status_code,
                "page": page,
                "per_page": per_page,
                "sort": sort,
            },
        )
        return data


def get_ideas_proxy_service(request: Request) -> IdeasProxyService:
    """FastAPI DI용 IdeasProxyService 팩토리.

    HTTP 클라이언트와 설정은 lifespan 에서 app.state 에 올려둔 것을 재사용한다.
    """
    return IdeasProxyService(request.app.state.http_client, request.app.state.config.upstream)
