from __future__ import annotations

from typing import Any, Protocol


class IdeasSourceInterface(Protocol):
    """ideas 목록 원본 JSON 을 가져오는 프록시가 따라야 할 최소한의 계약.

    PostsFetcher 는 이 인터페이스에만 의존하고, in-process 프록시인지
    원격 /api/ideas 인지는 알지 않는다. 실패는 UpstreamError 로 알린다.
    """

    async def fetch_ideas(
        self, page: int | str, per_page: int | str, sort: str | None
    ) -> Any:  # pragma: no cover - Protocol
        ...
