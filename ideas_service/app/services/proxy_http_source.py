from __future__ import annotations

from typing import Any

import httpx

from ..exceptions import UpstreamError


class ProxyHttpIdeasSource:
    """원격에 떠 있는 /api/ideas 프록시를 HTTP 로 호출하는 ideas 소스."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        timeout_seconds: float | None = None,
    ) -> None:
        self._client = client
        self._endpoint = f"{base_url.rstrip('/')}/api/ideas"
        self._timeout = timeout_seconds

    async def fetch_ideas(
        self, page: int | str, per_page: int | str, sort: str | None
    ) -> Any:
        params = {"page": str(page), "per_page": str(per_page), "sort": sort or "newest"}
        try:
            resp = await self._client.get(self._endpoint, params=params, timeout=self._timeout)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"failed to reach ideas proxy: {exc!r}") from exc

        if not resp.is_success:
            raise UpstreamError(
                f"HTTP error! status: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError("ideas proxy returned a non-JSON body") from exc
