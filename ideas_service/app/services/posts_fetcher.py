from __future__ import annotations

import itertools
import logging
from typing import Any

from pydantic import ValidationError

from ..exceptions import IdeasSiteError
from ..images.resolver import ImageResolver
from ..models.listing import ListQuery, ListResult
from ..models.post import Post, RawPostRecord
from .interfaces import IdeasSourceInterface


logger = logging.getLogger(__name__)


def _parse_total(body: Any) -> int:
    meta = body.get("meta") if isinstance(body, dict) else None
    if not isinstance(meta, dict):
        return 0
    raw_total = meta.get("total")
    if isinstance(raw_total, bool):
        return 0
    try:
        total = int(raw_total)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(total, 0)


def _raw_items(body: Any) -> list[Any]:
    data = body.get("data") if isinstance(body, dict) else None
    return data if isinstance(data, list) else []


class PostsFetcher:
    """ListQuery 를 프록시 요청으로 바꾸고, 응답을 ListResult 로 정규화한다.

    - fetch 마다 단조 증가하는 요청 토큰을 발급한다. 마지막으로 발급한 토큰의 응답만
      result/loading 에 반영하고, 그보다 오래된 응답은 버린다.
    - 실패하면 빈 결과(total=0)로 대체한다. 재시도하지 않고 이전 결과도 남기지 않는다.
    """

    def __init__(
        self,
        source: IdeasSourceInterface,
        resolver: ImageResolver | None = None,
    ) -> None:
        self._source = source
        self._resolver = resolver or ImageResolver()
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self.loading = False
        self.result: ListResult | None = None

    @property
    def latest_token(self) -> int:
        return self._latest_token

    async def fetch(self, query: ListQuery) -> ListResult:
        token = next(self._tokens)
        self._latest_token = token
        self.loading = True

        try:
            body = await self._source.fetch_ideas(
                page=query.page,
                per_page=query.per_page,
                sort=query.sort.value,
            )
        except IdeasSiteError as exc:
            logger.warning(
                "failed to fetch ideas, showing empty list: %s",
                exc,
                extra={"page": query.page, "per_page": query.per_page, "sort": query.sort.value},
            )
            result = ListResult.empty(query)
        else:
            try:
                result = self.to_result(body, query)
            except Exception:  # noqa: BLE001
                logger.warning(
                    "failed to map ideas response, showing empty list",
                    exc_info=True,
                    extra={"page": query.page, "per_page": query.per_page, "sort": query.sort.value},
                )
                result = ListResult.empty(query)

        if token != self._latest_token:
            logger.debug(
                "discarding stale ideas response (token=%s, latest=%s)",
                token,
                self._latest_token,
            )
            return result

        self.result = result
        self.loading = False
        return result

    def to_result(self, body: Any, query: ListQuery) -> ListResult:
        posts: list[Post] = []
        for raw in _raw_items(body):
            try:
                record = RawPostRecord.model_validate(raw)
            except ValidationError as exc:
                logger.warning("skipping malformed idea record: %s", exc.errors())
                continue
            posts.append(self.to_post(record))

        return ListResult(
            items=posts,
            total=_parse_total(body),
            current_page=query.page,
            per_page=query.per_page,
        )

    def to_post(self, record: RawPostRecord) -> Post:
        return Post(
            id=record.id,
            title=record.title,
            published_at=record.published_at,
            image_url=self._resolver.resolve(record),
        )
