from __future__ import annotations

from dataclasses import dataclass

from ..models.listing import ListQuery, ListResult
from ..pagination.planner import PageSelectorEntry, plan
from ..query.state import QueryStateSync
from ..services.posts_fetcher import PostsFetcher


@dataclass(frozen=True, slots=True)
class PostsListPage:
    """템플릿에 넘길 목록 화면 스냅샷."""

    query: ListQuery
    result: ListResult
    entries: list[PageSelectorEntry]
    per_page_options: tuple[int, ...]
    loading: bool

    @property
    def showing_start(self) -> int:
        return self.result.showing_start

    @property
    def showing_end(self) -> int:
        return self.result.showing_end

    @property
    def total(self) -> int:
        return self.result.total


class PostsListController:
    """목록 화면의 상태(현재 ListQuery, 현재 ListResult)를 소유한다.

    QueryStateSync 로 위치를 읽고, PostsFetcher 로 가져오고, plan 으로 페이지 UI 를 계산한다.
    """

    def __init__(self, sync: QueryStateSync, fetcher: PostsFetcher) -> None:
        self._sync = sync
        self._fetcher = fetcher

    @property
    def sync(self) -> QueryStateSync:
        return self._sync

    @property
    def query(self) -> ListQuery:
        return self._sync.query

    async def load(self) -> PostsListPage:
        query = self._sync.query
        await self._fetcher.fetch(query)
        return self.snapshot()

    async def set_param(self, name: str, value: str | int) -> PostsListPage:
        self._sync.set_param(name, value)
        return await self.load()

    def snapshot(self) -> PostsListPage:
        query = self._sync.query
        result = self._fetcher.result or ListResult.empty(query)
        return PostsListPage(
            query=query,
            result=result,
            entries=plan(query.page, result.page_count),
            per_page_options=self._sync.per_page_options,
            loading=self._fetcher.loading,
        )
