from __future__ import annotations

import math
from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from .post import Post


class SortOrder(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"

    @classmethod
    def from_str(cls, value: str | None) -> Self | None:
        """알 수 없는 값이면 None 을 돌려준다 (호출 측에서 기본값으로 대체)."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class ListQuery(BaseModel):
    """목록 화면의 논리 파라미터. 원본(source of truth)은 URL 쿼리스트링이다."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=10, ge=1)
    sort: SortOrder = SortOrder.NEWEST


class ListResult(BaseModel):
    """한 번의 fetch 로 얻은 목록 결과."""

    model_config = ConfigDict(frozen=True)

    items: list[Post] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    current_page: int = 1
    per_page: int = 10

    @classmethod
    def empty(cls, query: ListQuery) -> "ListResult":
        return cls(items=[], total=0, current_page=query.page, per_page=query.per_page)

    @property
    def page_count(self) -> int:
        """ceil(total / per_page). 결과가 없으면 0."""
        return math.ceil(self.total / self.per_page) if self.total > 0 else 0

    @property
    def last_page(self) -> int:
        return max(self.page_count, 1)

    @property
    def showing_start(self) -> int:
        if not self.items:
            return 0
        return (self.current_page - 1) * self.per_page + 1

    @property
    def showing_end(self) -> int:
        if not self.items:
            return 0
        return (self.current_page - 1) * self.per_page + len(self.items)
