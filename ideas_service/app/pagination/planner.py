from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


# 이 값 이하의 페이지 수면 모든 페이지 번호를 보여준다.
MAX_FULL_PAGES = 7
# 현재 페이지 앞뒤로 보여줄 페이지 수
WINDOW_SIZE = 2


class ControlKind(str, Enum):
    FIRST = "first"
    PREV = "prev"
    NEXT = "next"
    LAST = "last"


@dataclass(frozen=True, slots=True)
class PageControl:
    kind: ControlKind
    target_page: int
    enabled: bool


@dataclass(frozen=True, slots=True)
class PageNumber:
    number: int
    is_current: bool


@dataclass(frozen=True, slots=True)
class PageEllipsis:
    pass


PageSelectorEntry = Union[PageControl, PageNumber, PageEllipsis]


def visible_page_numbers(current_page: int, last_page: int) -> list[int]:
    """화면에 보여줄 페이지 번호 목록 (오름차순)."""

    if last_page < 1:
        return []
    if last_page <= MAX_FULL_PAGES:
        return list(range(1, last_page + 1))

    return [
        number
        for number in range(1, last_page + 1)
        if number == 1
        or number == last_page
        or current_page - WINDOW_SIZE <= number <= current_page + WINDOW_SIZE
    ]


def plan(current_page: int, last_page: int) -> list[PageSelectorEntry]:
    """페이지 선택 UI 를 앞에서부터 순서대로 계산한다.

    first, prev, (페이지 번호/말줄임표...), next, last 순서로 반환한다.
    last_page 가 1 미만이면(결과 없음) 페이지 번호 없이 비활성 컨트롤만 남는다.
    """

    upper = max(last_page, 1)
    at_start = current_page <= 1
    at_end = current_page >= upper

    entries: list[PageSelectorEntry] = [
        PageControl(ControlKind.FIRST, 1, enabled=not at_start),
        PageControl(ControlKind.PREV, max(current_page - 1, 1), enabled=not at_start),
    ]

    previous: int | None = None
    for number in visible_page_numbers(current_page, last_page):
        if previous is not None and number - previous > 1:
            entries.append(PageEllipsis())
        entries.append(PageNumber(number, is_current=number == current_page))
        previous = number

    entries.append(
        PageControl(ControlKind.NEXT, min(current_page + 1, upper), enabled=not at_end)
    )
    entries.append(PageControl(ControlKind.LAST, upper, enabled=not at_end))
    return entries
