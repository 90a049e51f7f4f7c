from __future__ import annotations

from typing import Mapping, Protocol, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit

from ..config import DEFAULT_PER_PAGE, DEFAULT_PER_PAGE_OPTIONS
from ..models.listing import ListQuery, SortOrder


PAGE_PARAM = "page"
PER_PAGE_PARAM = "per_page"
SORT_PARAM = "sort"

LIST_QUERY_PARAMS: tuple[str, ...] = (PAGE_PARAM, PER_PAGE_PARAM, SORT_PARAM)


class LocationInterface(Protocol):
    """현재 화면 위치(경로 + 쿼리스트링)를 읽고 교체하는 능력.

    replace 는 히스토리 항목을 새로 쌓지 않는 교체(navigation replace)를 뜻한다.
    """

    @property
    def path(self) -> str:  # pragma: no cover - Protocol
        ...

    @property
    def query_string(self) -> str:  # pragma: no cover - Protocol
        ...

    def replace(self, url: str) -> None:  # pragma: no cover - Protocol
        ...


class StaticLocation:
    """메모리 상의 위치. 요청 URL 로부터 만들고, replace 하면 자기 자신이 바뀐다."""

    def __init__(self, path: str = "/", query_string: str = "") -> None:
        self._path = path or "/"
        self._query_string = query_string
        self.replaced_urls: list[str] = []

    @classmethod
    def from_url(cls, url: str) -> "StaticLocation":
        parts = urlsplit(str(url))
        return cls(path=parts.path or "/", query_string=parts.query)

    @property
    def path(self) -> str:
        return self._path

    @property
    def query_string(self) -> str:
        return self._query_string

    @property
    def url(self) -> str:
        return _join_url(self._path, self._query_string)

    def replace(self, url: str) -> None:
        parts = urlsplit(url)
        self._path = parts.path or self._path
        self._query_string = parts.query
        self.replaced_urls.append(url)


def _join_url(path: str, query_string: str) -> str:
    return f"{path}?{query_string}" if query_string else path


def _parse_positive_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        number = int(value.strip())
    except ValueError:
        return None
    return number if number >= 1 else None


def parse_list_query(
    params: Mapping[str, str],
    per_page_options: Sequence[int] = DEFAULT_PER_PAGE_OPTIONS,
    default_per_page: int = DEFAULT_PER_PAGE,
) -> ListQuery:
    """쿼리 파라미터를 ListQuery 로 변환한다.

    없거나 숫자가 아니거나 범위를 벗어난 값은 조용히 기본값으로 대체한다.
    """

    page = _parse_positive_int(params.get(PAGE_PARAM)) or 1

    per_page = _parse_positive_int(params.get(PER_PAGE_PARAM))
    if per_page not in per_page_options:
        per_page = default_per_page

    sort = SortOrder.from_str(params.get(SORT_PARAM)) or SortOrder.NEWEST

    return ListQuery(page=page, per_page=per_page, sort=sort)


class QueryStateSync:
    """ListQuery 와 URL 쿼리스트링 사이의 양방향 동기화.

    - query: 매번 위치에서 다시 읽는다.
    - set_param: 값을 쓰고, page 이외의 파라미터가 바뀌면 page 를 1 로 되돌린 뒤 위치를 교체한다.
    """

    def __init__(
        self,
        location: LocationInterface,
        per_page_options: Sequence[int] = DEFAULT_PER_PAGE_OPTIONS,
        default_per_page: int = DEFAULT_PER_PAGE,
    ) -> None:
        self._location = location
        self._per_page_options = tuple(per_page_options)
        self._default_per_page = default_per_page

    @property
    def per_page_options(self) -> tuple[int, ...]:
        return self._per_page_options

    @property
    def query(self) -> ListQuery:
        params = dict(parse_qsl(self._location.query_string, keep_blank_values=True))
        return parse_list_query(params, self._per_page_options, self._default_per_page)

    def href_for(self, name: str, value: str | int) -> str:
        """set_param(name, value) 가 이동할 URL 을 이동하지 않고 계산한다."""

        if name not in LIST_QUERY_PARAMS:
            raise ValueError(f"unknown list query parameter: {name}")

        value_str = value.value if isinstance(value, SortOrder) else str(value)

        items = parse_qsl(self._location.query_string, keep_blank_values=True)
        updates = {name: value_str}
        if name != PAGE_PARAM:
            updates[PAGE_PARAM] = "1"

        # 기존 파라미터 순서를 유지하고, 새 키는 뒤에 붙인다.
        merged: list[tuple[str, str]] = []
        seen: set[str] = set()
        for key, current in items:
            if key in updates:
                if key in seen:
                    continue
                merged.append((key, updates[key]))
                seen.add(key)
            else:
                merged.append((key, current))
        for key, new_value in updates.items():
            if key not in seen:
                merged.append((key, new_value))

        return _join_url(self._location.path, urlencode(merged))

    def set_param(self, name: str, value: str | int) -> ListQuery:
        self._location.replace(self.href_for(name, value))
        return self.query
