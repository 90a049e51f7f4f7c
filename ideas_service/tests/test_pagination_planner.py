from __future__ import annotations

from ideas_service.app.pagination.planner import (
    ControlKind,
    PageControl,
    PageEllipsis,
    PageNumber,
    PageSelectorEntry,
    plan,
)


def _layout(entries: list[PageSelectorEntry]) -> list[int | str]:
    """페이지 번호/말줄임표 부분만 [1, "...", 4, ...] 형태로 뽑는다."""

    layout: list[int | str] = []
    for entry in entries:
        if isinstance(entry, PageNumber):
            layout.append(entry.number)
        elif isinstance(entry, PageEllipsis):
            layout.append("...")
    return layout


def _controls(entries: list[PageSelectorEntry]) -> dict[ControlKind, PageControl]:
    return {entry.kind: entry for entry in entries if isinstance(entry, PageControl)}


def test_small_page_count_shows_every_page() -> None:
    entries = plan(2, 7)

    assert _layout(entries) == [1, 2, 3, 4, 5, 6, 7]


def test_controls_surround_the_numbers() -> None:
    entries = plan(3, 5)

    kinds = [entry.kind for entry in entries if isinstance(entry, PageControl)]
    assert kinds == [ControlKind.FIRST, ControlKind.PREV, ControlKind.NEXT, ControlKind.LAST]
    assert isinstance(entries[0], PageControl) and isinstance(entries[1], PageControl)
    assert isinstance(entries[-2], PageControl) and isinstance(entries[-1], PageControl)


def test_window_in_the_middle_has_two_ellipses() -> None:
    assert _layout(plan(5, 10)) == [1, "...", 3, 4, 5, 6, 7, "...", 10]


def test_window_at_the_start() -> None:
    assert _layout(plan(1, 10)) == [1, 2, 3, "...", 10]
    assert _layout(plan(4, 10)) == [1, 2, 3, 4, 5, 6, "...", 10]


def test_window_at_the_end() -> None:
    assert _layout(plan(10, 10)) == [1, "...", 8, 9, 10]


def test_single_skipped_page_still_gets_an_ellipsis() -> None:
    assert _layout(plan(5, 9)) == [1, "...", 3, 4, 5, 6, 7, "...", 9]


def test_current_page_is_marked() -> None:
    numbers = [entry for entry in plan(3, 5) if isinstance(entry, PageNumber)]

    assert [entry.number for entry in numbers if entry.is_current] == [3]


def test_first_page_disables_first_and_prev() -> None:
    controls = _controls(plan(1, 5))

    assert not controls[ControlKind.FIRST].enabled
    assert not controls[ControlKind.PREV].enabled
    assert controls[ControlKind.NEXT].enabled
    assert controls[ControlKind.LAST].enabled


def test_last_page_disables_next_and_last() -> None:
    controls = _controls(plan(5, 5))

    assert controls[ControlKind.FIRST].enabled
    assert controls[ControlKind.PREV].enabled
    assert not controls[ControlKind.NEXT].enabled
    assert not controls[ControlKind.LAST].enabled


def test_control_targets() -> None:
    controls = _controls(plan(3, 10))

    assert controls[ControlKind.FIRST].target_page == 1
    assert controls[ControlKind.PREV].target_page == 2
    assert controls[ControlKind.NEXT].target_page == 4
    assert controls[ControlKind.LAST].target_page == 10


def test_empty_listing_has_only_disabled_controls() -> None:
    entries = plan(1, 0)

    assert _layout(entries) == []
    assert len(entries) == 4
    assert all(isinstance(entry, PageControl) and not entry.enabled for entry in entries)


def test_large_listings_always_include_first_and_last_in_increasing_order() -> None:
    for last_page in range(8, 40):
        for current_page in range(1, last_page + 1):
            layout = _layout(plan(current_page, last_page))
            numbers = [item for item in layout if isinstance(item, int)]

            assert numbers[0] == 1
            assert numbers[-1] == last_page
            assert current_page in numbers
            assert all(a < b for a, b in zip(numbers, numbers[1:]))
            # 말줄임표는 연속으로 나오지 않는다.
            assert all(
                not (a == "..." and b == "...") for a, b in zip(layout, layout[1:])
            )
