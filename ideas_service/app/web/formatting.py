from __future__ import annotations

from datetime import datetime


# id-ID 로케일의 월 이름 (OS 로케일 설치 여부와 무관하게 동일한 결과를 내기 위해 직접 둔다)
INDONESIAN_MONTHS: tuple[str, ...] = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def parse_published_at(value: str) -> datetime | None:
    text = (value or "").strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_published_date(value: str) -> str:
    """발행일을 "6 Oktober 2022" 형태로 바꾼다. 해석할 수 없으면 원문을 그대로 돌려준다."""

    parsed = parse_published_at(value)
    if parsed is None:
        return value
    return f"{parsed.day} {INDONESIAN_MONTHS[parsed.month - 1]} {parsed.year}"
