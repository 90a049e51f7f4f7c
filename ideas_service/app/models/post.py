from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# 원격 API 가 이미지를 실어 보낼 수 있는 필드 이름 (해석 우선순위 순서)
IMAGE_FIELD_PRIORITY: tuple[str, ...] = (
    "medium_image",
    "small_image",
    "featured_image",
    "image",
    "thumbnail",
    "photo",
    "picture",
)


class ImageDescriptor(BaseModel):
    """URL 과 부가 메타데이터(크기, mime 등)를 담은 이미지 참조."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str | None = None
    width: int | None = None
    height: int | None = None
    mime: str | None = None
    size: int | None = None


class RawPostRecord(BaseModel):
    """원격 API 가 돌려주는 게시글 한 건 (신뢰하지 않는 입력).

    이미지 필드는 없음/문자열/ImageDescriptor 객체/그 배열 중 어떤 형태로든 올 수 있으므로
    원본 값을 그대로 보관하고, 해석은 ImageResolver 에 맡긴다.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    title: str = ""
    published_at: str = ""

    medium_image: Any = None
    small_image: Any = None
    featured_image: Any = None
    image: Any = None
    thumbnail: Any = None
    photo: Any = None
    picture: Any = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("id must be a string or an integer")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("title", "published_at", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def image_fields(self) -> list[tuple[str, Any]]:
        """우선순위 순서대로 (필드 이름, 원본 값) 목록을 돌려준다."""
        return [(name, getattr(self, name)) for name in IMAGE_FIELD_PRIORITY]


class Post(BaseModel):
    """화면에 그릴 게시글 도메인 모델. image_url 은 항상 해석이 끝난 값이다."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    published_at: str
    image_url: str = Field(min_length=1)
