from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from pydantic import ValidationError

from ..config import ImageHostsConfig
from ..models.post import ImageDescriptor, RawPostRecord


@dataclass(frozen=True, slots=True)
class AbsentImage:
    pass


@dataclass(frozen=True, slots=True)
class StringImage:
    value: str


@dataclass(frozen=True, slots=True)
class DescriptorImage:
    descriptor: ImageDescriptor


@dataclass(frozen=True, slots=True)
class SequenceImage:
    items: tuple["ImageValue", ...]


ImageValue = Union[AbsentImage, StringImage, DescriptorImage, SequenceImage]


@dataclass(frozen=True, slots=True)
class ResolvedImage:
    url: str
    # 값을 제공한 이미지 필드 이름. 기본 이미지를 사용했다면 None.
    source_field: str | None


def classify_image_value(value: Any) -> ImageValue:
    """JSON 에서 온 임의의 값을 ImageValue 태그드 유니언으로 분류한다."""

    if value is None:
        return AbsentImage()
    if isinstance(value, str):
        return StringImage(value)
    if isinstance(value, ImageDescriptor):
        return DescriptorImage(value)
    if isinstance(value, Mapping):
        url = value.get("url")
        if not isinstance(url, str):
            return AbsentImage()
        try:
            descriptor = ImageDescriptor.model_validate(dict(value))
        except ValidationError:
            # width/height 등 메타데이터가 깨져 있어도 url 은 살린다.
            descriptor = ImageDescriptor(url=url)
        return DescriptorImage(descriptor)
    if isinstance(value, (list, tuple)):
        return SequenceImage(tuple(classify_image_value(item) for item in value))
    return AbsentImage()


def extract_image_path(value: ImageValue) -> str | None:
    """ImageValue 에서 원본 이미지 경로를 꺼낸다. 꺼낼 값이 없으면 None."""

    if isinstance(value, SequenceImage):
        if not value.items:
            return None
        return extract_image_path(value.items[0])
    if isinstance(value, DescriptorImage):
        return value.descriptor.url or None
    if isinstance(value, StringImage):
        return value.value or None
    return None


class ImageResolver:
    """게시글 레코드의 여러 이미지 필드 중 하나를 골라 브라우저가 불러올 수 있는 URL 로 만든다.

    - 필드 우선순위: medium_image, small_image, featured_image, image, thumbnail, photo, picture
    - 값이 나온 첫 필드만 사용하고, 이후 필드는 보지 않는다.
    - 어떤 입력에도 예외를 내지 않으며, 항상 비어있지 않은 URL 을 돌려준다.
    """

    def __init__(self, hosts: ImageHostsConfig | None = None) -> None:
        self._hosts = hosts or ImageHostsConfig()

    @property
    def default_image(self) -> str:
        return self._hosts.default_image

    def resolve(self, record: RawPostRecord) -> str:
        return self.resolve_with_source(record).url

    def resolve_with_source(self, record: RawPostRecord) -> ResolvedImage:
        for field_name, raw_value in record.image_fields():
            path = extract_image_path(classify_image_value(raw_value))
            if path is not None:
                return ResolvedImage(url=self.build_url(path), source_field=field_name)
        return ResolvedImage(url=self.build_url(None), source_field=None)

    def build_url(self, path: str | None) -> str:
        if not path:
            return self._hosts.default_image
        if path.lower().startswith(("http://", "https://")):
            return path
        if path.startswith("/"):
            return f"{self._hosts.static_assets_host}{path}"
        return f"{self._hosts.backend_host}{path}"
