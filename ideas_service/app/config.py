from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


DEFAULT_CONFIG_FILE_NAME = "config.yaml"

IDEAS_UPSTREAM_URL = "IDEAS_UPSTREAM_URL"
IDEAS_UPSTREAM_TIMEOUT_SECONDS = "IDEAS_UPSTREAM_TIMEOUT_SECONDS"
IDEAS_PROXY_BASE_URL = "IDEAS_PROXY_BASE_URL"

DEFAULT_UPSTREAM_URL = "https://suitmedia-backend.suitdev.com/api/ideas"
DEFAULT_UPSTREAM_TIMEOUT_SECONDS = 30.0
DEFAULT_STATIC_ASSETS_HOST = "https://suitmedia.static-assets.id"
DEFAULT_BACKEND_HOST = "https://suitmedia-backend.suitdev.com"
DEFAULT_IMAGE_PATH = "/static/banner-stock.svg"
DEFAULT_PER_PAGE_OPTIONS = (10, 20, 50)
DEFAULT_PER_PAGE = 10


@dataclass(slots=True)
class UpstreamConfig:
    """원격 콘텐츠 API(ideas) 접속 설정."""

    url: str = DEFAULT_UPSTREAM_URL
    timeout_seconds: float = DEFAULT_UPSTREAM_TIMEOUT_SECONDS
    # 설정되어 있으면 목록 화면이 in-process 프록시 대신 원격 /api/ideas 를 호출한다.
    proxy_base_url: str | None = None


@dataclass(slots=True)
class ImageHostsConfig:
    static_assets_host: str = DEFAULT_STATIC_ASSETS_HOST
    backend_host: str = DEFAULT_BACKEND_HOST
    default_image: str = DEFAULT_IMAGE_PATH


@dataclass(slots=True)
class ListingConfig:
    per_page_options: tuple[int, ...] = DEFAULT_PER_PAGE_OPTIONS
    default_per_page: int = DEFAULT_PER_PAGE


@dataclass(slots=True)
class AppConfig:
    """ideas-site 전체 설정 루트.

    - listing/images 섹션은 config.yaml 에서, upstream 섹션은 환경 변수에서 읽는다.
    - config.yaml 이 없으면 기본값으로 동작한다.
    """

    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    images: ImageHostsConfig = field(default_factory=ImageHostsConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)


def _find_config_path() -> Path | None:
    """현재 작업 디렉토리 기준으로 상위로 올라가며 config.yaml 을 찾는다."""

    current = Path.cwd()
    for directory in (current, *current.parents):
        candidate = directory / DEFAULT_CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def _load_yaml(path: Path | None) -> dict:
    if path is None:
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"{path} must contain a mapping at the top level")
    return data


def load_listing_config(data: dict, path: Path | None = None) -> ListingConfig:
    listing = data.get("listing") or {}

    raw_options = listing.get("per_page_options", list(DEFAULT_PER_PAGE_OPTIONS))
    try:
        options = tuple(int(value) for value in raw_options)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(
            f"invalid listing.per_page_options in {path}: {raw_options!r}",
        ) from exc
    if not options or any(value < 1 for value in options):
        raise RuntimeError(
            f"listing.per_page_options in {path} must be positive integers: {raw_options!r}",
        )

    raw_default = listing.get("default_per_page", options[0])
    try:
        default_per_page = int(raw_default)
    except (TypeError, ValueError) as exc:  # noqa: TRY003
        raise RuntimeError(
            f"invalid listing.default_per_page in {path}: {raw_default!r}",
        ) from exc
    if default_per_page not in options:
        raise RuntimeError(
            f"listing.default_per_page ({default_per_page}) must be one of {list(options)}",
        )

    return ListingConfig(per_page_options=options, default_per_page=default_per_page)


def load_image_hosts_config(data: dict) -> ImageHostsConfig:
    images = data.get("images") or {}
    static_host = str(images.get("static_assets_host") or DEFAULT_STATIC_ASSETS_HOST)
    backend_host = str(images.get("backend_host") or DEFAULT_BACKEND_HOST)
    default_image = str(images.get("default_image") or DEFAULT_IMAGE_PATH)
    return ImageHostsConfig(
        static_assets_host=static_host.rstrip("/"),
        backend_host=backend_host.rstrip("/"),
        default_image=default_image,
    )


def load_upstream_config() -> UpstreamConfig:
    url = os.getenv(IDEAS_UPSTREAM_URL, "").strip() or DEFAULT_UPSTREAM_URL

    timeout_raw = os.getenv(IDEAS_UPSTREAM_TIMEOUT_SECONDS, "").strip()
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:  # noqa: TRY003
            raise RuntimeError(
                f"{IDEAS_UPSTREAM_TIMEOUT_SECONDS} must be a number, got: {timeout_raw!r}",
            ) from exc
    else:
        timeout = DEFAULT_UPSTREAM_TIMEOUT_SECONDS

    proxy_base_url = os.getenv(IDEAS_PROXY_BASE_URL, "").strip() or None

    return UpstreamConfig(
        url=url,
        timeout_seconds=timeout,
        proxy_base_url=proxy_base_url.rstrip("/") if proxy_base_url else None,
    )


def load_config() -> AppConfig:
    """ideas-site 설정을 로드하여 AppConfig 로 반환한다."""

    path = _find_config_path()
    data = _load_yaml(path)
    return AppConfig(
        upstream=load_upstream_config(),
        images=load_image_hosts_config(data),
        listing=load_listing_config(data, path),
    )
