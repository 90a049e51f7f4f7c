from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..images.resolver import ImageResolver
from ..listing.controller import PostsListController
from ..pagination.planner import ControlKind, PageControl, PageEllipsis, PageNumber
from ..query.state import QueryStateSync, StaticLocation
from ..services.ideas_proxy_service import IdeasProxyService
from ..services.interfaces import IdeasSourceInterface
from ..services.posts_fetcher import PostsFetcher
from ..services.proxy_http_source import ProxyHttpIdeasSource
from .formatting import format_published_date


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

CONTROL_LABELS: dict[ControlKind, str] = {
    ControlKind.FIRST: "«",
    ControlKind.PREV: "‹",
    ControlKind.NEXT: "›",
    ControlKind.LAST: "»",
}

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["published_date"] = format_published_date
templates.env.filters["control_label"] = lambda kind: CONTROL_LABELS[kind]
templates.env.tests["page_control"] = lambda entry: isinstance(entry, PageControl)
templates.env.tests["page_number"] = lambda entry: isinstance(entry, PageNumber)
templates.env.tests["page_ellipsis"] = lambda entry: isinstance(entry, PageEllipsis)

router = APIRouter()


def get_ideas_source(request: Request) -> IdeasSourceInterface:
    """목록 화면이 사용할 ideas 소스.

    IDEAS_PROXY_BASE_URL 이 설정되어 있으면 원격 프록시를, 아니면 in-process 프록시를 사용한다.
    """
    config = request.app.state.config
    client = request.app.state.http_client
    if config.upstream.proxy_base_url:
        return ProxyHttpIdeasSource(
            client,
            config.upstream.proxy_base_url,
            timeout_seconds=config.upstream.timeout_seconds,
        )
    return IdeasProxyService(client, config.upstream)


def get_image_resolver(request: Request) -> ImageResolver:
    return ImageResolver(request.app.state.config.images)


@router.get("/", response_class=HTMLResponse, summary="ideas 목록 화면")
async def ideas_page(
    request: Request,
    source: IdeasSourceInterface = Depends(get_ideas_source),
    resolver: ImageResolver = Depends(get_image_resolver),
) -> HTMLResponse:
    listing = request.app.state.config.listing
    sync = QueryStateSync(
        StaticLocation.from_url(str(request.url)),
        per_page_options=listing.per_page_options,
        default_per_page=listing.default_per_page,
    )
    controller = PostsListController(sync, PostsFetcher(source, resolver))
    page = await controller.load()

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "page": page,
            "sync": sync,
            "default_image": resolver.default_image,
        },
    )
