from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..exceptions import UpstreamError
from ..services.ideas_proxy_service import IdeasProxyService, get_ideas_proxy_service
from .schemas.ideas import ErrorResponse


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="ideas 목록 프록시",
    description=(
        "page/per_page/sort 를 원격 콘텐츠 API 의 페이지네이션 문법으로 바꿔 전달하고, "
        "성공하면 응답 JSON 을 그대로, 실패하면 {error} 와 500 을 반환한다."
    ),
    responses={500: {"model": ErrorResponse}},
)
async def list_ideas(
    page: str = Query("1", description="조회할 페이지 (1부터 시작)"),
    per_page: str = Query("10", description="페이지당 아이템 개수"),
    sort: str | None = Query(None, description="newest 이면 최신순, 그 밖에는 오래된 순"),
    service: IdeasProxyService = Depends(get_ideas_proxy_service),
) -> Any:
    try:
        data = await service.fetch_ideas(page=page, per_page=per_page, sort=sort)
    except UpstreamError:
        logger.exception("ideas proxy failed")
        return JSONResponse(status_code=500, content=ErrorResponse().model_dump())

    return JSONResponse(content=data)
