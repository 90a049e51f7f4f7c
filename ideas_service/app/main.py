from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware

from .api.ideas import router as ideas_router
from .config import AppConfig, load_config
from .web.pages import router as pages_router


logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """앱 생명주기 동안 공유 HTTP 클라이언트를 관리한다.

    테스트에서 app.state.http_client 를 미리 넣어두면 그 클라이언트를 그대로 사용한다.
    """
    owns_client = getattr(app.state, "http_client", None) is None
    if owns_client:
        app.state.http_client = httpx.AsyncClient(follow_redirects=True)
    logger.info("ideas-site starting up (upstream=%s)", app.state.config.upstream.url)

    try:
        yield
    finally:
        if owns_client:
            await app.state.http_client.aclose()
            app.state.http_client = None
        logger.info("ideas-site stopped")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """FastAPI 앱 팩토리."""
    setup_logger(name="ideas-site")
    app = FastAPI(
        title="Ideas Site",
        description="원격 콘텐츠 API 의 ideas 목록을 정렬/페이지네이션하여 보여주는 사이트",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config or load_config()
    app.state.http_client = None

    app.add_middleware(RequestTraceMiddleware)

    app.include_router(ideas_router, prefix="/api/ideas", tags=["ideas"])
    app.include_router(pages_router, tags=["pages"])
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    """명령행에서 실행할 수 있도록 uvicorn 런처를 제공한다."""

    import uvicorn

    port = int(os.getenv("IDEAS_SITE_PORT", "8000"))
    uvicorn.run(
        "ideas_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
