import logging
import time
import uuid
from urllib.parse import parse_qs

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


REQUEST_ID_HEADER = "X-Request-Id"
SPAN_ID_HEADER = "X-Span-Id"

# 로그에서 제외할 경로 (정확 일치)
IGNORED_LOG_PATHS: set[str] = {"/health", "/favicon.ico"}

# 로그에서 제외할 경로 prefix (정적 파일 등)
IGNORED_LOG_PREFIXES: tuple[str, ...] = ("/static/",)


class RequestTraceMiddleware(BaseHTTPMiddleware):
    """공통 Request/Span ID 로그 미들웨어.

    - 들어오는 요청에서 X-Request-Id, X-Span-Id 를 읽고, 없으면 request_id만 새로 생성한다.
    - request.state 에 request_id, span_id 를 저장한다.
    - 응답 헤더에 동일한 값을 설정한다.
    - 요청마다 "completed request" 한 줄, 실패 시 traceback 을 포함한 로그를 남긴다.
    """

    def __init__(self, app, logger: logging.Logger | None = None) -> None:  # type: ignore[override]
        super().__init__(app)
        self._logger = logger or logging.getLogger("request_trace")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id, span_id = self._extract_trace_ids(request)
        request.state.request_id = request_id
        request.state.span_id = span_id

        should_log = self._should_log_request(request)
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            if should_log:
                self._log_exception(
                    request, request_id, span_id, time.monotonic() - start
                )
            raise

        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        response.headers.setdefault(SPAN_ID_HEADER, span_id)

        if should_log:
            self._logger.info(
                "completed request",
                extra=self._build_log_extra(
                    request,
                    request_id,
                    span_id,
                    status=response.status_code,
                    duration=time.monotonic() - start,
                ),
            )

        return response

    def _extract_trace_ids(self, request: Request) -> tuple[str, str]:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        span_id = request.headers.get(SPAN_ID_HEADER) or "0"
        return request_id, span_id

    def _should_log_request(self, request: Request) -> bool:
        path = request.url.path
        if path in IGNORED_LOG_PATHS:
            return False
        return not path.startswith(IGNORED_LOG_PREFIXES)

    def _build_log_extra(
        self,
        request: Request,
        request_id: str,
        span_id: str,
        status: int | None = None,
        duration: float | None = None,
    ) -> dict[str, object]:
        extra: dict[str, object] = {
            "request_id": request_id,
            "span_id": span_id,
            "method": request.method,
            "path": request.url.path,
        }

        # page/per_page/sort 처럼 목록 화면의 상태가 쿼리스트링에 실리므로 함께 남긴다.
        query = request.url.query
        if query:
            parsed = parse_qs(query, keep_blank_values=True)
            if parsed:
                extra["query_params"] = {
                    key: values[0] if len(values) == 1 else values
                    for key, values in parsed.items()
                }

        if status is not None:
            extra["status"] = status

        if duration is not None:
            extra["duration"] = f"{duration * 1000:.3f}ms"

        return extra

    def _log_exception(
        self,
        request: Request,
        request_id: str,
        span_id: str,
        duration: float,
    ) -> None:
        self._logger.exception(
            "request failed",
            extra=self._build_log_extra(
                request, request_id, span_id, duration=duration
            ),
        )
