from __future__ import annotations

from pydantic import BaseModel


PROXY_ERROR_MESSAGE = "Failed to fetch data"


class ErrorResponse(BaseModel):
    """프록시 실패 응답 DTO."""

    error: str = PROXY_ERROR_MESSAGE
