"""Request ID 미들웨어.

모든 요청에 추적용 ID를 부여하고 응답 헤더로 돌려줍니다.
"""

import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

REQUEST_ID_HEADER = "x-request-id"


def _to_base36(number: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    result = ""
    while number:
        number, remainder = divmod(number, 36)
        result = digits[remainder] + result
    return result or "0"


def generate_request_id() -> str:
    """요청 ID를 생성합니다. 형식: req_{base36 ms}_{12자리 hex}."""
    timestamp = _to_base36(int(time.time() * 1000))
    return f"req_{timestamp}_{uuid.uuid4().hex[:12]}"


def get_request_id(request: Request) -> str:
    """요청에 부여된 ID를 반환합니다 (없으면 헤더 또는 새로 생성)."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get(REQUEST_ID_HEADER) or generate_request_id()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """기존 x-request-id를 사용하거나 새로 생성해 request.state에 저장합니다."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
