"""전역 예외 처리기.

모든 예외를 표준 에러 응답 형식으로 변환하고 요청 ID와 함께 로깅합니다.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from yeirin.api.middleware import REQUEST_ID_HEADER, get_request_id
from yeirin.core.models.api import ErrorResponse
from yeirin.domain.common.errors import DomainError, NotFoundError
from yeirin.infrastructure.external import AIRecommendationClientError, RecommendationMappingError

logger = logging.getLogger(__name__)

ERROR_CODE_MAP: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    429: "TOO_MANY_REQUESTS",
    500: "INTERNAL_SERVER_ERROR",
    502: "BAD_GATEWAY",
    503: "SERVICE_UNAVAILABLE",
}

INTERNAL_ERROR_MESSAGE = "서버 내부 오류가 발생했습니다"


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    details: list[str] | None = None,
    exc: Exception | None = None,
) -> JSONResponse:
    request_id = get_request_id(request)
    body = ErrorResponse(
        status_code=status_code,
        error_code=ERROR_CODE_MAP.get(status_code, "UNKNOWN_ERROR"),
        message=message,
        details=details or None,
        request_id=request_id,
        path=request.url.path,
        timestamp=datetime.now(timezone.utc),
    )

    log_context = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "error_code": body.error_code,
        "error_message": message,
    }
    if status_code >= 500:
        logger.error("요청 처리 실패", extra=log_context, exc_info=exc)
    else:
        logger.warning("잘못된 요청", extra=log_context)

    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers={REQUEST_ID_HEADER: request_id},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = (
        status.HTTP_404_NOT_FOUND if isinstance(exc, NotFoundError) else status.HTTP_400_BAD_REQUEST
    )
    return _error_response(request, status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        f"{'.'.join(str(loc) for loc in error['loc'] if loc != 'body')}: {error['msg']}"
        for error in exc.errors()
    ]
    message = details[0] if details else "요청을 처리할 수 없습니다"
    return _error_response(request, status.HTTP_400_BAD_REQUEST, message, details)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "요청을 처리할 수 없습니다"
    return _error_response(request, exc.status_code, message)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        request, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, exc=exc
    )


def register_exception_handlers(app: FastAPI) -> None:
    """애플리케이션에 전역 예외 처리기를 등록합니다."""
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AIRecommendationClientError, internal_error_handler)
    app.add_exception_handler(RecommendationMappingError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
