"""공통 도메인 모듈."""

from yeirin.domain.common.errors import DomainError, NotFoundError
from yeirin.domain.common.result import Err, Ok, Result, combine, fail, ok

__all__ = [
    "DomainError",
    "NotFoundError",
    "Err",
    "Ok",
    "Result",
    "combine",
    "fail",
    "ok",
]
