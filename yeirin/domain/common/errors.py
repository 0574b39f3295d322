"""도메인 에러."""


class DomainError(Exception):
    """도메인 규칙 위반 에러.

    애플리케이션 서비스가 실패한 Result를 예외로 전환할 때 사용합니다.
    API 계층에서 400 응답으로 변환됩니다.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(DomainError):
    """조회 대상이 존재하지 않는 경우 (404)."""

    pass
