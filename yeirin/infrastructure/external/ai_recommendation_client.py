"""AI 추천 MSA 클라이언트.

yeirin-ai(FastAPI) 추천 서비스와 HTTP로 통신합니다.
"""

import logging

import httpx
from pydantic import BaseModel, ValidationError

from yeirin.core.config.settings import settings

logger = logging.getLogger(__name__)


class AIRecommendationClientError(Exception):
    """AI 추천 클라이언트 에러.

    Attributes:
        status_code: 업스트림 HTTP 상태 코드 (연결 실패 등은 None)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AIInstitutionRecommendation(BaseModel):
    """AI 서비스가 반환하는 개별 기관 추천."""

    institution_id: str
    center_name: str
    score: float
    reasoning: str
    address: str
    average_rating: float


class AIRecommendationResponse(BaseModel):
    """AI 추천 서비스 응답."""

    recommendations: list[AIInstitutionRecommendation]
    total_institutions: int
    request_text: str


class AIRecommendationClient:
    """AI 추천 MSA 클라이언트.

    재시도 없이 한 번 요청하며, 실패는 모두 AIRecommendationClientError로 전달합니다.
    """

    RECOMMENDATIONS_PATH = "/api/v1/recommendations"
    HEALTH_PATH = "/api/v1/health"

    def __init__(
        self,
        base_url: str | None = None,
        timeout_ms: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """클라이언트 초기화.

        Args:
            base_url: AI 추천 서비스 URL. None이면 설정에서 가져옴.
            timeout_ms: HTTP 요청 타임아웃 (밀리초). None이면 설정에서 가져옴.
            transport: httpx 전송 계층 (테스트용)
        """
        if base_url is None:
            base_url = settings.ai_recommendation_service_url
        if timeout_ms is None:
            timeout_ms = settings.ai_recommendation_api_timeout
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout_ms / 1000
        self._transport = transport

        logger.info("AI 추천 클라이언트 초기화", extra={"url": self.base_url})

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def request_recommendation(self, counsel_request_text: str) -> AIRecommendationResponse:
        """상담의뢰지 텍스트를 AI 서비스에 전송하여 추천 결과를 요청합니다.

        Args:
            counsel_request_text: 상담의뢰지 텍스트

        Returns:
            AI 추천 응답

        Raises:
            AIRecommendationClientError: 연결 실패, HTTP 에러, 응답 형식 오류
        """
        logger.info(
            "AI 추천 요청",
            extra={"url": self.base_url, "text_length": len(counsel_request_text)},
        )

        try:
            async with self._client() as client:
                response = await client.post(
                    self.RECOMMENDATIONS_PATH,
                    json={"counsel_request_text": counsel_request_text},
                )
                response.raise_for_status()
                result = AIRecommendationResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            message = self._extract_detail(e.response) or f"AI 추천 서비스 호출 실패: {status_code}"
            logger.error(
                "AI 추천 실패",
                extra={"status_code": status_code, "response": e.response.text[:500]},
            )
            raise AIRecommendationClientError(message, status_code=status_code) from e

        except httpx.RequestError as e:
            logger.error("AI 추천 서비스 연결 에러", extra={"error": str(e)})
            raise AIRecommendationClientError(f"AI 추천 서비스 연결 실패: {e}") from e

        except (ValueError, ValidationError) as e:
            logger.error("AI 추천 응답 형식 오류", extra={"error": str(e)})
            raise AIRecommendationClientError(f"AI 추천 응답 형식 오류: {e}") from e

        logger.info(
            "AI 추천 성공",
            extra={"recommendations_count": len(result.recommendations)},
        )
        return result

    async def health_check(self) -> bool:
        """AI 서비스 헬스 체크.

        Returns:
            200 응답이고 status가 healthy이면 True
        """
        try:
            async with self._client() as client:
                response = await client.get(self.HEALTH_PATH)
                data = response.json() if response.status_code == 200 else None
                is_healthy = isinstance(data, dict) and data.get("status") == "healthy"
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("AI 서비스 헬스 체크 실패", extra={"error": str(e)})
            return False

        logger.info("AI 서비스 헬스 체크", extra={"healthy": is_healthy})
        return is_healthy

    @staticmethod
    def _extract_detail(response: httpx.Response) -> str | None:
        """FastAPI 에러 응답의 detail 메시지를 추출합니다."""
        try:
            data = response.json()
        except ValueError:
            return None
        detail = data.get("detail") if isinstance(data, dict) else None
        return detail if isinstance(detail, str) else None
