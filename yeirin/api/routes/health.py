"""헬스 체크 API 라우터."""

from fastapi import APIRouter, Depends

from yeirin.api.dependencies import get_ai_recommendation_client
from yeirin.core.config.settings import settings
from yeirin.core.models.api import DependencyHealthResponse, HealthCheckResponse
from yeirin.infrastructure.external import AIRecommendationClient

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthCheckResponse,
    summary="헬스 체크",
    description="서비스 상태를 확인합니다.",
)
async def health_check() -> HealthCheckResponse:
    """헬스 체크 엔드포인트.

    서비스의 상태, 버전, 이름을 반환합니다.
    Kubernetes Liveness/Readiness 프로브에서 사용됩니다.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.app_version,
        service=settings.app_name,
    )


@router.get(
    "/ai",
    response_model=DependencyHealthResponse,
    summary="AI 추천 서비스 헬스 체크",
    description="AI 추천 MSA 연결 상태를 확인합니다.",
)
async def ai_service_health_check(
    client: AIRecommendationClient = Depends(get_ai_recommendation_client),
) -> DependencyHealthResponse:
    return DependencyHealthResponse(
        service="ai-recommendation",
        healthy=await client.health_check(),
    )
