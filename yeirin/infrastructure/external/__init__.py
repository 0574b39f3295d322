"""External API 클라이언트 모듈."""

from yeirin.infrastructure.external.ai_recommendation_client import (
    AIInstitutionRecommendation,
    AIRecommendationClient,
    AIRecommendationClientError,
    AIRecommendationResponse,
)
from yeirin.infrastructure.external.ai_recommendation_repository import (
    AIRecommendationRepository,
    RecommendationMappingError,
)

__all__ = [
    "AIInstitutionRecommendation",
    "AIRecommendationClient",
    "AIRecommendationClientError",
    "AIRecommendationRepository",
    "AIRecommendationResponse",
    "RecommendationMappingError",
]
