"""AI 추천 Repository 구현체.

AI MSA 클라이언트의 snake_case 응답을 매칭 도메인 모델로 변환합니다.
"""

import logging

from yeirin.domain.matching.models import InstitutionRecommendation, MatchingRecommendation
from yeirin.domain.matching.repository import RecommendationRepository
from yeirin.domain.matching.value_objects import (
    CounselRequestText,
    InstitutionId,
    RecommendationScore,
)
from yeirin.infrastructure.external.ai_recommendation_client import AIRecommendationClient

logger = logging.getLogger(__name__)


class RecommendationMappingError(Exception):
    """AI 응답을 도메인 모델로 변환할 수 없는 경우."""

    pass


class AIRecommendationRepository(RecommendationRepository):
    """AI 추천 서비스 기반 RecommendationRepository."""

    def __init__(self, client: AIRecommendationClient | None = None) -> None:
        self.client = client or AIRecommendationClient()

    async def request_recommendation(
        self, counsel_request_text: CounselRequestText
    ) -> MatchingRecommendation:
        """AI 서비스에 추천을 요청하고 Aggregate로 변환합니다.

        Args:
            counsel_request_text: 검증된 상담의뢰지 텍스트

        Returns:
            추천 결과 Aggregate

        Raises:
            AIRecommendationClientError: AI 서비스 호출 실패 시
            RecommendationMappingError: 응답 값이 도메인 규칙을 위반한 경우
        """
        response = await self.client.request_recommendation(counsel_request_text.value)

        recommendations: list[InstitutionRecommendation] = []
        for rec in response.recommendations:
            institution_id = InstitutionId.create(rec.institution_id)
            if institution_id.is_failure:
                raise self._mapping_error(institution_id.error)

            score = RecommendationScore.create(rec.score)
            if score.is_failure:
                raise self._mapping_error(score.error)

            recommendation = InstitutionRecommendation.create(
                institution_id=institution_id.value,
                score=score.value,
                reason=rec.reasoning,
            )
            if recommendation.is_failure:
                raise self._mapping_error(recommendation.error)

            recommendations.append(recommendation.value)

        matching = MatchingRecommendation.create(
            counsel_request_text=counsel_request_text,
            recommendations=recommendations,
        )
        if matching.is_failure:
            raise self._mapping_error(matching.error)

        return matching.value

    @staticmethod
    def _mapping_error(message: str) -> RecommendationMappingError:
        logger.error("AI 추천 응답 변환 실패", extra={"reason": message})
        return RecommendationMappingError(message)
