"""상담기관 추천 요청 서비스 - 애플리케이션 계층."""

import logging
from dataclasses import dataclass
from datetime import datetime

from yeirin.domain.common.errors import DomainError
from yeirin.domain.matching.models import InstitutionRecommendation
from yeirin.domain.matching.repository import RecommendationRepository
from yeirin.domain.matching.value_objects import CounselRequestText

logger = logging.getLogger(__name__)


class InvalidCounselRequestTextError(DomainError):
    """상담의뢰지 텍스트 검증 실패."""

    pass


@dataclass(frozen=True)
class RecommendationItem:
    """정렬된 추천 결과 항목."""

    institution_id: str
    score: float
    reason: str
    is_high_score: bool

    @classmethod
    def from_domain(cls, recommendation: InstitutionRecommendation) -> "RecommendationItem":
        return cls(
            institution_id=recommendation.institution_id.value,
            score=recommendation.score.value,
            reason=recommendation.reason,
            is_high_score=recommendation.is_high_score(),
        )


@dataclass(frozen=True)
class MatchingRecommendationResult:
    """추천 요청 결과."""

    counsel_request_text: str
    recommendations: list[RecommendationItem]
    created_at: datetime


class RequestCounselorRecommendationUseCase:
    """상담기관 추천 요청.

    1. 상담의뢰지 텍스트 검증
    2. AI 추천 서비스에 요청
    3. 추천 결과를 점수 내림차순으로 정렬하여 반환
    """

    def __init__(self, recommendation_repository: RecommendationRepository) -> None:
        self.recommendation_repository = recommendation_repository

    async def execute(self, counsel_request_text: str) -> MatchingRecommendationResult:
        """상담의뢰지 텍스트에 대한 추천을 요청합니다.

        Args:
            counsel_request_text: 상담의뢰지 텍스트

        Returns:
            점수 내림차순으로 정렬된 추천 결과

        Raises:
            InvalidCounselRequestTextError: 텍스트 검증 실패 시
        """
        text_result = CounselRequestText.create(counsel_request_text)
        if text_result.is_failure:
            raise InvalidCounselRequestTextError(text_result.error)

        matching = await self.recommendation_repository.request_recommendation(text_result.value)

        sorted_recommendations = matching.get_sorted_by_score()
        logger.info(
            "상담기관 추천 완료",
            extra={
                "recommendations_count": len(sorted_recommendations),
                "high_score_count": len(matching.get_high_scored_recommendations()),
            },
        )

        return MatchingRecommendationResult(
            counsel_request_text=matching.counsel_request_text.value,
            recommendations=[RecommendationItem.from_domain(rec) for rec in sorted_recommendations],
            created_at=matching.created_at,
        )
