"""매칭 도메인 Repository 인터페이스."""

from abc import ABC, abstractmethod

from yeirin.domain.matching.models import MatchingRecommendation
from yeirin.domain.matching.value_objects import CounselRequestText


class RecommendationRepository(ABC):
    """상담기관 추천 Repository.

    구현체는 외부 AI 추천 서비스에 요청하고 응답을
    MatchingRecommendation Aggregate로 변환합니다.
    """

    @abstractmethod
    async def request_recommendation(
        self, counsel_request_text: CounselRequestText
    ) -> MatchingRecommendation:
        """상담의뢰지 텍스트에 대한 추천 결과를 요청합니다.

        Args:
            counsel_request_text: 검증된 상담의뢰지 텍스트

        Returns:
            추천 결과 Aggregate
        """
        ...
