"""상담의뢰지 추천 Repository 인터페이스."""

from abc import ABC, abstractmethod

from yeirin.domain.counsel_request_recommendation.models import CounselRequestRecommendation


class CounselRequestRecommendationRepository(ABC):
    """상담의뢰지 추천 Repository."""

    @abstractmethod
    async def save(
        self, recommendation: CounselRequestRecommendation
    ) -> CounselRequestRecommendation:
        ...

    @abstractmethod
    async def save_all(
        self, recommendations: list[CounselRequestRecommendation]
    ) -> list[CounselRequestRecommendation]:
        ...

    @abstractmethod
    async def find_by_counsel_request_id(
        self, counsel_request_id: str
    ) -> list[CounselRequestRecommendation]:
        """상담의뢰지의 추천 목록을 순위 오름차순으로 조회합니다."""
        ...

    @abstractmethod
    async def find_selected_by_counsel_request_id(
        self, counsel_request_id: str
    ) -> CounselRequestRecommendation | None:
        ...

    @abstractmethod
    async def delete_by_counsel_request_id(self, counsel_request_id: str) -> None:
        ...
