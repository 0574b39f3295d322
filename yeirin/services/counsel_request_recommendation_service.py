"""상담의뢰지 AI 추천 서비스 - 애플리케이션 계층.

상담의뢰지에 대한 AI 추천 요청, 추천 목록 조회, 추천 기관 선택을 처리합니다.
추천 자체는 RequestCounselorRecommendationUseCase에 위임하고,
여기서는 추천 결과의 저장과 상담의뢰지 상태 전이만 담당합니다.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from yeirin.core.config.settings import settings
from yeirin.domain.common.errors import DomainError, NotFoundError
from yeirin.domain.counsel_request.models import CounselRequest, CounselRequestStatus
from yeirin.domain.counsel_request.repository import CounselRequestRepository
from yeirin.domain.counsel_request_recommendation.models import CounselRequestRecommendation
from yeirin.domain.counsel_request_recommendation.repository import (
    CounselRequestRecommendationRepository,
)
from yeirin.services.matching_service import RequestCounselorRecommendationUseCase

logger = logging.getLogger(__name__)

MIN_REQUEST_TEXT_LENGTH = 10


@dataclass(frozen=True)
class SavedRecommendation:
    """저장된 추천 결과."""

    id: str
    institution_id: str
    score: float
    reason: str
    rank: int
    selected: bool
    is_high_score: bool
    created_at: datetime

    @classmethod
    def from_domain(cls, rec: CounselRequestRecommendation) -> "SavedRecommendation":
        return cls(
            id=rec.id,
            institution_id=rec.institution_id,
            score=rec.score,
            reason=rec.reason,
            rank=rec.rank,
            selected=rec.selected,
            is_high_score=rec.is_high_score(),
            created_at=rec.created_at,
        )


@dataclass(frozen=True)
class CounselRequestRecommendationsResult:
    """상담의뢰지 추천 결과."""

    counsel_request_id: str
    recommendations: list[SavedRecommendation]


async def _get_counsel_request(
    repository: CounselRequestRepository, counsel_request_id: str
) -> CounselRequest:
    counsel_request = await repository.find_by_id(counsel_request_id)
    if counsel_request is None:
        raise NotFoundError(f"상담의뢰지 ID {counsel_request_id}를 찾을 수 없습니다")
    return counsel_request


class RequestCounselRequestRecommendationUseCase:
    """상담의뢰지 AI 추천 요청.

    1. 상담의뢰지 조회 및 PENDING 상태 검증
    2. 폼 데이터를 텍스트로 변환
    3. 매칭 서비스를 통해 AI 추천 요청
    4. 기존 추천 삭제 후 상위 추천 결과를 순위와 함께 저장 (최대 5개)
    5. 상담의뢰지 상태 → RECOMMENDED
    """

    def __init__(
        self,
        counsel_request_repository: CounselRequestRepository,
        recommendation_repository: CounselRequestRecommendationRepository,
        matching_service: RequestCounselorRecommendationUseCase,
        max_recommendations: int | None = None,
    ) -> None:
        self.counsel_request_repository = counsel_request_repository
        self.recommendation_repository = recommendation_repository
        self.matching_service = matching_service
        self.max_recommendations = (
            max_recommendations
            if max_recommendations is not None
            else settings.max_saved_recommendations
        )

    async def execute(self, counsel_request_id: str) -> CounselRequestRecommendationsResult:
        """상담의뢰지에 대한 AI 추천을 요청하고 저장합니다.

        Args:
            counsel_request_id: 상담의뢰지 ID

        Returns:
            저장된 추천 목록 (순위 순)

        Raises:
            NotFoundError: 상담의뢰지가 없는 경우
            DomainError: PENDING 상태가 아니거나 의뢰 내용이 불충분한 경우
        """
        counsel_request = await _get_counsel_request(
            self.counsel_request_repository, counsel_request_id
        )

        if counsel_request.status != CounselRequestStatus.PENDING:
            raise DomainError(
                f"추천 요청은 PENDING 상태에서만 가능합니다 (현재: {counsel_request.status.value})"
            )

        counsel_request_text = counsel_request.to_text()
        if len(counsel_request_text) < MIN_REQUEST_TEXT_LENGTH:
            raise DomainError("상담의뢰지 정보가 불충분하여 추천을 요청할 수 없습니다")

        matching = await self.matching_service.execute(counsel_request_text)

        recommendations: list[CounselRequestRecommendation] = []
        for rank, item in enumerate(matching.recommendations[: self.max_recommendations], 1):
            result = CounselRequestRecommendation.create(
                id=str(uuid.uuid4()),
                counsel_request_id=counsel_request.id,
                institution_id=item.institution_id,
                score=item.score,
                reason=item.reason,
                rank=rank,
            )
            if result.is_failure:
                raise result.error
            recommendations.append(result.value)

        # PENDING 상태에 남아 있는 이전 추천 행은 새 결과로 대체한다
        await self.recommendation_repository.delete_by_counsel_request_id(counsel_request.id)
        saved = await self.recommendation_repository.save_all(recommendations)

        mark_result = counsel_request.mark_as_recommended()
        if mark_result.is_failure:
            raise mark_result.error
        await self.counsel_request_repository.save(counsel_request)

        logger.info(
            "상담의뢰지 AI 추천 저장 완료",
            extra={"counsel_request_id": counsel_request.id, "count": len(saved)},
        )

        return CounselRequestRecommendationsResult(
            counsel_request_id=counsel_request.id,
            recommendations=[SavedRecommendation.from_domain(rec) for rec in saved],
        )


class GetCounselRequestRecommendationsUseCase:
    """상담의뢰지 추천 목록 조회."""

    def __init__(
        self,
        counsel_request_repository: CounselRequestRepository,
        recommendation_repository: CounselRequestRecommendationRepository,
    ) -> None:
        self.counsel_request_repository = counsel_request_repository
        self.recommendation_repository = recommendation_repository

    async def execute(self, counsel_request_id: str) -> list[SavedRecommendation]:
        await _get_counsel_request(self.counsel_request_repository, counsel_request_id)

        recommendations = await self.recommendation_repository.find_by_counsel_request_id(
            counsel_request_id
        )
        return [SavedRecommendation.from_domain(rec) for rec in recommendations]


class SelectRecommendedInstitutionUseCase:
    """추천된 기관 중 하나 선택.

    선택한 추천에 selected를 표시하고 상담의뢰지를 MATCHED로 전환합니다.
    """

    def __init__(
        self,
        counsel_request_repository: CounselRequestRepository,
        recommendation_repository: CounselRequestRecommendationRepository,
    ) -> None:
        self.counsel_request_repository = counsel_request_repository
        self.recommendation_repository = recommendation_repository

    async def execute(self, counsel_request_id: str, institution_id: str) -> CounselRequest:
        """추천 목록에서 기관을 선택합니다.

        Args:
            counsel_request_id: 상담의뢰지 ID
            institution_id: 선택한 기관 ID

        Returns:
            MATCHED 상태로 갱신된 상담의뢰지

        Raises:
            NotFoundError: 상담의뢰지가 없는 경우
            DomainError: 추천 목록이 없거나 목록에 없는 기관, 또는 상태 전이 실패
        """
        counsel_request = await _get_counsel_request(
            self.counsel_request_repository, counsel_request_id
        )

        recommendations = await self.recommendation_repository.find_by_counsel_request_id(
            counsel_request_id
        )
        if not recommendations:
            raise DomainError("추천 목록이 없습니다. 먼저 추천을 요청하세요")

        selected = next(
            (rec for rec in recommendations if rec.institution_id == institution_id), None
        )
        if selected is None:
            raise DomainError("선택한 기관이 추천 목록에 없습니다")

        already_selected = await self.recommendation_repository.find_selected_by_counsel_request_id(
            counsel_request_id
        )
        if already_selected is not None and already_selected.id != selected.id:
            raise DomainError("이미 다른 기관이 선택된 상담의뢰지입니다")

        select_result = selected.select()
        if select_result.is_failure:
            raise select_result.error
        await self.recommendation_repository.save(selected)

        match_result = counsel_request.select_institution(institution_id)
        if match_result.is_failure:
            raise match_result.error
        updated = await self.counsel_request_repository.save(counsel_request)

        logger.info(
            "추천 기관 선택 완료",
            extra={"counsel_request_id": counsel_request_id, "institution_id": institution_id},
        )
        return updated
