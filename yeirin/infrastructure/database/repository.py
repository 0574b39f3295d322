"""상담의뢰지/추천 레포지토리 - 데이터베이스 접근 계층."""

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from yeirin.domain.counsel_request.models import CounselRequest, CounselRequestStatus
from yeirin.domain.counsel_request.repository import CounselRequestRepository
from yeirin.domain.counsel_request_recommendation.models import CounselRequestRecommendation
from yeirin.domain.counsel_request_recommendation.repository import (
    CounselRequestRecommendationRepository,
)
from yeirin.infrastructure.database.models import (
    CounselRequestORM,
    CounselRequestRecommendationORM,
)

logger = structlog.get_logger(__name__)


class SQLCounselRequestRepository(CounselRequestRepository):
    """counsel_requests 테이블 레포지토리.

    상담의뢰지 행은 메인 백엔드가 생성합니다. 이 레포지토리는 AI 추천
    플로우가 바꾸는 컬럼(status, matchedInstitutionId, updatedAt)만 갱신하며
    formData JSON은 읽기만 합니다.
    """

    def __init__(self, session: AsyncSession) -> None:
        """레포지토리를 초기화합니다.

        Args:
            session: 비동기 데이터베이스 세션
        """
        self.session = session

    async def find_by_id(self, counsel_request_id: str) -> CounselRequest | None:
        result = await self.session.execute(
            select(CounselRequestORM).where(CounselRequestORM.id == counsel_request_id)
        )
        orm_request = result.scalar_one_or_none()
        return self._to_domain(orm_request) if orm_request else None

    async def save(self, counsel_request: CounselRequest) -> CounselRequest:
        await self.session.execute(
            update(CounselRequestORM)
            .where(CounselRequestORM.id == counsel_request.id)
            .values(
                {
                    CounselRequestORM.status: counsel_request.status.value,
                    CounselRequestORM.matched_institution_id: (
                        counsel_request.matched_institution_id
                    ),
                    CounselRequestORM.updated_at: counsel_request.updated_at,
                }
            )
        )
        await self.session.flush()

        logger.debug(
            "counsel_request_saved",
            counsel_request_id=counsel_request.id,
            status=counsel_request.status.value,
        )
        return counsel_request

    def _to_domain(self, orm_request: CounselRequestORM) -> CounselRequest:
        return CounselRequest.from_raw_form_data(
            id=str(orm_request.id),
            child_id=str(orm_request.child_id),
            guardian_id=orm_request.guardian_id,
            raw_form_data=orm_request.form_data,
            status=CounselRequestStatus(orm_request.status),
            matched_institution_id=orm_request.matched_institution_id,
            created_at=orm_request.created_at,
            updated_at=orm_request.updated_at,
        )


class SQLCounselRequestRecommendationRepository(CounselRequestRecommendationRepository):
    """counsel_request_recommendations 테이블 레포지토리."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(
        self, recommendation: CounselRequestRecommendation
    ) -> CounselRequestRecommendation:
        merged = await self.session.merge(self._to_orm(recommendation))
        await self.session.flush()
        return self._to_domain(merged)

    async def save_all(
        self, recommendations: list[CounselRequestRecommendation]
    ) -> list[CounselRequestRecommendation]:
        orm_recommendations = [self._to_orm(rec) for rec in recommendations]
        self.session.add_all(orm_recommendations)
        await self.session.flush()

        logger.info(
            "counsel_request_recommendations_saved",
            count=len(orm_recommendations),
        )
        return [self._to_domain(orm_rec) for orm_rec in orm_recommendations]

    async def find_by_counsel_request_id(
        self, counsel_request_id: str
    ) -> list[CounselRequestRecommendation]:
        stmt = (
            select(CounselRequestRecommendationORM)
            .where(CounselRequestRecommendationORM.counsel_request_id == counsel_request_id)
            .order_by(CounselRequestRecommendationORM.rank.asc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm_rec) for orm_rec in result.scalars().all()]

    async def find_selected_by_counsel_request_id(
        self, counsel_request_id: str
    ) -> CounselRequestRecommendation | None:
        stmt = (
            select(CounselRequestRecommendationORM)
            .where(CounselRequestRecommendationORM.counsel_request_id == counsel_request_id)
            .where(CounselRequestRecommendationORM.selected.is_(True))
        )
        result = await self.session.execute(stmt)
        orm_rec = result.scalars().first()
        return self._to_domain(orm_rec) if orm_rec else None

    async def delete_by_counsel_request_id(self, counsel_request_id: str) -> None:
        await self.session.execute(
            delete(CounselRequestRecommendationORM).where(
                CounselRequestRecommendationORM.counsel_request_id == counsel_request_id
            )
        )

    def _to_domain(self, orm_rec: CounselRequestRecommendationORM) -> CounselRequestRecommendation:
        return CounselRequestRecommendation.restore(
            id=str(orm_rec.id),
            counsel_request_id=str(orm_rec.counsel_request_id),
            institution_id=str(orm_rec.institution_id),
            score=float(orm_rec.score),
            reason=orm_rec.reason,
            rank=orm_rec.rank,
            selected=orm_rec.selected,
            created_at=orm_rec.created_at,
        )

    def _to_orm(self, recommendation: CounselRequestRecommendation) -> CounselRequestRecommendationORM:
        return CounselRequestRecommendationORM(
            id=recommendation.id,
            counsel_request_id=recommendation.counsel_request_id,
            institution_id=recommendation.institution_id,
            score=recommendation.score,
            reason=recommendation.reason,
            rank=recommendation.rank,
            selected=recommendation.selected,
            created_at=recommendation.created_at,
        )
