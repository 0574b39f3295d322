"""FastAPI 의존성 주입."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from yeirin.infrastructure.audit.audit_service import AuditService
from yeirin.infrastructure.database.connection import get_db
from yeirin.infrastructure.database.repository import (
    SQLCounselRequestRecommendationRepository,
    SQLCounselRequestRepository,
)
from yeirin.infrastructure.external import AIRecommendationClient, AIRecommendationRepository
from yeirin.services.counsel_request_recommendation_service import (
    GetCounselRequestRecommendationsUseCase,
    RequestCounselRequestRecommendationUseCase,
    SelectRecommendedInstitutionUseCase,
)
from yeirin.services.matching_service import RequestCounselorRecommendationUseCase


def get_audit_service(request: Request) -> AuditService:
    """애플리케이션에 등록된 감사 로그 서비스."""
    return request.app.state.audit_service


def get_ai_recommendation_client() -> AIRecommendationClient:
    return AIRecommendationClient()


def get_matching_use_case(
    client: AIRecommendationClient = Depends(get_ai_recommendation_client),
) -> RequestCounselorRecommendationUseCase:
    return RequestCounselorRecommendationUseCase(AIRecommendationRepository(client))


def get_counsel_request_repository(
    db: AsyncSession = Depends(get_db),
) -> SQLCounselRequestRepository:
    return SQLCounselRequestRepository(db)


def get_counsel_request_recommendation_repository(
    db: AsyncSession = Depends(get_db),
) -> SQLCounselRequestRecommendationRepository:
    return SQLCounselRequestRecommendationRepository(db)


def get_request_recommendation_use_case(
    counsel_requests: SQLCounselRequestRepository = Depends(get_counsel_request_repository),
    recommendations: SQLCounselRequestRecommendationRepository = Depends(
        get_counsel_request_recommendation_repository
    ),
    matching: RequestCounselorRecommendationUseCase = Depends(get_matching_use_case),
) -> RequestCounselRequestRecommendationUseCase:
    return RequestCounselRequestRecommendationUseCase(counsel_requests, recommendations, matching)


def get_recommendations_use_case(
    counsel_requests: SQLCounselRequestRepository = Depends(get_counsel_request_repository),
    recommendations: SQLCounselRequestRecommendationRepository = Depends(
        get_counsel_request_recommendation_repository
    ),
) -> GetCounselRequestRecommendationsUseCase:
    return GetCounselRequestRecommendationsUseCase(counsel_requests, recommendations)


def get_select_institution_use_case(
    counsel_requests: SQLCounselRequestRepository = Depends(get_counsel_request_repository),
    recommendations: SQLCounselRequestRecommendationRepository = Depends(
        get_counsel_request_recommendation_repository
    ),
) -> SelectRecommendedInstitutionUseCase:
    return SelectRecommendedInstitutionUseCase(counsel_requests, recommendations)
