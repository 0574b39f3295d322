"""상담 매칭 API 라우터."""

from fastapi import APIRouter, Depends, Request, status

from yeirin.api.dependencies import get_audit_service, get_matching_use_case
from yeirin.api.middleware import get_request_id
from yeirin.core.models.api import (
    ErrorResponse,
    MatchingRecommendationRequestDTO,
    MatchingRecommendationResponseDTO,
)
from yeirin.infrastructure.audit.audit_service import AuditAction, AuditLogEntry, AuditService
from yeirin.services.matching_service import RequestCounselorRecommendationUseCase

router = APIRouter(prefix="/matching", tags=["matching"])


@router.post(
    "/recommendations",
    response_model=MatchingRecommendationResponseDTO,
    status_code=status.HTTP_200_OK,
    summary="상담기관 추천 요청",
    description="AI 기반으로 상담 의뢰지 텍스트를 분석하여 최적의 상담기관을 추천합니다.",
    responses={
        400: {"model": ErrorResponse, "description": "잘못된 요청 (텍스트 길이 부족 등)"},
        500: {"model": ErrorResponse, "description": "서버 오류 또는 AI 서비스 오류"},
    },
)
async def request_recommendation(
    body: MatchingRecommendationRequestDTO,
    request: Request,
    use_case: RequestCounselorRecommendationUseCase = Depends(get_matching_use_case),
    audit_service: AuditService = Depends(get_audit_service),
) -> MatchingRecommendationResponseDTO:
    """상담기관 추천 API.

    상담 의뢰지 텍스트를 AI 추천 서비스에 전달하고
    점수 내림차순으로 정렬된 추천 결과를 반환합니다.
    """
    result = await use_case.execute(body.counsel_request_text)

    await audit_service.log(
        AuditLogEntry(
            action=AuditAction.CREATE,
            entity_type="MatchingRecommendation",
            metadata={
                "requestId": get_request_id(request),
                "recommendationsCount": len(result.recommendations),
            },
            description="상담기관 AI 추천 요청",
        )
    )

    return MatchingRecommendationResponseDTO.from_result(result)
