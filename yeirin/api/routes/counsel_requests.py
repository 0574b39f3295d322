"""상담의뢰지 추천 API 라우터."""

from fastapi import APIRouter, Depends, Request, status

from yeirin.api.dependencies import (
    get_audit_service,
    get_recommendations_use_case,
    get_request_recommendation_use_case,
    get_select_institution_use_case,
)
from yeirin.api.middleware import get_request_id
from yeirin.core.models.api import (
    CounselRequestRecommendationDTO,
    CounselRequestRecommendationsResponseDTO,
    CounselRequestResponseDTO,
    ErrorResponse,
    SelectInstitutionRequestDTO,
)
from yeirin.infrastructure.audit.audit_service import AuditAction, AuditLogEntry, AuditService
from yeirin.services.counsel_request_recommendation_service import (
    GetCounselRequestRecommendationsUseCase,
    RequestCounselRequestRecommendationUseCase,
    SelectRecommendedInstitutionUseCase,
)

router = APIRouter(prefix="/counsel-requests", tags=["counsel-requests"])

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "잘못된 요청"},
    404: {"model": ErrorResponse, "description": "상담의뢰지를 찾을 수 없음"},
}


@router.post(
    "/{counsel_request_id}/recommendations",
    response_model=CounselRequestRecommendationsResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="상담의뢰지 AI 추천 요청",
    description="접수 대기 상태의 상담의뢰지에 대해 AI 추천을 요청하고 상위 5개를 저장합니다.",
    responses=ERROR_RESPONSES,
)
async def request_counsel_request_recommendation(
    counsel_request_id: str,
    request: Request,
    use_case: RequestCounselRequestRecommendationUseCase = Depends(
        get_request_recommendation_use_case
    ),
    audit_service: AuditService = Depends(get_audit_service),
) -> CounselRequestRecommendationsResponseDTO:
    result = await use_case.execute(counsel_request_id)

    await audit_service.log(
        AuditLogEntry(
            action=AuditAction.STATUS_CHANGE,
            entity_type="CounselRequest",
            entity_id=counsel_request_id,
            metadata={"requestId": get_request_id(request), "status": "RECOMMENDED"},
            description="상담의뢰지 AI 추천 저장",
        )
    )

    return CounselRequestRecommendationsResponseDTO(
        counsel_request_id=result.counsel_request_id,
        recommendations=[
            CounselRequestRecommendationDTO.from_saved(rec) for rec in result.recommendations
        ],
    )


@router.get(
    "/{counsel_request_id}/recommendations",
    response_model=list[CounselRequestRecommendationDTO],
    summary="상담의뢰지 추천 목록 조회",
    responses=ERROR_RESPONSES,
)
async def get_counsel_request_recommendations(
    counsel_request_id: str,
    use_case: GetCounselRequestRecommendationsUseCase = Depends(get_recommendations_use_case),
) -> list[CounselRequestRecommendationDTO]:
    recommendations = await use_case.execute(counsel_request_id)
    return [CounselRequestRecommendationDTO.from_saved(rec) for rec in recommendations]


@router.post(
    "/{counsel_request_id}/select-institution",
    response_model=CounselRequestResponseDTO,
    summary="추천 기관 선택",
    description="추천 목록 중 하나의 기관을 선택하여 매칭을 완료합니다.",
    responses=ERROR_RESPONSES,
)
async def select_recommended_institution(
    counsel_request_id: str,
    body: SelectInstitutionRequestDTO,
    request: Request,
    use_case: SelectRecommendedInstitutionUseCase = Depends(get_select_institution_use_case),
    audit_service: AuditService = Depends(get_audit_service),
) -> CounselRequestResponseDTO:
    counsel_request = await use_case.execute(counsel_request_id, body.institution_id)

    await audit_service.log(
        AuditLogEntry(
            action=AuditAction.STATUS_CHANGE,
            entity_type="CounselRequest",
            entity_id=counsel_request_id,
            metadata={
                "requestId": get_request_id(request),
                "status": counsel_request.status.value,
                "institutionId": body.institution_id,
            },
            description="추천 기관 선택",
        )
    )

    return CounselRequestResponseDTO.from_domain(counsel_request)
