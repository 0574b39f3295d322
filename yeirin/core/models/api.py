"""API 요청/응답 모델 (DTO).

웹 클라이언트와 주고받는 JSON은 camelCase 키를 사용합니다.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from yeirin.domain.counsel_request.models import CareType, CounselRequest, CounselRequestStatus
from yeirin.services.counsel_request_recommendation_service import SavedRecommendation
from yeirin.services.matching_service import MatchingRecommendationResult, RecommendationItem


class CamelModel(BaseModel):
    """camelCase 직렬화 기본 모델."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# 매칭 추천
# =============================================================================


class MatchingRecommendationRequestDTO(CamelModel):
    """상담기관 추천 요청 DTO."""

    counsel_request_text: str = Field(
        min_length=10,
        max_length=5000,
        description="상담 의뢰지 텍스트 (10-5000자)",
        examples=[
            "7세 아들이 ADHD 진단을 받았습니다. 학교에서 집중하지 못하고 친구들과 자주 다툽니다. "
            "전문적인 심리 상담과 행동 치료가 필요할 것 같아요."
        ],
    )


class RecommendationResultDTO(CamelModel):
    """개별 상담기관 추천 결과 DTO."""

    institution_id: str = Field(description="상담기관 ID")
    score: float = Field(ge=0.0, le=1.0, description="추천 점수 (0.0 ~ 1.0)")
    reason: str = Field(description="AI가 분석한 추천 이유")
    is_high_score: bool = Field(description="높은 점수 여부 (0.7 이상)")

    @classmethod
    def from_item(cls, item: RecommendationItem) -> "RecommendationResultDTO":
        return cls(
            institution_id=item.institution_id,
            score=item.score,
            reason=item.reason,
            is_high_score=item.is_high_score,
        )


class MatchingRecommendationResponseDTO(CamelModel):
    """매칭 추천 응답 DTO."""

    counsel_request_text: str = Field(description="요청한 상담의뢰지 텍스트")
    recommendations: list[RecommendationResultDTO] = Field(
        description="추천 결과 목록 (점수 순으로 정렬)"
    )
    created_at: datetime = Field(description="추천 생성 시간")

    @classmethod
    def from_result(cls, result: MatchingRecommendationResult) -> "MatchingRecommendationResponseDTO":
        return cls(
            counsel_request_text=result.counsel_request_text,
            recommendations=[RecommendationResultDTO.from_item(i) for i in result.recommendations],
            created_at=result.created_at,
        )


# =============================================================================
# 상담의뢰지 추천
# =============================================================================


class CounselRequestRecommendationDTO(CamelModel):
    """저장된 상담의뢰지 추천 DTO."""

    id: str
    institution_id: str
    score: float
    reason: str
    rank: int
    selected: bool
    is_high_score: bool
    created_at: datetime

    @classmethod
    def from_saved(cls, rec: SavedRecommendation) -> "CounselRequestRecommendationDTO":
        return cls(
            id=rec.id,
            institution_id=rec.institution_id,
            score=rec.score,
            reason=rec.reason,
            rank=rec.rank,
            selected=rec.selected,
            is_high_score=rec.is_high_score,
            created_at=rec.created_at,
        )


class CounselRequestRecommendationsResponseDTO(CamelModel):
    """상담의뢰지 추천 요청 응답 DTO."""

    counsel_request_id: str
    recommendations: list[CounselRequestRecommendationDTO]


class SelectInstitutionRequestDTO(CamelModel):
    """추천 기관 선택 요청 DTO."""

    institution_id: str = Field(min_length=1, description="선택한 기관 ID")


class CounselRequestResponseDTO(CamelModel):
    """상담의뢰지 응답 DTO."""

    id: str
    child_id: str
    guardian_id: str | None
    status: CounselRequestStatus
    form_data: dict[str, Any] = Field(description="상담의뢰지 폼 JSON 원본")
    center_name: str
    care_type: CareType
    request_date: date
    matched_institution_id: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, counsel_request: CounselRequest) -> "CounselRequestResponseDTO":
        return cls(
            id=counsel_request.id,
            child_id=counsel_request.child_id,
            guardian_id=counsel_request.guardian_id,
            status=counsel_request.status,
            form_data=counsel_request.raw_form_data,
            center_name=counsel_request.center_name,
            care_type=counsel_request.care_type,
            request_date=counsel_request.request_date,
            matched_institution_id=counsel_request.matched_institution_id,
            created_at=counsel_request.created_at,
            updated_at=counsel_request.updated_at,
        )


# =============================================================================
# 공통
# =============================================================================


class HealthCheckResponse(BaseModel):
    """헬스 체크 응답 모델."""

    status: str = Field(default="healthy", description="서비스 상태")
    version: str = Field(description="애플리케이션 버전")
    service: str = Field(description="서비스 이름")


class DependencyHealthResponse(BaseModel):
    """외부 의존 서비스 헬스 체크 응답 모델."""

    service: str = Field(description="의존 서비스 이름")
    healthy: bool = Field(description="정상 여부")


class ErrorResponse(CamelModel):
    """표준 에러 응답."""

    status_code: int = Field(description="HTTP 상태 코드")
    error_code: str = Field(description="에러 코드")
    message: str = Field(description="에러 메시지")
    details: list[str] | None = Field(default=None, description="상세 에러 목록")
    request_id: str = Field(description="요청 추적 ID")
    path: str = Field(description="요청 경로")
    timestamp: datetime = Field(description="에러 발생 시간")
