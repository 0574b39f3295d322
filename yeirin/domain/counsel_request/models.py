"""상담의뢰지 도메인 모델.

상담의뢰지 폼 데이터, 상태, AI 추천/기관 선택 상태 전이를 정의합니다.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from yeirin.domain.common.errors import DomainError
from yeirin.domain.common.result import Result, fail, ok


class CounselRequestStatus(str, Enum):
    """상담의뢰지 상태."""

    PENDING = "PENDING"  # 접수 대기
    RECOMMENDED = "RECOMMENDED"  # AI 추천 완료
    MATCHED = "MATCHED"  # 기관 선택 완료
    IN_PROGRESS = "IN_PROGRESS"  # 상담 진행 중
    COMPLETED = "COMPLETED"  # 상담 완료
    REJECTED = "REJECTED"  # 매칭 거부


class CareType(str, Enum):
    """센터 이용 기준."""

    GENERAL = "GENERAL"  # 일반
    PRIORITY = "PRIORITY"  # 우선돌봄
    PROTECTED = "PROTECTED"  # 보호대상


# =============================================================================
# 폼 데이터 (웹 클라이언트가 저장하는 camelCase 키 그대로 사용)
# =============================================================================


class RequestDate(BaseModel):
    """의뢰 일자."""

    year: int = Field(..., description="년도")
    month: int = Field(..., ge=1, le=12, description="월")
    day: int = Field(..., ge=1, le=31, description="일")

    def to_date(self) -> date:
        """date 객체로 변환."""
        return date(self.year, self.month, self.day)


class CoverInfo(BaseModel):
    """표지 정보."""

    requestDate: RequestDate = Field(..., description="의뢰 일자")
    centerName: str = Field(..., description="센터명")
    counselorName: str = Field(..., description="담당자 이름")


class ChildInfo(BaseModel):
    """아동 정보."""

    name: str = Field(..., description="아동 이름")
    gender: str = Field(..., description="성별 (MALE/FEMALE)")
    age: int = Field(..., ge=0, description="연령")
    grade: str = Field(..., description="학년")


class BasicInfo(BaseModel):
    """기본 정보."""

    childInfo: ChildInfo = Field(..., description="아동 정보")
    careType: CareType = Field(..., description="센터 이용 기준")
    priorityReason: str | None = Field(None, description="우선돌봄 세부 사유")


class PsychologicalInfo(BaseModel):
    """정서·심리 관련 정보."""

    medicalHistory: str = Field("", description="기존 아동 병력")
    specialNotes: str = Field("", description="병력 외 특이사항")


class RequestMotivation(BaseModel):
    """의뢰 동기 및 상담 목표."""

    motivation: str = Field("", description="의뢰 동기")
    goals: str = Field("", description="보호자 및 의뢰자의 목표")


class CounselRequestFormData(BaseModel):
    """상담의뢰지 폼 데이터."""

    coverInfo: CoverInfo = Field(..., description="표지 정보")
    basicInfo: BasicInfo = Field(..., description="기본 정보")
    psychologicalInfo: PsychologicalInfo = Field(
        default_factory=PsychologicalInfo, description="정서심리 정보"
    )
    requestMotivation: RequestMotivation = Field(
        default_factory=RequestMotivation, description="의뢰 동기"
    )


def form_data_to_text(form_data: CounselRequestFormData) -> str:
    """상담의뢰지 폼 데이터를 AI 추천용 텍스트로 변환합니다.

    비어 있는 항목은 생략합니다.

    Args:
        form_data: 상담의뢰지 폼 데이터

    Returns:
        줄바꿈으로 구분된 상담의뢰 텍스트
    """
    child = form_data.basicInfo.childInfo
    gender_label = {"MALE": "남아", "FEMALE": "여아"}.get(child.gender, child.gender)

    lines = [f"아동 정보: {child.age}세 {gender_label}, {child.grade}"]

    sections = [
        ("기존 병력", form_data.psychologicalInfo.medicalHistory),
        ("특이사항", form_data.psychologicalInfo.specialNotes),
        ("의뢰 동기", form_data.requestMotivation.motivation),
        ("상담 목표", form_data.requestMotivation.goals),
    ]
    for label, content in sections:
        if content and content.strip():
            lines.append(f"{label}: {content.strip()}")

    return "\n".join(lines)


# =============================================================================
# 엔티티
# =============================================================================


@dataclass
class CounselRequest:
    """상담의뢰지 엔티티.

    AI 추천 플로우의 상태 전이만 다룹니다:
    PENDING → RECOMMENDED → MATCHED

    ``form_data``는 추천 텍스트 생성에 필요한 항목만 읽은 모델이고,
    ``raw_form_data``는 메인 백엔드가 저장한 폼 JSON 원본입니다
    (검사 결과, 대화 분석 등 이 서비스가 모르는 항목 포함).
    """

    id: str
    child_id: str
    guardian_id: str | None
    form_data: CounselRequestFormData
    status: CounselRequestStatus = CounselRequestStatus.PENDING
    matched_institution_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    raw_form_data: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.raw_form_data is None:
            self.raw_form_data = self.form_data.model_dump(mode="json")

    @classmethod
    def from_raw_form_data(
        cls,
        id: str,
        child_id: str,
        guardian_id: str | None,
        raw_form_data: dict[str, Any],
        status: CounselRequestStatus,
        matched_institution_id: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "CounselRequest":
        """DB에 저장된 폼 JSON 원본으로 복원합니다."""
        return cls(
            id=id,
            child_id=child_id,
            guardian_id=guardian_id,
            form_data=CounselRequestFormData.model_validate(raw_form_data),
            status=status,
            matched_institution_id=matched_institution_id,
            created_at=created_at,
            updated_at=updated_at,
            raw_form_data=raw_form_data,
        )

    @property
    def center_name(self) -> str:
        return self.form_data.coverInfo.centerName

    @property
    def care_type(self) -> CareType:
        return self.form_data.basicInfo.careType

    @property
    def request_date(self) -> date:
        return self.form_data.coverInfo.requestDate.to_date()

    def mark_as_recommended(self) -> Result[None, DomainError]:
        """AI 추천 완료 처리 (PENDING → RECOMMENDED)."""
        if self.status != CounselRequestStatus.PENDING:
            return fail(DomainError("AI 추천은 접수 대기 상태에서만 가능합니다"))

        self.status = CounselRequestStatus.RECOMMENDED
        self.updated_at = datetime.now(timezone.utc)
        return ok()

    def select_institution(self, institution_id: str) -> Result[None, DomainError]:
        """추천된 기관 중 하나를 선택합니다 (RECOMMENDED → MATCHED)."""
        if self.status != CounselRequestStatus.RECOMMENDED:
            return fail(DomainError("기관 선택은 AI 추천 완료 상태에서만 가능합니다"))

        if not institution_id or not institution_id.strip():
            return fail(DomainError("기관 ID는 필수입니다"))

        self.status = CounselRequestStatus.MATCHED
        self.matched_institution_id = institution_id
        self.updated_at = datetime.now(timezone.utc)
        return ok()

    def to_text(self) -> str:
        """AI 추천 요청용 텍스트."""
        return form_data_to_text(self.form_data)

    def __repr__(self) -> str:
        return f"<CounselRequest id={self.id} status={self.status.value}>"
