"""데이터베이스 ORM 모델.

메인 백엔드 스키마의 camelCase 컬럼명을 그대로 사용합니다.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, Float, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """ORM 모델의 기본 클래스."""

    pass


class CounselRequestORM(Base):
    """상담의뢰지 ORM 모델."""

    __tablename__ = "counsel_requests"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    child_id: Mapped[str] = mapped_column("childId", UUID(as_uuid=False), nullable=False)
    guardian_id: Mapped[str | None] = mapped_column(
        "guardianId", UUID(as_uuid=False), nullable=True
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="PENDING")
    form_data: Mapped[dict[str, Any]] = mapped_column("formData", JSONB, nullable=False)
    matched_institution_id: Mapped[str | None] = mapped_column(
        "matchedInstitutionId", UUID(as_uuid=False), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt", DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class CounselRequestRecommendationORM(Base):
    """상담의뢰지 추천 ORM 모델."""

    __tablename__ = "counsel_request_recommendations"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    counsel_request_id: Mapped[str] = mapped_column(
        "counselRequestId", UUID(as_uuid=False), nullable=False, index=True
    )
    institution_id: Mapped[str] = mapped_column(
        "institutionId", UUID(as_uuid=False), nullable=False
    )
    score: Mapped[float] = mapped_column(Float, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    selected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now()
    )


class AuditLogORM(Base):
    """감사 로그 ORM 모델."""

    __tablename__ = "audit_logs"

    id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column("entityType", String(100), nullable=False)
    entity_id: Mapped[str | None] = mapped_column("entityId", String(100), nullable=True)
    user_id: Mapped[str | None] = mapped_column("userId", String(100), nullable=True)
    metadata_: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSONB, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_success: Mapped[bool] = mapped_column("isSuccess", Boolean, default=True)
    error_message: Mapped[str | None] = mapped_column("errorMessage", Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), server_default=func.now(), index=True
    )
