"""매칭 도메인 모델.

AI 추천 서비스가 반환한 기관별 추천 결과(InstitutionRecommendation)와
하나의 상담의뢰지에 대한 전체 추천 결과(MatchingRecommendation)를 정의합니다.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar

from yeirin.domain.common.result import Result, fail, ok
from yeirin.domain.matching.value_objects import (
    CounselRequestText,
    InstitutionId,
    RecommendationScore,
)


@dataclass(frozen=True)
class InstitutionRecommendation:
    """단일 상담기관 추천 결과 엔티티.

    생성 후에는 변경할 수 없습니다.
    """

    MAX_REASON_LENGTH: ClassVar[int] = 1000
    HIGH_SCORE_THRESHOLD: ClassVar[float] = 0.7

    institution_id: InstitutionId
    score: RecommendationScore
    reason: str

    @classmethod
    def create(
        cls,
        institution_id: InstitutionId,
        score: RecommendationScore,
        reason: str | None,
    ) -> Result["InstitutionRecommendation", str]:
        """기관 추천 결과를 생성합니다.

        Args:
            institution_id: 기관 ID
            score: 추천 점수
            reason: 추천 이유 (1-1000자)

        Returns:
            성공 시 InstitutionRecommendation, 실패 시 에러 메시지
        """
        if not reason or not reason.strip():
            return fail("추천 이유는 필수입니다")

        if len(reason) > cls.MAX_REASON_LENGTH:
            return fail(f"추천 이유는 최대 {cls.MAX_REASON_LENGTH}자까지 가능합니다")

        return ok(cls(institution_id=institution_id, score=score, reason=reason.strip()))

    def is_high_score(self) -> bool:
        """높은 점수(0.7 이상)의 추천인지 판별합니다."""
        return self.score.value >= self.HIGH_SCORE_THRESHOLD


@dataclass(frozen=True)
class MatchingRecommendation:
    """매칭 추천 Aggregate Root.

    하나의 상담의뢰지에 대한 1~10개의 추천 결과를 보관합니다.
    정렬과 필터링은 내부 상태를 바꾸지 않고 새 리스트를 반환합니다.
    """

    MIN_RECOMMENDATIONS: ClassVar[int] = 1
    MAX_RECOMMENDATIONS: ClassVar[int] = 10

    counsel_request_text: CounselRequestText
    _recommendations: tuple[InstitutionRecommendation, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        counsel_request_text: CounselRequestText,
        recommendations: Sequence[InstitutionRecommendation],
        created_at: datetime | None = None,
    ) -> Result["MatchingRecommendation", str]:
        """매칭 추천 결과를 생성합니다.

        Args:
            counsel_request_text: 상담의뢰지 텍스트
            recommendations: 기관별 추천 결과 (1-10개)
            created_at: 생성 시각 (기본값: 현재 UTC 시각)

        Returns:
            성공 시 MatchingRecommendation, 실패 시 에러 메시지
        """
        if len(recommendations) < cls.MIN_RECOMMENDATIONS:
            return fail("최소 1개 이상의 추천 결과가 필요합니다")

        if len(recommendations) > cls.MAX_RECOMMENDATIONS:
            return fail(f"추천 결과는 최대 {cls.MAX_RECOMMENDATIONS}개까지 가능합니다")

        return ok(
            cls(
                counsel_request_text=counsel_request_text,
                _recommendations=tuple(recommendations),
                created_at=created_at or datetime.now(timezone.utc),
            )
        )

    @property
    def recommendations(self) -> list[InstitutionRecommendation]:
        """추천 결과 목록 (입력 순서, 복사본)."""
        return list(self._recommendations)

    def get_sorted_by_score(self) -> list[InstitutionRecommendation]:
        """점수 내림차순으로 정렬된 추천 목록을 반환합니다.

        동점인 추천은 입력 순서를 유지합니다.
        """
        return sorted(self._recommendations, key=lambda rec: rec.score.value, reverse=True)

    def get_top_recommendation(self) -> InstitutionRecommendation:
        """최고 점수 추천을 반환합니다."""
        return self.get_sorted_by_score()[0]

    def get_high_scored_recommendations(self) -> list[InstitutionRecommendation]:
        """높은 점수(0.7 이상)의 추천만 입력 순서대로 반환합니다."""
        return [rec for rec in self._recommendations if rec.is_high_score()]

    def __repr__(self) -> str:
        return (
            f"<MatchingRecommendation "
            f"count={len(self._recommendations)} "
            f"created_at={self.created_at.isoformat()}>"
        )
