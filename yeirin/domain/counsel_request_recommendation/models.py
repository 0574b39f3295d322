"""상담의뢰지 추천 도메인 모델.

상담의뢰지에 대해 저장되는 AI 추천 결과(최대 5개)를 정의합니다.
매칭 Aggregate와 달리 DB에 영속화되며 선택 상태를 가집니다.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from yeirin.domain.common.errors import DomainError
from yeirin.domain.common.result import Result, fail, ok

MIN_SCORE = 0
MAX_SCORE = 1
MIN_RANK = 1
MAX_RANK = 5
MAX_REASON_LENGTH = 1000


@dataclass
class CounselRequestRecommendation:
    """상담의뢰지 추천 엔티티."""

    id: str
    counsel_request_id: str
    institution_id: str
    score: float
    reason: str
    rank: int
    selected: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        id: str,
        counsel_request_id: str,
        institution_id: str,
        score: float,
        reason: str,
        rank: int,
    ) -> Result["CounselRequestRecommendation", DomainError]:
        """새로운 추천을 생성합니다.

        Args:
            id: 추천 ID
            counsel_request_id: 상담의뢰지 ID
            institution_id: 기관 ID
            score: 추천 점수 (0~1)
            reason: 추천 이유 (1-1000자)
            rank: 순위 (1~5)

        Returns:
            성공 시 선택되지 않은 추천, 실패 시 DomainError
        """
        if not id or not id.strip():
            return fail(DomainError("추천 ID는 필수입니다"))

        if not counsel_request_id or not counsel_request_id.strip():
            return fail(DomainError("상담의뢰지 ID는 필수입니다"))

        if not institution_id or not institution_id.strip():
            return fail(DomainError("기관 ID는 필수입니다"))

        if not (MIN_SCORE <= score <= MAX_SCORE):
            return fail(DomainError(f"추천 점수는 {MIN_SCORE}~{MAX_SCORE} 사이여야 합니다"))

        if not reason or not reason.strip():
            return fail(DomainError("추천 이유는 필수입니다"))

        if len(reason) > MAX_REASON_LENGTH:
            return fail(DomainError(f"추천 이유는 최대 {MAX_REASON_LENGTH}자까지 가능합니다"))

        if not (MIN_RANK <= rank <= MAX_RANK):
            return fail(DomainError(f"순위는 {MIN_RANK}~{MAX_RANK} 사이여야 합니다"))

        return ok(
            cls(
                id=id,
                counsel_request_id=counsel_request_id,
                institution_id=institution_id,
                score=score,
                reason=reason.strip(),
                rank=rank,
            )
        )

    @classmethod
    def restore(
        cls,
        id: str,
        counsel_request_id: str,
        institution_id: str,
        score: float,
        reason: str,
        rank: int,
        selected: bool,
        created_at: datetime,
    ) -> "CounselRequestRecommendation":
        """DB에서 읽은 값으로 검증 없이 복원합니다."""
        return cls(
            id=id,
            counsel_request_id=counsel_request_id,
            institution_id=institution_id,
            score=score,
            reason=reason,
            rank=rank,
            selected=selected,
            created_at=created_at,
        )

    def select(self) -> Result[None, DomainError]:
        """이 추천을 선택 처리합니다."""
        if self.selected:
            return fail(DomainError("이미 선택된 추천입니다"))

        self.selected = True
        return ok()

    def is_high_score(self) -> bool:
        """높은 점수(0.7 이상)의 추천인지 판별합니다."""
        return self.score >= 0.7

    def is_selected(self) -> bool:
        return self.selected
