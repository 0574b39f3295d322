"""매칭 도메인 값 객체.

상담의뢰지 텍스트, 기관 ID, 추천 점수를 표현하는 불변 값 객체입니다.
모든 값 객체는 ``create`` 팩토리를 통해서만 생성하며,
검증 실패는 예외가 아닌 실패 Result로 반환합니다.
"""

from dataclasses import dataclass
from typing import ClassVar

from yeirin.domain.common.result import Result, fail, ok


@dataclass(frozen=True)
class CounselRequestText:
    """상담의뢰지 텍스트 값 객체.

    앞뒤 공백을 제거한 뒤 10자 이상 5000자 이하인지 검증합니다.
    """

    MIN_LENGTH: ClassVar[int] = 10
    MAX_LENGTH: ClassVar[int] = 5000

    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result["CounselRequestText", str]:
        """상담의뢰지 텍스트를 생성합니다.

        Args:
            raw: 원본 텍스트

        Returns:
            성공 시 CounselRequestText, 실패 시 에러 메시지
        """
        text = (raw or "").strip()

        if not text:
            return fail("상담의뢰지 텍스트는 비어있을 수 없습니다")
        if len(text) < cls.MIN_LENGTH:
            return fail(f"상담의뢰지 텍스트는 최소 {cls.MIN_LENGTH}자 이상이어야 합니다")
        if len(text) > cls.MAX_LENGTH:
            return fail(f"상담의뢰지 텍스트는 최대 {cls.MAX_LENGTH}자를 초과할 수 없습니다")

        return ok(cls(text))

    def equals(self, other: "CounselRequestText") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class InstitutionId:
    """기관 ID 값 객체.

    AI 서비스가 반환한 식별자를 그대로 보관합니다 (UUID 형식 검증 없음).
    """

    value: str

    @classmethod
    def create(cls, raw: str | None) -> Result["InstitutionId", str]:
        if not raw or not raw.strip():
            return fail("기관 ID는 필수입니다")
        return ok(cls(raw))

    def equals(self, other: "InstitutionId") -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class RecommendationScore:
    """추천 점수 값 객체 (0.0 ~ 1.0).

    반올림하지 않으며, 동등성은 1e-4 오차 범위 안에서 비교합니다.
    """

    MIN_SCORE: ClassVar[float] = 0.0
    MAX_SCORE: ClassVar[float] = 1.0
    EPSILON: ClassVar[float] = 1e-4

    value: float

    @classmethod
    def create(cls, raw: float) -> Result["RecommendationScore", str]:
        # NaN은 두 비교 모두 False이므로 실패한다
        if not (cls.MIN_SCORE <= raw <= cls.MAX_SCORE):
            return fail("추천 점수는 0.0에서 1.0 사이여야 합니다")
        return ok(cls(float(raw)))

    def equals(self, other: "RecommendationScore") -> bool:
        return abs(self.value - other.value) < self.EPSILON

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecommendationScore):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]
