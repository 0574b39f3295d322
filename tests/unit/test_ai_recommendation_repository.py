"""AI 추천 Repository 테스트."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from yeirin.domain.matching.value_objects import CounselRequestText
from yeirin.infrastructure.external.ai_recommendation_client import (
    AIInstitutionRecommendation,
    AIRecommendationClient,
    AIRecommendationClientError,
    AIRecommendationResponse,
)
from yeirin.infrastructure.external.ai_recommendation_repository import (
    AIRecommendationRepository,
    RecommendationMappingError,
)


def make_item(
    institution_id: str = "inst-001", score: float = 0.9, reasoning: str = "ADHD 전문"
) -> AIInstitutionRecommendation:
    return AIInstitutionRecommendation(
        institution_id=institution_id,
        center_name="서울아동심리상담센터",
        score=score,
        reasoning=reasoning,
        address="서울시 강남구",
        average_rating=4.5,
    )


def make_repository(items: list[AIInstitutionRecommendation]) -> AIRecommendationRepository:
    client = MagicMock(spec=AIRecommendationClient)
    client.request_recommendation = AsyncMock(
        return_value=AIRecommendationResponse(
            recommendations=items,
            total_institutions=len(items),
            request_text="8세 남아, ADHD 의심 증상",
        )
    )
    return AIRecommendationRepository(client=client)


@pytest.fixture
def request_text() -> CounselRequestText:
    return CounselRequestText.create("8세 남아, ADHD 의심 증상").value


class TestAIRecommendationRepository:
    """AIRecommendationRepository 테스트."""

    @pytest.mark.asyncio
    async def test_AI_응답을_도메인_모델로_변환한다(self, request_text: CounselRequestText) -> None:
        # Given
        repository = make_repository(
            [make_item("inst-001", 0.9, "ADHD 전문"), make_item("inst-002", 0.8, "가까운 거리")]
        )

        # When
        matching = await repository.request_recommendation(request_text)

        # Then
        repository.client.request_recommendation.assert_awaited_once_with(
            "8세 남아, ADHD 의심 증상"
        )
        recs = matching.recommendations
        assert matching.counsel_request_text == request_text
        assert [rec.institution_id.value for rec in recs] == ["inst-001", "inst-002"]
        assert recs[0].score.value == 0.9
        assert recs[1].reason == "가까운 거리"

    @pytest.mark.asyncio
    async def test_추천_결과가_비어있으면_변환_에러가_발생한다(
        self, request_text: CounselRequestText
    ) -> None:
        repository = make_repository([])

        with pytest.raises(RecommendationMappingError, match="최소 1개 이상의 추천 결과가 필요합니다"):
            await repository.request_recommendation(request_text)

    @pytest.mark.asyncio
    async def test_점수가_범위를_벗어나면_변환_에러가_발생한다(
        self, request_text: CounselRequestText
    ) -> None:
        repository = make_repository([make_item(score=1.5)])

        with pytest.raises(RecommendationMappingError, match="추천 점수는 0.0에서 1.0 사이여야 합니다"):
            await repository.request_recommendation(request_text)

    @pytest.mark.asyncio
    async def test_기관_ID가_비어있으면_변환_에러가_발생한다(
        self, request_text: CounselRequestText
    ) -> None:
        repository = make_repository([make_item(institution_id="  ")])

        with pytest.raises(RecommendationMappingError, match="기관 ID는 필수입니다"):
            await repository.request_recommendation(request_text)

    @pytest.mark.asyncio
    async def test_추천_이유가_비어있으면_변환_에러가_발생한다(
        self, request_text: CounselRequestText
    ) -> None:
        repository = make_repository([make_item(reasoning="")])

        with pytest.raises(RecommendationMappingError, match="추천 이유는 필수입니다"):
            await repository.request_recommendation(request_text)

    @pytest.mark.asyncio
    async def test_클라이언트_에러는_그대로_전파된다(self, request_text: CounselRequestText) -> None:
        client = MagicMock(spec=AIRecommendationClient)
        client.request_recommendation = AsyncMock(
            side_effect=AIRecommendationClientError("AI 추천 서비스 연결 실패: refused")
        )
        repository = AIRecommendationRepository(client=client)

        with pytest.raises(AIRecommendationClientError):
            await repository.request_recommendation(request_text)
