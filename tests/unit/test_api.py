"""API 엔드포인트 테스트.

DB와 AI 서비스는 의존성 오버라이드로 대체합니다.
lifespan은 실행하지 않습니다 (TestClient를 컨텍스트 매니저로 쓰지 않음).
"""

from collections.abc import Iterator
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from yeirin.api.dependencies import (
    get_ai_recommendation_client,
    get_audit_service,
    get_matching_use_case,
    get_recommendations_use_case,
    get_request_recommendation_use_case,
    get_select_institution_use_case,
)
from yeirin.domain.common.errors import DomainError, NotFoundError
from yeirin.domain.counsel_request.models import (
    CounselRequest,
    CounselRequestFormData,
    CounselRequestStatus,
)
from yeirin.infrastructure.external import AIRecommendationClientError
from yeirin.main import app
from yeirin.services.counsel_request_recommendation_service import (
    CounselRequestRecommendationsResult,
    SavedRecommendation,
)
from yeirin.services.matching_service import MatchingRecommendationResult, RecommendationItem

REQUEST_TEXT = "7세 아들이 ADHD 진단을 받았습니다. 학교에서 집중하지 못합니다."
CREATED_AT = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


def make_saved(institution_id: str, rank: int, selected: bool = False) -> SavedRecommendation:
    return SavedRecommendation(
        id=f"rec-{rank}",
        institution_id=institution_id,
        score=0.9 - rank * 0.1,
        reason="추천 이유",
        rank=rank,
        selected=selected,
        is_high_score=True,
        created_at=CREATED_AT,
    )


@pytest.fixture
def audit_service() -> MagicMock:
    service = MagicMock()
    service.log = AsyncMock()
    return service


@pytest.fixture
def use_case() -> MagicMock:
    mock = MagicMock()
    mock.execute = AsyncMock()
    return mock


@pytest.fixture
def client(audit_service: MagicMock) -> Iterator[TestClient]:
    app.dependency_overrides[get_audit_service] = lambda: audit_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMatchingAPI:
    """POST /api/v1/matching/recommendations 테스트."""

    def test_추천_결과를_camelCase로_반환한다(
        self, client: TestClient, use_case: MagicMock, audit_service: MagicMock
    ) -> None:
        # Given
        use_case.execute.return_value = MatchingRecommendationResult(
            counsel_request_text=REQUEST_TEXT,
            recommendations=[
                RecommendationItem("inst-001", 0.95, "ADHD 전문", True),
                RecommendationItem("inst-002", 0.65, "가까운 거리", False),
            ],
            created_at=CREATED_AT,
        )
        app.dependency_overrides[get_matching_use_case] = lambda: use_case

        # When
        response = client.post(
            "/api/v1/matching/recommendations", json={"counselRequestText": REQUEST_TEXT}
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        assert body["counselRequestText"] == REQUEST_TEXT
        assert body["recommendations"][0] == {
            "institutionId": "inst-001",
            "score": 0.95,
            "reason": "ADHD 전문",
            "isHighScore": True,
        }
        assert body["recommendations"][1]["isHighScore"] is False
        assert "createdAt" in body
        assert response.headers["x-request-id"].startswith("req_")
        use_case.execute.assert_awaited_once_with(REQUEST_TEXT)
        audit_service.log.assert_awaited_once()

    def test_전달된_요청_ID를_그대로_사용한다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        use_case.execute.return_value = MatchingRecommendationResult(
            counsel_request_text=REQUEST_TEXT,
            recommendations=[RecommendationItem("inst-001", 0.9, "ADHD 전문", True)],
            created_at=CREATED_AT,
        )
        app.dependency_overrides[get_matching_use_case] = lambda: use_case

        response = client.post(
            "/api/v1/matching/recommendations",
            json={"counselRequestText": REQUEST_TEXT},
            headers={"x-request-id": "req_custom_123"},
        )

        assert response.headers["x-request-id"] == "req_custom_123"

    def test_짧은_텍스트는_표준_에러로_거부된다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        app.dependency_overrides[get_matching_use_case] = lambda: use_case

        response = client.post(
            "/api/v1/matching/recommendations", json={"counselRequestText": "짧음"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["statusCode"] == 400
        assert body["errorCode"] == "BAD_REQUEST"
        assert body["path"] == "/api/v1/matching/recommendations"
        assert body["requestId"] == response.headers["x-request-id"]
        assert len(body["details"]) == 1
        assert "timestamp" in body
        use_case.execute.assert_not_awaited()

    def test_AI_서비스_오류는_500으로_변환된다(
        self, client: TestClient, use_case: MagicMock, audit_service: MagicMock
    ) -> None:
        use_case.execute.side_effect = AIRecommendationClientError(
            "AI 추천 서비스 호출 실패: 503", status_code=503
        )
        app.dependency_overrides[get_matching_use_case] = lambda: use_case

        response = client.post(
            "/api/v1/matching/recommendations", json={"counselRequestText": REQUEST_TEXT}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["errorCode"] == "INTERNAL_SERVER_ERROR"
        assert body["message"] == "서버 내부 오류가 발생했습니다"
        audit_service.log.assert_not_awaited()


class TestCounselRequestAPI:
    """상담의뢰지 추천 API 테스트."""

    def test_추천_요청은_201과_저장된_목록을_반환한다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        use_case.execute.return_value = CounselRequestRecommendationsResult(
            counsel_request_id="cr-001",
            recommendations=[make_saved("inst-001", 1), make_saved("inst-002", 2)],
        )
        app.dependency_overrides[get_request_recommendation_use_case] = lambda: use_case

        response = client.post("/api/v1/counsel-requests/cr-001/recommendations")

        assert response.status_code == 201
        body = response.json()
        assert body["counselRequestId"] == "cr-001"
        assert [rec["rank"] for rec in body["recommendations"]] == [1, 2]
        assert body["recommendations"][0]["institutionId"] == "inst-001"

    def test_없는_상담의뢰지는_404를_반환한다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        use_case.execute.side_effect = NotFoundError("상담의뢰지 ID cr-404를 찾을 수 없습니다")
        app.dependency_overrides[get_recommendations_use_case] = lambda: use_case

        response = client.get("/api/v1/counsel-requests/cr-404/recommendations")

        assert response.status_code == 404
        body = response.json()
        assert body["errorCode"] == "NOT_FOUND"
        assert body["message"] == "상담의뢰지 ID cr-404를 찾을 수 없습니다"

    def test_도메인_규칙_위반은_400을_반환한다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        use_case.execute.side_effect = DomainError(
            "추천 요청은 PENDING 상태에서만 가능합니다 (현재: MATCHED)"
        )
        app.dependency_overrides[get_request_recommendation_use_case] = lambda: use_case

        response = client.post("/api/v1/counsel-requests/cr-001/recommendations")

        assert response.status_code == 400
        assert response.json()["message"].startswith("추천 요청은 PENDING 상태에서만")

    def test_추천_목록을_조회한다(self, client: TestClient, use_case: MagicMock) -> None:
        use_case.execute.return_value = [make_saved("inst-001", 1, selected=True)]
        app.dependency_overrides[get_recommendations_use_case] = lambda: use_case

        response = client.get("/api/v1/counsel-requests/cr-001/recommendations")

        assert response.status_code == 200
        assert response.json()[0]["selected"] is True

    def test_추천_기관을_선택한다(self, client: TestClient, use_case: MagicMock) -> None:
        use_case.execute.return_value = CounselRequest(
            id="cr-001",
            child_id="child-001",
            guardian_id=None,
            form_data=CounselRequestFormData.model_validate(
                {
                    "coverInfo": {
                        "requestDate": {"year": 2025, "month": 1, "day": 15},
                        "centerName": "행복지역아동센터",
                        "counselorName": "김담당",
                    },
                    "basicInfo": {
                        "childInfo": {"name": "홍길동", "gender": "MALE", "age": 8, "grade": "초2"},
                        "careType": "GENERAL",
                    },
                }
            ),
            status=CounselRequestStatus.MATCHED,
            matched_institution_id="inst-001",
        )
        app.dependency_overrides[get_select_institution_use_case] = lambda: use_case

        response = client.post(
            "/api/v1/counsel-requests/cr-001/select-institution",
            json={"institutionId": "inst-001"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "MATCHED"
        assert body["matchedInstitutionId"] == "inst-001"
        use_case.execute.assert_awaited_once_with("cr-001", "inst-001")

    def test_선택_응답에_폼_JSON_원본과_요약_항목을_포함한다(
        self, client: TestClient, use_case: MagicMock
    ) -> None:
        # Given: 폼 모델에 없는 검사 결과 항목이 포함된 원본
        raw_form_data = {
            "coverInfo": {
                "requestDate": {"year": 2025, "month": 1, "day": 15},
                "centerName": "행복지역아동센터",
                "counselorName": "김담당",
            },
            "basicInfo": {
                "childInfo": {"name": "홍길동", "gender": "MALE", "age": 8, "grade": "초2"},
                "careType": "GENERAL",
            },
            "testResults": {"attachedAssessments": [{"assessmentType": "KPRC_CO_SG_E"}]},
        }
        use_case.execute.return_value = CounselRequest.from_raw_form_data(
            id="cr-001",
            child_id="child-001",
            guardian_id="guardian-001",
            raw_form_data=raw_form_data,
            status=CounselRequestStatus.MATCHED,
            matched_institution_id="inst-001",
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )
        app.dependency_overrides[get_select_institution_use_case] = lambda: use_case

        # When
        response = client.post(
            "/api/v1/counsel-requests/cr-001/select-institution",
            json={"institutionId": "inst-001"},
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        assert body["formData"] == raw_form_data
        assert body["centerName"] == "행복지역아동센터"
        assert body["careType"] == "GENERAL"
        assert body["requestDate"] == "2025-01-15"
        assert body["guardianId"] == "guardian-001"


class TestHealthAPI:
    """헬스 체크 API 테스트."""

    def test_헬스_체크(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.parametrize("healthy", [True, False])
    def test_AI_서비스_헬스_체크(self, client: TestClient, healthy: bool) -> None:
        ai_client = MagicMock()
        ai_client.health_check = AsyncMock(return_value=healthy)
        app.dependency_overrides[get_ai_recommendation_client] = lambda: ai_client

        response = client.get("/api/v1/health/ai")

        assert response.json() == {"service": "ai-recommendation", "healthy": healthy}

    def test_없는_경로는_표준_에러로_응답한다(self, client: TestClient) -> None:
        response = client.get("/api/v1/unknown")

        assert response.status_code == 404
        assert response.json()["errorCode"] == "NOT_FOUND"

    def test_루트_엔드포인트(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.json()["status"] == "running"
