"""상담의뢰지 도메인 모델 테스트."""

from datetime import date, datetime, timezone

import pytest

from yeirin.domain.counsel_request.models import (
    CareType,
    CounselRequest,
    CounselRequestFormData,
    CounselRequestStatus,
    form_data_to_text,
)


def make_form_data(**overrides) -> CounselRequestFormData:
    data = {
        "coverInfo": {
            "requestDate": {"year": 2025, "month": 1, "day": 15},
            "centerName": "행복지역아동센터",
            "counselorName": "김담당",
        },
        "basicInfo": {
            "childInfo": {"name": "홍길동", "gender": "MALE", "age": 8, "grade": "초2"},
            "careType": "GENERAL",
        },
        "psychologicalInfo": {
            "medicalHistory": "ADHD 진단 이력",
            "specialNotes": "",
        },
        "requestMotivation": {
            "motivation": "수업 시간 집중 곤란",
            "goals": "학교 적응",
        },
    }
    data.update(overrides)
    return CounselRequestFormData.model_validate(data)


def make_counsel_request(
    status: CounselRequestStatus = CounselRequestStatus.PENDING,
) -> CounselRequest:
    return CounselRequest(
        id="cr-001",
        child_id="child-001",
        guardian_id="guardian-001",
        form_data=make_form_data(),
        status=status,
    )


class TestFormDataToText:
    """폼 데이터 텍스트 변환 테스트."""

    def test_비어있지_않은_항목만_텍스트로_변환한다(self) -> None:
        text = form_data_to_text(make_form_data())

        assert text.splitlines() == [
            "아동 정보: 8세 남아, 초2",
            "기존 병력: ADHD 진단 이력",
            "의뢰 동기: 수업 시간 집중 곤란",
            "상담 목표: 학교 적응",
        ]

    def test_선택_항목이_없으면_아동_정보만_포함한다(self) -> None:
        form_data = make_form_data(psychologicalInfo={}, requestMotivation={})

        assert form_data_to_text(form_data) == "아동 정보: 8세 남아, 초2"

    def test_여아는_여아로_표기한다(self) -> None:
        form_data = make_form_data(
            basicInfo={
                "childInfo": {"name": "김영희", "gender": "FEMALE", "age": 10, "grade": "초4"},
                "careType": "PRIORITY",
                "priorityReason": "다문화가족",
            }
        )

        assert form_data_to_text(form_data).startswith("아동 정보: 10세 여아, 초4")


class TestCounselRequest:
    """CounselRequest 상태 전이 테스트."""

    def test_PENDING에서_추천_완료로_전환한다(self) -> None:
        counsel_request = make_counsel_request()

        result = counsel_request.mark_as_recommended()

        assert result.is_success
        assert counsel_request.status == CounselRequestStatus.RECOMMENDED

    @pytest.mark.parametrize(
        "status",
        [CounselRequestStatus.RECOMMENDED, CounselRequestStatus.MATCHED],
    )
    def test_PENDING이_아니면_추천_완료로_전환할_수_없다(
        self, status: CounselRequestStatus
    ) -> None:
        counsel_request = make_counsel_request(status)

        result = counsel_request.mark_as_recommended()

        assert result.is_failure
        assert result.error.message == "AI 추천은 접수 대기 상태에서만 가능합니다"
        assert counsel_request.status == status

    def test_추천_완료_상태에서_기관을_선택한다(self) -> None:
        counsel_request = make_counsel_request(CounselRequestStatus.RECOMMENDED)

        result = counsel_request.select_institution("inst-001")

        assert result.is_success
        assert counsel_request.status == CounselRequestStatus.MATCHED
        assert counsel_request.matched_institution_id == "inst-001"

    def test_추천_완료_상태가_아니면_기관을_선택할_수_없다(self) -> None:
        counsel_request = make_counsel_request()

        result = counsel_request.select_institution("inst-001")

        assert result.is_failure
        assert result.error.message == "기관 선택은 AI 추천 완료 상태에서만 가능합니다"

    def test_빈_기관_ID로는_선택할_수_없다(self) -> None:
        counsel_request = make_counsel_request(CounselRequestStatus.RECOMMENDED)

        result = counsel_request.select_institution("  ")

        assert result.is_failure
        assert result.error.message == "기관 ID는 필수입니다"
        assert counsel_request.status == CounselRequestStatus.RECOMMENDED


class TestCounselRequestRawFormData:
    """폼 JSON 원본 보존 테스트."""

    def test_폼_모델에_없는_항목도_원본에_보존한다(self) -> None:
        # Given: 메인 백엔드가 저장한 검사 결과, 대화 분석, 보호대상 정보 포함
        raw = make_form_data().model_dump(mode="json")
        raw["basicInfo"]["careType"] = "PROTECTED"
        raw["basicInfo"]["protectedChildInfo"] = {"type": "CHILD_FACILITY"}
        raw["testResults"] = {"attachedAssessments": [{"assessmentType": "KPRC_CO_SG_E"}]}
        raw["conversationAnalysis"] = {"summary": "또래 관계 어려움 호소"}

        # When
        counsel_request = CounselRequest.from_raw_form_data(
            id="cr-001",
            child_id="child-001",
            guardian_id=None,
            raw_form_data=raw,
            status=CounselRequestStatus.PENDING,
            matched_institution_id=None,
            created_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
            updated_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
        )
        counsel_request.mark_as_recommended()

        # Then
        assert counsel_request.raw_form_data is raw
        assert counsel_request.raw_form_data["testResults"] == {
            "attachedAssessments": [{"assessmentType": "KPRC_CO_SG_E"}]
        }
        assert counsel_request.raw_form_data["basicInfo"]["protectedChildInfo"] == {
            "type": "CHILD_FACILITY"
        }
        assert counsel_request.care_type == CareType.PROTECTED
        assert counsel_request.to_text().startswith("아동 정보: 8세 남아, 초2")

    def test_원본이_없으면_폼_모델에서_채운다(self) -> None:
        counsel_request = make_counsel_request()

        assert counsel_request.raw_form_data["coverInfo"]["centerName"] == "행복지역아동센터"
        assert counsel_request.raw_form_data["basicInfo"]["careType"] == "GENERAL"

    def test_표지와_기본_정보에서_파생_항목을_읽는다(self) -> None:
        counsel_request = make_counsel_request()

        assert counsel_request.center_name == "행복지역아동센터"
        assert counsel_request.care_type == CareType.GENERAL
        assert counsel_request.request_date == date(2025, 1, 15)
