"""매칭 도메인."""

from yeirin.domain.matching.models import InstitutionRecommendation, MatchingRecommendation
from yeirin.domain.matching.repository import RecommendationRepository
from yeirin.domain.matching.value_objects import (
    CounselRequestText,
    InstitutionId,
    RecommendationScore,
)

__all__ = [
    "CounselRequestText",
    "InstitutionId",
    "InstitutionRecommendation",
    "MatchingRecommendation",
    "RecommendationRepository",
    "RecommendationScore",
]
