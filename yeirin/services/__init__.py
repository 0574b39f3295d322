"""Service layer.

Provides application services for the matching and counsel request flows.
"""

from yeirin.services.counsel_request_recommendation_service import (
    GetCounselRequestRecommendationsUseCase,
    RequestCounselRequestRecommendationUseCase,
    SelectRecommendedInstitutionUseCase,
)
from yeirin.services.matching_service import (
    InvalidCounselRequestTextError,
    MatchingRecommendationResult,
    RequestCounselorRecommendationUseCase,
)

__all__ = [
    "GetCounselRequestRecommendationsUseCase",
    "InvalidCounselRequestTextError",
    "MatchingRecommendationResult",
    "RequestCounselRequestRecommendationUseCase",
    "RequestCounselorRecommendationUseCase",
    "SelectRecommendedInstitutionUseCase",
]
