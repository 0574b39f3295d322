"""상담의뢰지 Repository 인터페이스."""

from abc import ABC, abstractmethod

from yeirin.domain.counsel_request.models import CounselRequest


class CounselRequestRepository(ABC):
    """상담의뢰지 Repository."""

    @abstractmethod
    async def find_by_id(self, counsel_request_id: str) -> CounselRequest | None:
        ...

    @abstractmethod
    async def save(self, counsel_request: CounselRequest) -> CounselRequest:
        ...
