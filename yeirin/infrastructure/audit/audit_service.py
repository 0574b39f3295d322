"""감사 로그 서비스.

요청 처리 경로를 막지 않도록 감사 로그를 메모리 큐에 쌓아 두었다가
주기적으로 또는 큐가 임계치에 도달하면 일괄 저장합니다.
전달 보장은 없습니다: 저장 실패한 배치나 프로세스 종료 전 큐에 남은 항목은 유실됩니다.
"""

import asyncio
import logging
import uuid
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from yeirin.core.config.settings import settings
from yeirin.infrastructure.database.models import AuditLogORM

logger = logging.getLogger(__name__)


class AuditAction(str, Enum):
    """감사 액션 유형."""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    STATUS_CHANGE = "STATUS_CHANGE"


@dataclass
class AuditLogEntry:
    """감사 로그 항목."""

    action: AuditAction
    entity_type: str
    entity_id: str | None = None
    user_id: str | None = None
    metadata: dict[str, Any] | None = None
    description: str | None = None
    is_success: bool = True
    error_message: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_orm(self) -> AuditLogORM:
        return AuditLogORM(
            id=str(uuid.uuid4()),
            action=self.action.value,
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            user_id=self.user_id,
            metadata_=self.metadata,
            description=self.description,
            is_success=self.is_success,
            error_message=self.error_message,
            created_at=self.created_at,
        )


class AuditService:
    """감사 로그 서비스.

    사용법:
        service = AuditService()
        await service.start()
        await service.log(AuditLogEntry(action=AuditAction.CREATE, entity_type="Matching"))
        await service.stop()
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] | None = None,
        flush_interval: float | None = None,
        flush_threshold: int | None = None,
        batch_size: int | None = None,
    ) -> None:
        """서비스 초기화.

        Args:
            session_factory: 비동기 세션 팩토리. None이면 기본 연결 사용.
            flush_interval: 주기적 처리 간격 (초)
            flush_threshold: 즉시 처리를 시작하는 큐 크기
            batch_size: 한 번에 저장할 최대 항목 수
        """
        self._session_factory = session_factory
        self.flush_interval = (
            flush_interval if flush_interval is not None else settings.audit_flush_interval_seconds
        )
        self.flush_threshold = (
            flush_threshold if flush_threshold is not None else settings.audit_flush_threshold
        )
        self.batch_size = batch_size if batch_size is not None else settings.audit_batch_size

        self._queue: deque[AuditLogEntry] = deque()
        self._is_processing = False
        self._task: asyncio.Task[None] | None = None

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    async def log(self, entry: AuditLogEntry) -> None:
        """감사 로그를 큐에 추가합니다 (비차단).

        큐 크기가 임계치 이상이면 즉시 처리합니다.
        """
        self._queue.append(entry)

        if len(self._queue) >= self.flush_threshold:
            await self.process_queue()

    async def log_immediate(self, entry: AuditLogEntry) -> None:
        """감사 로그를 즉시 저장합니다.

        Raises:
            Exception: 저장 실패 시 그대로 전달
        """
        try:
            await self._write([entry])
        except Exception:
            logger.error(
                "감사 로그 저장 실패",
                extra={"action": entry.action.value, "entity_type": entry.entity_type},
            )
            raise

        logger.debug(
            "감사 로그 저장",
            extra={
                "action": entry.action.value,
                "entity_type": entry.entity_type,
                "entity_id": entry.entity_id,
            },
        )

    async def process_queue(self) -> None:
        """큐에서 최대 batch_size개를 꺼내 일괄 저장합니다.

        저장에 실패한 배치는 버립니다.
        """
        if self._is_processing or not self._queue:
            return

        self._is_processing = True
        batch = [self._queue.popleft() for _ in range(min(self.batch_size, len(self._queue)))]

        try:
            await self._write(batch)
            logger.debug("감사 로그 일괄 저장", extra={"count": len(batch)})
        except Exception as e:
            logger.error(
                "감사 로그 큐 처리 실패",
                extra={"error": str(e), "dropped": len(batch), "queue_size": len(self._queue)},
            )
        finally:
            self._is_processing = False

    async def start(self) -> None:
        """주기적 큐 처리 태스크를 시작합니다."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """주기적 처리를 중단하고 남은 큐를 처리합니다."""
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        while self._queue and not self._is_processing:
            before = len(self._queue)
            await self.process_queue()
            if len(self._queue) >= before:
                break

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.flush_interval)
            await self.process_queue()

    async def _write(self, entries: list[AuditLogEntry]) -> None:
        session_factory = self._session_factory
        if session_factory is None:
            from yeirin.infrastructure.database.connection import AsyncSessionLocal

            session_factory = AsyncSessionLocal

        async with session_factory() as session:
            session.add_all([entry.to_orm() for entry in entries])
            await session.commit()
