"""로깅 설정.

표준 logging 레벨을 설정하고 structlog 로거가 표준 logging 핸들러로
출력되도록 구성합니다.
"""

import logging

import structlog

from yeirin.core.config.settings import settings


def configure_logging() -> None:
    """애플리케이션 로깅을 초기화합니다."""
    level = getattr(logging, settings.log_level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
