"""
Logging setup.

모듈별 logger = logging.getLogger(__name__) 사용,
진입점에서 한 번만 설정한다.
"""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(config: dict[str, Any] | None = None) -> None:
    """
    루트 로거 설정.

    Args:
        config: default.yaml의 logging 섹션 (level)
    """
    config = config or {}
    level_name = str(config.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger(__name__).debug(f"Logging configured at {logging.getLevelName(level)}")
