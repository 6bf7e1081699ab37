"""
로드 시간 측정

코드 블록(시트 읽기, CSV 구간)의 실행 시간을 재고, 느린 정도에 따라
로그 레벨을 골라 기록하는 컨텍스트 매니저를 제공합니다.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from tabular_loader.core.config import CONFIG, LoaderConfig

logger = logging.getLogger(__name__)


class PerformanceContext:
    """
    코드 블록의 실행 시간을 측정하는 컨텍스트 매니저.

    ``slow_error_seconds`` 이상이면 ERROR, ``slow_warning_seconds`` 이상이면
    WARNING, 그 외에는 INFO 레벨로 로깅합니다. 블록에서 예외가 나면 ERROR로
    기록하고 예외는 그대로 전파됩니다.

    Attributes:
        operation_name: 로그에 표시할 작업 이름
        elapsed: 측정된 실행 시간(초), 종료 시 설정
    """

    def __init__(self, operation_name: str, config: Optional[LoaderConfig] = None) -> None:
        self.operation_name = operation_name
        self.config = config or CONFIG.loader
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> PerformanceContext:
        self.start_time = time.perf_counter()
        logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time

        if exc_type is not None:
            logger.error(f"{self.operation_name} failed after {self.elapsed:.2f}s")
        elif self.elapsed >= self.config.slow_error_seconds:
            logger.error(
                f"SLOW: {self.operation_name} took {self.elapsed:.2f}s "
                f"(threshold: {self.config.slow_error_seconds:g}s)"
            )
        elif self.elapsed >= self.config.slow_warning_seconds:
            logger.warning(
                f"{self.operation_name} took {self.elapsed:.2f}s "
                f"(threshold: {self.config.slow_warning_seconds:g}s)"
            )
        else:
            logger.info(f"{self.operation_name} completed in {self.elapsed:.2f}s")


def measure_time_context(
    operation_name: str,
    config: Optional[LoaderConfig] = None,
) -> PerformanceContext:
    """
    코드 블록의 실행 시간을 측정합니다.

    Examples:
        >>> with measure_time_context("read sheet 'Data'"):
        ...     frame = pd.read_excel(book, sheet_name="Data", header=None)
        INFO - read sheet 'Data' completed in 0.42s
    """
    return PerformanceContext(operation_name, config)
