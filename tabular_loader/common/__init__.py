"""공용 유틸리티: 시간 측정, executor, 셀 포맷."""

from .cells import cell_to_text
from .executors import SynchronousExecutor, build_executor
from .performance import PerformanceContext, measure_time_context

__all__ = [
    "cell_to_text",
    "SynchronousExecutor",
    "build_executor",
    "PerformanceContext",
    "measure_time_context",
]
