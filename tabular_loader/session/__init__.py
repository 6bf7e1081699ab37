"""
세션 계층

백그라운드 실행 브리지와, 스크롤 이벤트를 로드 요청으로 바꾸는
페이지네이션 컨트롤러.
"""

from .bridge import AsyncBridge, LoadOutcome, RequestTag, WakeCallback
from .pagination import LoadState, PaginationController, SessionState

__all__ = [
    "AsyncBridge",
    "LoadOutcome",
    "RequestTag",
    "WakeCallback",
    "LoadState",
    "PaginationController",
    "SessionState",
]
