"""
데이터 소스 계층

하나의 로드 계약 뒤에 있는 포맷 백엔드들과, 파일에 맞는 백엔드를
고르는 디스패처.
"""

from .delimited import DelimitedTextBackend
from .dispatch import (
    DELIMITED_EXTENSIONS,
    WORKBOOK_EXTENSIONS,
    FormatDispatcher,
    build_default_dispatcher,
)
from .loader import Backend
from .workbook import WorkbookBackend, clamp_sheet_index, pick_engine

__all__ = [
    # 계약
    "Backend",
    # 백엔드
    "DelimitedTextBackend",
    "WorkbookBackend",
    "clamp_sheet_index",
    "pick_engine",
    # 디스패치
    "FormatDispatcher",
    "build_default_dispatcher",
    "DELIMITED_EXTENSIONS",
    "WORKBOOK_EXTENSIONS",
]
