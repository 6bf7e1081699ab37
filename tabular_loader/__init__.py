"""
tabular_loader 패키지

스프레드시트 형태 파일의 점진적 로딩 엔진.
- 하나의 로드 계약 뒤의 CSV, 워크북(xlsx/xls/ods) 백엔드
- 메타데이터가 앞에 붙은 CSV의 헤더 행 복원
- 폴링 메일박스 기반 백그라운드 로딩과 페이지 단위 세션
"""

from __future__ import annotations

from .data_sources import (
    Backend,
    DelimitedTextBackend,
    FormatDispatcher,
    WorkbookBackend,
    build_default_dispatcher,
)
from .domain import (
    LoadRequest,
    LoadResult,
    LoaderError,
    MixedStructure,
    SheetCatalog,
    SimpleStructure,
    detect_structure,
)
from .session import AsyncBridge, LoadOutcome, LoadState, PaginationController, RequestTag

__version__ = "0.1.0"

__all__ = [
    "AsyncBridge",
    "Backend",
    "DelimitedTextBackend",
    "FormatDispatcher",
    "LoadOutcome",
    "LoadRequest",
    "LoadResult",
    "LoadState",
    "LoaderError",
    "MixedStructure",
    "PaginationController",
    "RequestTag",
    "SheetCatalog",
    "SimpleStructure",
    "WorkbookBackend",
    "build_default_dispatcher",
    "detect_structure",
]
