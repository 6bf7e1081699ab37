"""
도메인 계층 공개 API

모델, 예외, 헤더 탐지를 일관된 import 경로로 다시 내보냅니다.
"""
from __future__ import annotations

from .exceptions import (
    BackgroundTaskFailure,
    DecodeError,
    EmptySourceError,
    LoaderError,
    NoSheetsError,
    SheetReadError,
    SourceOpenError,
    UnsupportedFormatError,
)
from .models import (
    FileStructure,
    LoadRequest,
    LoadResult,
    MixedStructure,
    Record,
    SheetCatalog,
    SimpleStructure,
)
from .structure import detect_structure, find_header_offset, is_mixed_structure, read_sample

__all__ = [
    # 예외
    "LoaderError",
    "EmptySourceError",
    "DecodeError",
    "NoSheetsError",
    "SheetReadError",
    "UnsupportedFormatError",
    "SourceOpenError",
    "BackgroundTaskFailure",
    # 모델
    "LoadRequest",
    "LoadResult",
    "Record",
    "FileStructure",
    "SimpleStructure",
    "MixedStructure",
    "SheetCatalog",
    # 탐지
    "read_sample",
    "detect_structure",
    "is_mixed_structure",
    "find_header_offset",
]
