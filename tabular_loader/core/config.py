"""
테이블 로딩 엔진 설정 및 상수

헤더 탐지 키워드, 페이지 구간 크기, 로더 기본값을 이곳에서 관리하여
알고리즘 코드를 건드리지 않고 조정할 수 있습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


# ============================================================
# 시트 목록
# ============================================================

# 시트가 없는 포맷이 보고하는 자리표시용 시트 이름
SENTINEL_SHEET_NAME = "CSV"


# ============================================================
# 헤더 탐지
# ============================================================

@dataclass(frozen=True)
class DetectionConfig:
    """혼합 구조 휴리스틱의 임계값과 키워드 집합."""

    # 파일마다 검사하는 앞부분 레코드 수
    sample_size: int = 50

    # 메타데이터 줄 검사에 쓰는 샘플 앞부분 레코드 수
    preamble_probe: int = 3

    # 메타데이터 줄로 판단하는 필드 수 편차 (max > ratio * min)
    field_count_ratio: int = 2

    # "key,value" 형태 메타데이터 줄의 대표 라벨 (대소문자 무시)
    metadata_keywords: Tuple[str, ...] = (
        "user",
        "supplier",
        "wafer",
        "led",
        "date",
        "time",
        "version",
        "id",
    )

    # 헤더 탐색 시 컬럼명 점수 기준
    index_marker: str = "INDEX"
    index_marker_weight: int = 3
    compound_separator: str = "_"
    domain_keywords: Tuple[str, ...] = (
        "index",
        "upl",
        "epi",
        "aoi",
        "chip",
        "wp",
        "wd",
        "fwhm",
    )

    # 헤더로 인정되는 최소 필드 수와 점수
    min_header_fields: int = 10
    min_compound_fields: int = 5
    min_pattern_hits: int = 5
    min_keyword_hits: int = 5


# ============================================================
# 페이지네이션
# ============================================================

@dataclass(frozen=True)
class PaginationConfig:
    """페이지네이션 컨트롤러의 구간 크기."""

    # 파일을 열거나 시트를 전환한 직후 요청하는 행 수
    initial_window: int = 100

    # 뷰가 하단에 가까워질 때 늘리는 목표 구간 크기
    window_increment: int = 100


# ============================================================
# 로더
# ============================================================

@dataclass(frozen=True)
class LoaderConfig:
    """백엔드 및 실행 기본값."""

    # utf-8-sig: 앞의 BOM을 제거하고 나머지는 일반 UTF-8로 읽음
    csv_encoding: str = "utf-8-sig"

    sentinel_sheet_name: str = SENTINEL_SHEET_NAME

    # build_executor()의 스레드 풀 크기
    max_workers: int = 2

    # 로드 시간 임계값 (초)
    slow_warning_seconds: float = 1.0
    slow_error_seconds: float = 10.0


@dataclass(frozen=True)
class EngineConfig:
    """엔진 전역 설정."""

    detection: DetectionConfig = field(default_factory=DetectionConfig)
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    loader: LoaderConfig = field(default_factory=LoaderConfig)


# ============================================================
# 전역 인스턴스
# ============================================================

CONFIG = EngineConfig()
