"""
구분자 텍스트의 헤더 행 탐지

일부 CSV 내보내기 파일은 실제 헤더 앞에 메타데이터(작업자, 웨이퍼 ID,
시각, 한 글자 배너)가 붙어 있습니다. 이 모듈은 파일 앞부분 레코드를
살펴 헤더 위치를 결정합니다.

휴리스틱은 최선 노력 방식입니다. 확실한 헤더를 찾지 못하면 로드를
실패시키지 않고 첫 레코드를 헤더로 취급합니다. 키워드와 임계값은
DetectionConfig에서 가져옵니다.
"""

from __future__ import annotations

import logging
import re
from itertools import islice
from typing import Iterable, List, Optional, Sequence

from tabular_loader.core.config import CONFIG, DetectionConfig

from .exceptions import EmptySourceError
from .models import FileStructure, MixedStructure, SimpleStructure

logger = logging.getLogger(__name__)

Sample = List[List[str]]


def read_sample(records: Iterable[Sequence[str]], sample_size: int) -> Sample:
    """앞에서부터 ``sample_size``개의 레코드를 필드 문자열 리스트로 가져옵니다."""
    return [list(record) for record in islice(records, sample_size)]


def detect_structure(
    sample: Sequence[Sequence[str]],
    *,
    config: DetectionConfig = CONFIG.detection,
    source: object = "<sample>",
) -> FileStructure:
    """
    앞부분 레코드 샘플을 단순 구조 또는 혼합 구조로 분류합니다.

    Args:
        sample: 파일 앞부분 레코드 (빈 줄 제외)
        config: 탐지 임계값과 키워드
        source: 샘플을 읽은 파일 (메시지용)

    Returns:
        SimpleStructure, 또는 헤더 위치를 담은 MixedStructure

    Raises:
        EmptySourceError: 샘플에 레코드가 하나도 없을 때

    Examples:
        >>> detect_structure([["a", "b"], ["1", "2"], ["3", "4"]])
        SimpleStructure()
    """
    if not sample:
        raise EmptySourceError(source)

    if not is_mixed_structure(sample, config=config):
        logger.debug("%s: simple structure", source)
        return SimpleStructure()

    header_offset = find_header_offset(sample, config=config)
    if header_offset is None:
        logger.debug("%s: preamble suspected but no header found, using row 0", source)
        return SimpleStructure()

    logger.debug("%s: mixed structure, header at record %d", source, header_offset)
    return MixedStructure(header_offset=header_offset)


def is_mixed_structure(
    sample: Sequence[Sequence[str]],
    *,
    config: DetectionConfig = CONFIG.detection,
) -> bool:
    """
    앞부분 레코드에서 메타데이터 줄의 흔적을 찾습니다.

    다음 신호를 순서대로 확인합니다:
    1. 레코드 간 필드 수 차이가 큼
    2. 라벨이 메타데이터처럼 보이는 "label,value" 쌍
    3. 한 글자짜리 배너 줄
    """
    probe = [list(record) for record in sample[: config.preamble_probe]]
    if len(probe) < config.preamble_probe:
        return False

    # ========================================
    # 1단계: 필드 수 편차
    # ========================================
    counts = [len(fields) for fields in probe]
    if max(counts) > min(counts) * config.field_count_ratio:
        return True

    # ========================================
    # 2단계: "label,value" 메타데이터 줄
    # ========================================
    for fields in probe:
        if len(fields) == 2:
            label = fields[0].casefold()
            if any(keyword in label for keyword in config.metadata_keywords):
                return True

    # ========================================
    # 3단계: 한 글자 배너
    # ========================================
    for fields in probe:
        if len(fields) == 1:
            value = fields[0]
            if len(value) == 1 and value.isalpha():
                return True

    return False


def find_header_offset(
    sample: Sequence[Sequence[str]],
    *,
    config: DetectionConfig = CONFIG.detection,
) -> Optional[int]:
    """
    헤더 행으로 보이는 첫 레코드의 위치를 반환합니다.

    헤더는 필드가 많고 대부분 ``CHIP_X``, ``FWHM_MEAN`` 같은 복합 이름이며,
    인덱스 컬럼이나 여러 도메인 키워드를 포함합니다.
    """
    index_pattern = re.compile(re.escape(config.index_marker), re.IGNORECASE)

    for offset, fields in enumerate(sample):
        if len(fields) < config.min_header_fields:
            continue

        pattern_hits = 0
        keyword_hits = 0
        compound_fields = 0

        for field in fields:
            lowered = field.lower()

            if index_pattern.search(field):
                pattern_hits += config.index_marker_weight

            if config.compound_separator in field:
                pattern_hits += 1
                compound_fields += 1

            keyword_hits += sum(1 for keyword in config.domain_keywords if keyword in lowered)

        if compound_fields < config.min_compound_fields:
            continue
        if pattern_hits >= config.min_pattern_hits or keyword_hits >= config.min_keyword_hits:
            return offset

    return None
