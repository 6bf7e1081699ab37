"""
Workbook(xlsx / xls / ods) 백엔드

pandas.ExcelFile로 워크북을 열어 시트 목록을 구하고, 선택된 시트에서
행 구간을 제공합니다. 시트의 0번 행이 헤더입니다.

스프레드시트 리더는 임의 행 접근을 지원하지 않으므로 요청마다 시트
전체를 읽습니다. 대상 파일 크기에서는 충분하며, Backend 계약 뒤에
가려져 있습니다.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import pandas as pd

from tabular_loader.common.cells import cell_to_text
from tabular_loader.common.performance import measure_time_context
from tabular_loader.core.config import CONFIG, EngineConfig
from tabular_loader.domain.exceptions import NoSheetsError, SheetReadError, SourceOpenError
from tabular_loader.domain.models import LoadRequest, LoadResult, Record

logger = logging.getLogger(__name__)

# 엔진을 명시하면 pandas의 포맷 추측을 건너뜀
_ENGINES = {
    "xlsx": "openpyxl",
    "xls": "xlrd",
    "ods": "odf",
}


def pick_engine(extension: str) -> Optional[str]:
    """확장자에 맞는 pandas 리더 엔진을 반환합니다. None이면 pandas가 선택합니다."""
    return _ENGINES.get(extension.lower().lstrip("."))


def clamp_sheet_index(sheet_index: int, sheet_count: int) -> int:
    """범위를 벗어난 인덱스는 실패 대신 첫 시트(0)로 대체합니다."""
    if 0 <= sheet_index < sheet_count:
        return sheet_index
    return 0


class WorkbookBackend:
    """
    다중 시트 워크북용 백엔드.

    Examples:
        >>> backend = WorkbookBackend()
        >>> result = backend.load(LoadRequest(Path("book.xlsx"), 0, 100, sheet_index=1))
        >>> result.sheet_names
        ('Summary', 'Data', 'Notes')
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or CONFIG

    def load(self, request: LoadRequest) -> LoadResult:
        path = request.path

        # ========================================
        # 1단계: 워크북 열기 및 시트 목록 조회
        # ========================================
        try:
            book = pd.ExcelFile(path, engine=pick_engine(request.extension))
        except Exception as exc:
            logger.error(f"Failed to open workbook {path}: {exc}", exc_info=True)
            raise SourceOpenError(path, str(exc)) from exc

        with book:
            sheet_names = [str(name) for name in book.sheet_names]
            if not sheet_names:
                raise NoSheetsError(path)

            # ========================================
            # 2단계: 시트 선택 (잘못된 인덱스는 0으로)
            # ========================================
            index = clamp_sheet_index(request.sheet_index, len(sheet_names))
            if index != request.sheet_index:
                logger.warning(
                    "Sheet index %d out of range for %s (%d sheets), using sheet 0",
                    request.sheet_index,
                    path.name,
                    len(sheet_names),
                )
            sheet_name = sheet_names[index]

            # ========================================
            # 3단계: 시트 전체 읽기
            # ========================================
            rows = self._read_sheet(book, book.sheet_names[index], sheet_name)

        # ========================================
        # 4단계: 요청 구간 자르기
        # ========================================
        if not rows:
            logger.info("Sheet '%s' of %s is empty", sheet_name, path.name)
            return LoadResult.build(headers=(), rows=(), sheet_names=sheet_names, end_of_data=True)

        headers: Record = rows[0] if request.is_first_window else ()
        data_start = request.start_row + 1
        data_end = min(data_start + request.row_count, len(rows))
        window = rows[data_start:data_end]
        end_of_data = data_end >= len(rows)

        logger.info(
            "Served %d rows from %s sheet '%s' (start_row=%d, end_of_data=%s)",
            len(window),
            path.name,
            sheet_name,
            request.start_row,
            end_of_data,
        )
        return LoadResult.build(
            headers=headers,
            rows=window,
            sheet_names=sheet_names,
            end_of_data=end_of_data,
        )

    def _read_sheet(self, book: pd.ExcelFile, sheet: object, sheet_name: str) -> List[Record]:
        try:
            with measure_time_context(f"read sheet '{sheet_name}'", self.config.loader):
                # na_filter를 끄면 "NA", "N/A" 셀이 문자열 그대로 유지됨
                frame = pd.read_excel(book, sheet_name=sheet, header=None, dtype=object, na_filter=False)
        except Exception as exc:
            logger.error(f"Failed to read sheet '{sheet_name}': {exc}", exc_info=True)
            raise SheetReadError(sheet_name, str(exc)) from exc

        return [
            tuple(cell_to_text(value) for value in row)
            for row in frame.itertuples(index=False, name=None)
        ]
