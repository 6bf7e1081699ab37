"""
구분자 텍스트(CSV) 백엔드

csv 모듈로 레코드를 스트리밍하며 임의의 행 구간(window)을 제공합니다.
필드 수가 다른 레코드도 허용하며, 각 행은 실제로 있는 필드만 가집니다.

요청 사이에 커서를 유지하지 않습니다. 요청마다 파일을 다시 열고,
앞부분 샘플로 헤더 위치를 다시 탐지한 뒤 구간까지 건너뛰므로
페이지마다 선형 탐색 비용이 듭니다.
"""

from __future__ import annotations

import codecs
import csv
import logging
from itertools import islice
from pathlib import Path
from typing import IO, Iterator, List, Optional

from tabular_loader.common.performance import measure_time_context
from tabular_loader.core.config import CONFIG, EngineConfig
from tabular_loader.domain.exceptions import DecodeError, SourceOpenError
from tabular_loader.domain.models import FileStructure, LoadRequest, LoadResult, Record
from tabular_loader.domain.structure import detect_structure, read_sample

logger = logging.getLogger(__name__)


class _RecordStream:
    """
    열린 CSV 파일의 비어 있지 않은 레코드.

    바이너리 핸들을 물리적 줄 단위로 디코딩합니다. 잘못된 바이트는
    해당 줄을 읽는 시점에만 DecodeError가 되며, 에러에 그 줄 번호가 담깁니다.
    """

    def __init__(self, handle: IO[bytes], path: Path, encoding: str) -> None:
        self._handle = handle
        self._path = path
        # BOM은 첫 줄에서 한 번만 제거됨 (utf-8-sig)
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._line = 0
        self._reader = csv.reader(self._decoded_lines())

    def __iter__(self) -> Iterator[List[str]]:
        while True:
            try:
                fields = next(self._reader)
            except StopIteration:
                return
            except csv.Error as exc:
                raise DecodeError(self._path, str(exc), line=self._reader.line_num) from exc
            # 빈 줄은 레코드가 아님
            if not fields:
                continue
            yield fields

    def _decoded_lines(self) -> Iterator[str]:
        # 줄 끝(\r, \n, \r\n)을 그대로 넘겨야 따옴표 안의 줄바꿈이 유지됨
        for chunk in self._handle:
            for raw in chunk.splitlines(keepends=True):
                self._line += 1
                yield self._decode(raw, final=False)

        tail = self._decode(b"", final=True)
        if tail:
            yield tail

    def _decode(self, raw: bytes, *, final: bool) -> str:
        try:
            return self._decoder.decode(raw, final)
        except UnicodeDecodeError as exc:
            raise DecodeError(self._path, str(exc), line=self._line) from exc


class DelimitedTextBackend:
    """
    쉼표 구분 텍스트 파일용 백엔드.

    Examples:
        >>> backend = DelimitedTextBackend()
        >>> first = backend.load(LoadRequest(Path("run.csv"), 0, 100))
        >>> first.headers[:2]
        ('INDEX', 'CHIP_X')
        >>> nxt = backend.load(LoadRequest(Path("run.csv"), 100, 100))
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or CONFIG

    def load(self, request: LoadRequest) -> LoadResult:
        path = request.path

        label = f"csv window {path.name}[{request.start_row}:+{request.row_count}]"
        with measure_time_context(label, self.config.loader):
            # ========================================
            # 1단계: 헤더 위치 탐지
            # ========================================
            structure = self.detect(path)
            data_start_line = structure.data_start_line

            # ========================================
            # 2단계: 헤더와 요청 구간 읽기
            # ========================================
            headers: Record = ()
            rows: List[Record] = []
            end_of_data = False

            with self._open(path) as handle:
                records = iter(self._records(handle, path))

                # 메타데이터 줄은 소비만 하고 노출하지 않음
                for _ in islice(records, data_start_line):
                    pass

                header_record = next(records, None)
                if request.is_first_window and header_record is not None:
                    headers = tuple(header_record)

                for _ in islice(records, request.start_row):
                    pass

                for _ in range(request.row_count):
                    record = next(records, None)
                    if record is None:
                        end_of_data = True
                        break
                    rows.append(tuple(record))

        logger.info(
            "Served %d rows from %s (start_row=%d, end_of_data=%s)",
            len(rows),
            path.name,
            request.start_row,
            end_of_data,
        )
        return LoadResult.build(
            headers=headers,
            rows=rows,
            sheet_names=(self.config.loader.sentinel_sheet_name,),
            end_of_data=end_of_data,
        )

    def detect(self, path: Path) -> FileStructure:
        """파일 앞부분 레코드를 새로 읽어 구조를 탐지합니다."""
        with self._open(path) as handle:
            sample = read_sample(self._records(handle, path), self.config.detection.sample_size)
        return detect_structure(sample, config=self.config.detection, source=path)

    def _records(self, handle: IO[bytes], path: Path) -> _RecordStream:
        return _RecordStream(handle, path, self.config.loader.csv_encoding)

    def _open(self, path: Path) -> IO[bytes]:
        try:
            return open(path, "rb")
        except OSError as exc:
            logger.error(f"Cannot open {path}: {exc}", exc_info=True)
            raise SourceOpenError(path, str(exc)) from exc
