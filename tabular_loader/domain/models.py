"""
도메인 모델: 요청, 결과, 파일 구조

모든 모델은 frozen dataclass이므로 복사나 잠금 없이 작업 스레드에서
대화형 스레드로 넘길 수 있습니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple, Union

from tabular_loader.core.config import SENTINEL_SHEET_NAME

Record = Tuple[str, ...]


@dataclass(frozen=True)
class LoadRequest:
    """
    파일에서 읽을 행 구간 하나.

    Attributes:
        path: 읽을 파일
        start_row: 첫 데이터 행의 0부터 시작하는 위치 (헤더 제외)
        row_count: 반환할 최대 데이터 행 수
        sheet_index: 시트가 있는 포맷에서 읽을 시트, 그 외에는 무시

    Raises:
        ValueError: start_row나 sheet_index가 음수이거나 row_count < 1

    Examples:
        >>> LoadRequest(Path("data.csv"), start_row=0, row_count=100)
        >>> LoadRequest(Path("book.xlsx"), start_row=100, row_count=100, sheet_index=2)
    """

    path: Path
    start_row: int
    row_count: int
    sheet_index: int = 0

    def __post_init__(self) -> None:
        if self.start_row < 0:
            raise ValueError(f"start_row must be >= 0, got {self.start_row}")
        if self.row_count < 1:
            raise ValueError(f"row_count must be >= 1, got {self.row_count}")
        if self.sheet_index < 0:
            raise ValueError(f"sheet_index must be >= 0, got {self.sheet_index}")
        # 문자열 경로도 허용
        object.__setattr__(self, "path", Path(self.path))

    @property
    def extension(self) -> str:
        """점을 뺀 소문자 확장자."""
        return self.path.suffix.lower().lstrip(".")

    @property
    def is_first_window(self) -> bool:
        return self.start_row == 0


@dataclass(frozen=True)
class LoadResult:
    """
    LoadRequest 하나에 대해 제공된 행.

    Attributes:
        headers: 컬럼명. 첫 구간이 아니면 비어 있음
        rows: 데이터 레코드. 각 레코드는 셀 문자열 튜플 (길이가 다를 수 있음)
        sheet_names: 워크북 시트 목록, 시트 없는 포맷은 자리표시 이름
        end_of_data: 이 구간 뒤에 남은 행이 없음
    """

    headers: Record
    rows: Tuple[Record, ...]
    sheet_names: Tuple[str, ...]
    end_of_data: bool

    @classmethod
    def build(
        cls,
        *,
        headers: Iterable[str],
        rows: Iterable[Sequence[str]],
        sheet_names: Iterable[str],
        end_of_data: bool,
    ) -> "LoadResult":
        """백엔드가 만든 리스트를 불변 결과로 고정합니다."""
        names = tuple(sheet_names)
        if not names:
            raise ValueError("sheet_names must not be empty")
        return cls(
            headers=tuple(headers),
            rows=tuple(tuple(row) for row in rows),
            sheet_names=names,
            end_of_data=bool(end_of_data),
        )


# ============================================================
# 파일 구조
# ============================================================


@dataclass(frozen=True)
class SimpleStructure:
    """첫 레코드가 헤더."""

    @property
    def data_start_line(self) -> int:
        return 0


@dataclass(frozen=True)
class MixedStructure:
    """
    헤더 앞에 메타데이터 줄이 있는 구조.

    Attributes:
        header_offset: 헤더의 0부터 시작하는 레코드 위치. 그 앞의 레코드는
            모두 메타데이터이며 노출되지 않음
    """

    header_offset: int

    def __post_init__(self) -> None:
        if self.header_offset < 0:
            raise ValueError(f"header_offset must be >= 0, got {self.header_offset}")

    @property
    def data_start_line(self) -> int:
        return self.header_offset


FileStructure = Union[SimpleStructure, MixedStructure]


# ============================================================
# 시트 목록
# ============================================================


@dataclass(frozen=True)
class SheetCatalog:
    """
    첫 성공 로드에서 확인한 시트 이름 목록 (순서 유지).

    시트가 없는 포맷은 자리표시 이름 하나를 보고하므로, 소비자는 모든
    포맷을 같은 방식으로 다룰 수 있습니다.

    Examples:
        >>> SheetCatalog(("CSV",)).is_sheeted
        False
        >>> SheetCatalog(("Data", "Summary")).is_sheeted
        True
    """

    names: Tuple[str, ...]
    sentinel: str = SENTINEL_SHEET_NAME

    def __len__(self) -> int:
        return len(self.names)

    def __getitem__(self, index: int) -> str:
        return self.names[index]

    @property
    def is_sheeted(self) -> bool:
        """시트 선택기를 보여줄 필요가 있으면 True."""
        if not self.names:
            return False
        return len(self.names) > 1 or self.names[0] != self.sentinel
