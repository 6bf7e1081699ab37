"""
페이지 단위 로딩 세션

PaginationController는 열린 파일 하나(워크북이면 선택된 시트 하나)의
상태를 소유합니다: 누적된 행, 목표 구간 크기, 헤더, 시트 목록, 로드 상태.
구간을 늘리거나 초기화하는 유일한 컴포넌트입니다.

상태 전이:
    IDLE     --load_more-------------------> LOADING
    LOADING  --성공, 남은 데이터 있음-------> IDLE
    LOADING  --성공, 데이터 끝-------------> COMPLETE
    LOADING  --실패------------------------> ERROR
    임의     --open_file / switch_sheet----> (초기화) LOADING

모든 메서드는 대화형 스레드에서 호출합니다. 작업 스레드는 브리지의
메일박스만 채우고, poll()이 이를 비웁니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple, Union

from tabular_loader.core.config import CONFIG, EngineConfig
from tabular_loader.domain.models import LoadRequest, LoadResult, Record, SheetCatalog

from .bridge import AsyncBridge, LoadOutcome, RequestTag

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    COMPLETE = "complete"


@dataclass
class SessionState:
    """파일/시트 세션 하나의 가변 상태."""

    path: Path
    target_window: int
    generation: int
    sheet_index: int = 0
    rows: List[Record] = field(default_factory=list)
    headers: Record = ()
    headers_resolved: bool = False
    catalog: Optional[SheetCatalog] = None
    end_of_data: bool = False
    state: LoadState = LoadState.IDLE
    error: Optional[str] = None

    @property
    def tag(self) -> RequestTag:
        return RequestTag(generation=self.generation, sheet_index=self.sheet_index)

    def reset_view(self, target_window: int, generation: int) -> None:
        """현재 시트에 묶인 상태를 모두 지웁니다. 시트 목록은 유지됩니다."""
        self.rows = []
        self.headers = ()
        self.headers_resolved = False
        self.end_of_data = False
        self.state = LoadState.IDLE
        self.error = None
        self.target_window = target_window
        self.generation = generation


class PaginationController:
    """
    대화형 소비자를 위해 파일 하나를 점진적으로 로드합니다.

    Examples:
        >>> controller = PaginationController(bridge)
        >>> controller.open_file("run.csv")
        >>> # UI 사이클마다:
        >>> controller.poll()
        >>> if view_near_bottom:
        ...     controller.on_near_bottom()
    """

    def __init__(self, bridge: AsyncBridge, config: Optional[EngineConfig] = None) -> None:
        self._bridge = bridge
        config = config or CONFIG
        self._pagination = config.pagination
        self._sentinel = config.loader.sentinel_sheet_name
        self._session: Optional[SessionState] = None
        self._generation = 0

    # ========================================
    # 명령
    # ========================================

    def open_file(self, path: Union[str, Path]) -> None:
        """``path``로 새 세션을 시작하고 첫 구간을 요청합니다."""
        self._generation += 1
        self._session = SessionState(
            path=Path(path),
            target_window=self._pagination.initial_window,
            generation=self._generation,
        )
        logger.info("Opened %s (generation %d)", self._session.path, self._generation)
        self.load_more()

    def switch_sheet(self, sheet_index: int) -> None:
        """
        다른 시트를 처음부터 다시 로드합니다.

        파일이 열려 있지 않거나, 이미 선택된 시트이거나,
        시트 목록 범위를 벗어난 인덱스면 무시합니다.
        """
        session = self._session
        if session is None or session.catalog is None:
            return
        if sheet_index == session.sheet_index or not 0 <= sheet_index < len(session.catalog):
            return

        self._generation += 1
        session.sheet_index = sheet_index
        session.reset_view(self._pagination.initial_window, self._generation)
        logger.info(
            "Switched %s to sheet %d '%s' (generation %d)",
            session.path.name,
            sheet_index,
            session.catalog[sheet_index],
            self._generation,
        )
        self.load_more()

    def load_more(self) -> None:
        """목표 구간까지 행을 요청합니다. IDLE이 아니면 아무것도 하지 않습니다."""
        session = self._session
        if session is None or session.state is not LoadState.IDLE or session.end_of_data:
            return

        start_row = len(session.rows)
        row_count = session.target_window - start_row
        if row_count <= 0:
            return

        request = LoadRequest(
            path=session.path,
            start_row=start_row,
            row_count=row_count,
            sheet_index=session.sheet_index,
        )
        session.state = LoadState.LOADING
        logger.debug(
            "IDLE -> LOADING: rows %d..%d of %s", start_row, session.target_window, session.path.name
        )
        self._bridge.submit(request, session.tag)

    def on_near_bottom(self) -> None:
        """뷰가 마지막 행 근처에 도달: 구간을 넓히고 더 가져옵니다."""
        session = self._session
        if session is None or session.state is not LoadState.IDLE:
            return
        session.target_window += self._pagination.window_increment
        self.load_more()

    def poll(self) -> int:
        """
        지난 호출 이후 게시된 결과를 병합합니다.

        Returns:
            현재 세션에 병합된 결과 수. 오래된(stale) 결과는 버려지며
            세지 않습니다.
        """
        merged = 0
        for outcome in self._bridge.drain():
            if self._accept(outcome):
                self._merge(outcome)
                merged += 1
        return merged

    def close(self) -> None:
        """세션을 닫습니다. 아직 진행 중인 결과는 버려집니다."""
        if self._session is not None:
            logger.info("Closed %s", self._session.path)
        self._session = None
        self._generation += 1

    # ========================================
    # 조회용 뷰
    # ========================================

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def path(self) -> Optional[Path]:
        return self._session.path if self._session else None

    @property
    def state(self) -> LoadState:
        return self._session.state if self._session else LoadState.IDLE

    @property
    def headers(self) -> Record:
        return self._session.headers if self._session else ()

    @property
    def rows(self) -> Tuple[Record, ...]:
        return tuple(self._session.rows) if self._session else ()

    @property
    def row_count(self) -> int:
        return len(self._session.rows) if self._session else 0

    @property
    def end_of_data(self) -> bool:
        return bool(self._session and self._session.end_of_data)

    @property
    def error(self) -> Optional[str]:
        return self._session.error if self._session else None

    @property
    def current_sheet(self) -> int:
        return self._session.sheet_index if self._session else 0

    @property
    def sheet_names(self) -> Tuple[str, ...]:
        if self._session is None or self._session.catalog is None:
            return ()
        return self._session.catalog.names

    @property
    def shows_sheet_selector(self) -> bool:
        return bool(self._session and self._session.catalog and self._session.catalog.is_sheeted)

    @property
    def target_window(self) -> int:
        return self._session.target_window if self._session else 0

    def status_summary(self) -> str:
        """하단 상태 문구. 예: "250 rows (complete)", "100 rows (loading...)"."""
        session = self._session
        if session is None:
            return ""
        if session.state is LoadState.ERROR:
            return f"{len(session.rows)} rows (error)"
        if session.end_of_data:
            return f"{len(session.rows)} rows (complete)"
        return f"{len(session.rows)} rows (loading...)"

    # ========================================
    # 결과 병합
    # ========================================

    def _accept(self, outcome: LoadOutcome) -> bool:
        session = self._session
        if session is None or outcome.tag != session.tag:
            logger.info("Discarding stale outcome for %s (%s)", outcome.request.path.name, outcome.tag)
            return False
        if session.state is not LoadState.LOADING:
            logger.warning("Discarding unexpected outcome in state %s", session.state.value)
            return False
        return True

    def _merge(self, outcome: LoadOutcome) -> None:
        session = self._session
        if session is None:
            return

        if not outcome.ok:
            session.state = LoadState.ERROR
            session.error = outcome.error
            logger.debug("LOADING -> ERROR: %s", outcome.error)
            return

        result: LoadResult = outcome.result  # type: ignore[assignment]

        # 시트 목록은 파일의 첫 성공 로드에서 고정됨
        if session.catalog is None:
            session.catalog = SheetCatalog(result.sheet_names, sentinel=self._sentinel)

        # 헤더는 첫 구간에서만 가져오며 이후 교체되지 않음
        if not session.headers_resolved and outcome.request.is_first_window and result.headers:
            session.headers = result.headers
            session.headers_resolved = True

        session.rows.extend(result.rows)
        session.end_of_data = result.end_of_data
        session.error = None
        session.state = LoadState.COMPLETE if result.end_of_data else LoadState.IDLE
        logger.debug(
            "LOADING -> %s: +%d rows (%d total)",
            session.state.name,
            len(result.rows),
            len(session.rows),
        )
