"""
포맷 디스패치

파일 확장자를 백엔드에 매핑합니다. 새 포맷은 이곳에서만 추가하며,
디스패처 자체는 I/O를 하지 않습니다.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple

from tabular_loader.core.config import CONFIG, EngineConfig
from tabular_loader.domain.exceptions import UnsupportedFormatError
from tabular_loader.domain.models import LoadRequest, LoadResult

from .delimited import DelimitedTextBackend
from .loader import Backend
from .workbook import WorkbookBackend

logger = logging.getLogger(__name__)

DELIMITED_EXTENSIONS = ("csv",)
WORKBOOK_EXTENSIONS = ("xlsx", "xls", "ods")


class FormatDispatcher:
    """
    소문자 파일 확장자로 로드 요청을 백엔드에 라우팅합니다.

    Examples:
        >>> dispatcher = build_default_dispatcher()
        >>> dispatcher.backend_for(LoadRequest(Path("DATA.CSV"), 0, 10))
        <DelimitedTextBackend ...>
        >>> dispatcher.load(LoadRequest(Path("notes.txt"), 0, 10))
        UnsupportedFormatError: Unsupported file format '.txt'. ...
    """

    def __init__(self) -> None:
        self._backends: Dict[str, Backend] = {}

    def register(self, extensions: Iterable[str], backend: Backend) -> None:
        """``extensions``의 모든 확장자를 ``backend``로 연결합니다."""
        for extension in extensions:
            key = extension.lower().lstrip(".")
            if not key:
                raise ValueError("extension must not be empty")
            self._backends[key] = backend

    def supported_extensions(self) -> Tuple[str, ...]:
        """등록 순서대로의 확장자 목록 (예: 파일 선택기 필터용)."""
        return tuple(self._backends)

    def backend_for(self, request: LoadRequest) -> Backend:
        extension = request.extension
        backend = self._backends.get(extension)
        if backend is None:
            logger.warning("Rejected %s: unsupported extension %r", request.path.name, extension)
            raise UnsupportedFormatError(extension)
        return backend

    def load(self, request: LoadRequest) -> LoadResult:
        """파일 확장자에 등록된 백엔드로 구간 하나를 로드합니다."""
        return self.backend_for(request).load(request)


def build_default_dispatcher(config: Optional[EngineConfig] = None) -> FormatDispatcher:
    """CSV와 워크북 백엔드가 등록된 기본 디스패처."""
    config = config or CONFIG
    dispatcher = FormatDispatcher()
    dispatcher.register(DELIMITED_EXTENSIONS, DelimitedTextBackend(config))
    dispatcher.register(WORKBOOK_EXTENSIONS, WorkbookBackend(config))
    return dispatcher
