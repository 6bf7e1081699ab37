"""모든 포맷 백엔드가 따르는 로드 계약."""

from __future__ import annotations

from typing import Protocol

from tabular_loader.domain.models import LoadRequest, LoadResult


class Backend(Protocol):
    """한 종류의 파일에서 행 구간을 제공하는 포맷 백엔드."""

    def load(self, request: LoadRequest) -> LoadResult:  # pragma: no cover - interface definition
        ...
