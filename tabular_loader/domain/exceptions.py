"""
로더 예외 정의

엔진이 보고하는 모든 실패는 LoaderError를 상속합니다. 백엔드가 이
예외들을 발생시키고, 비동기 브리지는 이를 하나의 메시지로 바꿔
소비자에게 전달합니다. 소비자는 문구를 표시만 하고 분기하지 않습니다.
"""

from __future__ import annotations

from typing import Optional


class LoaderError(Exception):
    """
    모든 로드 예외의 기본 클래스.

    하위 클래스는 메시지 외에 진단에 필요한 맥락(경로, 시트 이름,
    확장자)을 속성으로 가집니다.
    """

    pass


class EmptySourceError(LoaderError):
    """구분자 텍스트 파일에 레코드가 하나도 없을 때 발생합니다."""

    def __init__(self, path: object) -> None:
        super().__init__(f"File is empty: {path}")
        self.path = path


class DecodeError(LoaderError):
    """
    레코드를 파싱하거나 디코딩하지 못했을 때 발생합니다.

    현재 요청만 중단되며, 이전 요청으로 누적된 행은 그대로 남습니다.
    """

    def __init__(self, path: object, detail: str, line: Optional[int] = None) -> None:
        location = f" (line {line})" if line is not None else ""
        super().__init__(f"Failed to decode {path}{location}: {detail}")
        self.path = path
        self.line = line


class NoSheetsError(LoaderError):
    """워크북에 시트가 하나도 없을 때 발생합니다."""

    def __init__(self, path: object) -> None:
        super().__init__(f"No worksheets found in the file: {path}")
        self.path = path


class SheetReadError(LoaderError):
    """특정 시트를 읽지 못했을 때 발생합니다."""

    def __init__(self, sheet_name: str, detail: str) -> None:
        super().__init__(f"Failed to read worksheet '{sheet_name}': {detail}")
        self.sheet_name = sheet_name


class UnsupportedFormatError(LoaderError):
    """어떤 백엔드에도 연결되지 않은 확장자일 때 발생합니다."""

    def __init__(self, extension: str) -> None:
        shown = f"'.{extension}'" if extension else "(no extension)"
        super().__init__(
            f"Unsupported file format {shown}. Please select a CSV, Excel, or ODS file."
        )
        self.extension = extension


class SourceOpenError(LoaderError):
    """파일을 열 수 없을 때 발생합니다."""

    def __init__(self, path: object, detail: str) -> None:
        super().__init__(f"Failed to open {path}: {detail}")
        self.path = path


class BackgroundTaskFailure(LoaderError):
    """
    백그라운드 실행 환경이 로드 작업을 실행하지 못했을 때 발생합니다.

    작업이 실행되어 위의 도메인 예외를 낸 경우와 구분됩니다. 제출이
    거부되었거나 예상치 못한 예외로 작업이 중단된 경우에 사용합니다.
    """

    pass
