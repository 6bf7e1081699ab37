import sys
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Callable, List, Sequence, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# ============================================================
# 샘플 파일
# ============================================================

METADATA_LINES = [
    "User,alice",
    "Date,2024-05-01",
    "Version,1.2.0",
]

MIXED_HEADER = [
    "INDEX",
    "CHIP_X",
    "CHIP_Y",
    "UPL_PEAK",
    "UPL_FWHM",
    "EPI_WD",
    "EPI_WP",
    "AOI_CODE",
    "LOT_ID",
    "WAFER_NO",
    "TEST_TIME",
    "BIN_CODE",
]


def write_lines(path: Path, lines: Sequence[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def data_row(i: int, width: int = 12) -> List[str]:
    return [str(i)] + [f"{i}.{col}" for col in range(1, width)]


@pytest.fixture
def mixed_csv(tmp_path: Path) -> Path:
    """메타데이터 3줄, INDEX 포함 12컬럼 헤더, 데이터 250행"""
    lines = list(METADATA_LINES)
    lines.append(",".join(MIXED_HEADER))
    lines.extend(",".join(data_row(i)) for i in range(250))
    return write_lines(tmp_path / "wafer_run.csv", lines)


@pytest.fixture
def simple_csv(tmp_path: Path) -> Path:
    """일반 헤더 + 10행"""
    lines = ["name,age,city"]
    lines.extend(f"person{i},{20 + i},city{i}" for i in range(10))
    return write_lines(tmp_path / "people.csv", lines)


@pytest.fixture
def bad_tail_csv(tmp_path: Path) -> Path:
    """헤더 + 정상 150행 + 152번째 줄에 UTF-8이 아닌 바이트"""
    good = "".join(f"{i},{i * 2}\n" for i in range(150))
    path = tmp_path / "late.csv"
    path.write_bytes(b"a,b\n" + good.encode("utf-8") + b"x,\xff\n")
    return path


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    """시트 3개: Summary (헤더 + 2행), Data (헤더 + 250행), Notes (빈 시트)"""
    openpyxl = pytest.importorskip("openpyxl")

    book = openpyxl.Workbook()
    summary = book.active
    summary.title = "Summary"
    summary.append(["metric", "value"])
    summary.append(["rows", 250])
    summary.append(["owner", "alice"])

    data = book.create_sheet("Data")
    data.append(["id", "label", "score"])
    for i in range(250):
        data.append([f"r{i}", f"label{i}", f"s{i}"])

    book.create_sheet("Notes")

    path = tmp_path / "report.xlsx"
    book.save(path)
    return path


# ============================================================
# Executor
# ============================================================


class DeferredExecutor(Executor):
    """run_pending()이 호출될 때까지 제출된 작업을 보관"""

    def __init__(self) -> None:
        self.pending: List[Tuple[Future, Callable[..., Any], tuple, dict]] = []

    def submit(self, fn, /, *args, **kwargs):
        future: Future = Future()
        self.pending.append((future, fn, args, kwargs))
        return future

    def run_pending(self) -> int:
        tasks, self.pending = self.pending, []
        for future, fn, args, kwargs in tasks:
            future.set_running_or_notify_cancel()
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as exc:
                future.set_exception(exc)
        return len(tasks)


@pytest.fixture
def deferred_executor() -> DeferredExecutor:
    return DeferredExecutor()


@pytest.fixture
def sync_executor():
    from tabular_loader.common.executors import SynchronousExecutor

    executor = SynchronousExecutor()
    yield executor
    executor.shutdown()
