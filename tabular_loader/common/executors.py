"""로드 작업 실행용 executor."""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from tabular_loader.core.config import CONFIG, LoaderConfig


class SynchronousExecutor(Executor):
    """
    제출한 스레드에서 작업을 즉시 실행하는 executor.

    테스트와 헤드리스 일괄 처리용입니다. submit()이 반환되기 전에 작업이
    끝나므로 다음 poll 시점에는 결과가 메일박스에 있습니다.
    """

    def __init__(self) -> None:
        self._shutdown = False
        self._lock = threading.Lock()

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        with self._lock:
            if self._shutdown:
                raise RuntimeError("cannot schedule new futures after shutdown")

        future: Future = Future()
        if not future.set_running_or_notify_cancel():
            return future
        try:
            result = fn(*args, **kwargs)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        with self._lock:
            self._shutdown = True


def build_executor(config: Optional[LoaderConfig] = None) -> ThreadPoolExecutor:
    """백그라운드 로드에 쓰는 작업 스레드 풀을 만듭니다."""
    config = config or CONFIG.loader
    return ThreadPoolExecutor(
        max_workers=config.max_workers,
        thread_name_prefix="tabular-loader",
    )
