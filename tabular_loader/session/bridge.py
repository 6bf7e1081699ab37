"""
백그라운드 로드 브리지

디스패치와 백엔드 작업을 주입된 executor에서 실행하고, 각 결과를
대화형 스레드가 블로킹 없이 확인하는 메일박스에 게시합니다.
선택적 wake 콜백은 확인할 결과가 생겼음을 소비자에게 알립니다
(GUI라면 다시 그리기 요청).

백그라운드 작업은 세션 상태를 건드리지 않습니다. 불변 LoadOutcome만
만들어 게시합니다.
"""

from __future__ import annotations

import logging
import queue
import traceback
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Callable, List, Optional

from tabular_loader.data_sources.dispatch import FormatDispatcher
from tabular_loader.domain.exceptions import BackgroundTaskFailure, LoaderError
from tabular_loader.domain.models import LoadRequest, LoadResult

logger = logging.getLogger(__name__)

WakeCallback = Callable[[], None]


@dataclass(frozen=True)
class RequestTag:
    """
    요청이 발행된 시점의 세션 식별자.

    Attributes:
        generation: 파일 열기, 시트 전환마다 증가
        sheet_index: 요청 발행 시 선택돼 있던 시트
    """

    generation: int
    sheet_index: int


@dataclass(frozen=True)
class LoadOutcome:
    """
    요청 하나의 완료 봉투: 결과 또는 에러 메시지 중 하나.

    에러 문구는 표시와 디버깅용입니다. 호출자는 문구로 분기하면 안 됩니다.
    """

    tag: RequestTag
    request: LoadRequest
    result: Optional[LoadResult] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("LoadOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.result is not None


class AsyncBridge:
    """
    로드 요청을 백그라운드에서 실행하고 결과를 모읍니다.

    Args:
        executor: 작업이 실행될 곳. 운영에서는 ThreadPoolExecutor,
            테스트에서는 SynchronousExecutor
        dispatcher: 요청을 백엔드로 라우팅
        wake: 결과가 하나 게시될 때마다 한 번 호출

    Examples:
        >>> bridge = AsyncBridge(build_executor(), build_default_dispatcher(), wake=request_repaint)
        >>> bridge.submit(LoadRequest(Path("run.csv"), 0, 100), RequestTag(1, 0))
        >>> # 이후 UI 사이클마다 한 번
        >>> for outcome in bridge.drain():
        ...     handle(outcome)
    """

    def __init__(
        self,
        executor: Executor,
        dispatcher: FormatDispatcher,
        wake: Optional[WakeCallback] = None,
    ) -> None:
        self._executor = executor
        self._dispatcher = dispatcher
        self._wake = wake
        self._mailbox: "queue.Queue[LoadOutcome]" = queue.Queue()

    def submit(self, request: LoadRequest, tag: RequestTag) -> None:
        """``request``를 예약하고 즉시 반환합니다."""
        logger.debug("Submitting %s for %s", request, tag)
        try:
            future = self._executor.submit(self._run, request, tag)
        except Exception as exc:
            logger.error(f"Executor rejected load of {request.path}: {exc}", exc_info=True)
            failure = BackgroundTaskFailure(f"Task execution error: {exc}")
            self._publish(LoadOutcome(tag=tag, request=request, error=str(failure)))
            return

        future.add_done_callback(lambda done: self._on_done(done, request, tag))

    def drain(self) -> List[LoadOutcome]:
        """지금까지 게시된 결과를 블로킹 없이 모두 반환합니다."""
        outcomes: List[LoadOutcome] = []
        while True:
            try:
                outcomes.append(self._mailbox.get_nowait())
            except queue.Empty:
                return outcomes

    def _run(self, request: LoadRequest, tag: RequestTag) -> LoadOutcome:
        try:
            result = self._dispatcher.load(request)
        except LoaderError as exc:
            logger.warning(f"Load of {request.path} failed: {exc}")
            return LoadOutcome(tag=tag, request=request, error=str(exc))
        return LoadOutcome(tag=tag, request=request, result=result)

    def _on_done(self, future: Future, request: LoadRequest, tag: RequestTag) -> None:
        if future.cancelled():
            outcome = LoadOutcome(
                tag=tag,
                request=request,
                error=str(BackgroundTaskFailure("Task execution error: task was cancelled")),
            )
        else:
            exc = future.exception()
            if exc is None:
                outcome = future.result()
            else:
                logger.error(
                    "Background load of %s crashed:\n%s",
                    request.path,
                    "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
                )
                failure = BackgroundTaskFailure(f"Task execution error: {type(exc).__name__}: {exc}")
                outcome = LoadOutcome(tag=tag, request=request, error=str(failure))
        self._publish(outcome)

    def _publish(self, outcome: LoadOutcome) -> None:
        self._mailbox.put(outcome)
        if self._wake is not None:
            try:
                self._wake()
            except Exception:
                logger.warning("Wake callback failed", exc_info=True)
