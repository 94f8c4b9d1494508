from __future__ import annotations

import queue
import threading
from concurrent.futures import Future
from typing import Callable, TypeVar

T = TypeVar("T")


class UiDispatcher:
    """Queue of completions that must run on the UI's own execution context.

    Worker threads only ever ``post``; the UI loop calls ``drain`` to run the
    queued callbacks in the order they were posted.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._in_flight = 0
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._in_flight > 0 or not self._queue.empty()

    def post(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def drain(self) -> int:
        handled = 0
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return handled
            callback()
            handled += 1

    def watch(
        self,
        future: Future[T],
        on_success: Callable[[T], None] | None = None,
        on_failure: Callable[[BaseException], None] | None = None,
    ) -> None:
        """Deliver ``future``'s outcome to the given handlers via ``post``."""
        with self._lock:
            self._in_flight += 1

        def _done(completed: Future[T]) -> None:
            try:
                if completed.cancelled():
                    return
                exc = completed.exception()
                if exc is not None:
                    if on_failure is not None:
                        self.post(lambda: on_failure(exc))
                elif on_success is not None:
                    value = completed.result()
                    self.post(lambda: on_success(value))
            finally:
                with self._lock:
                    self._in_flight -= 1

        future.add_done_callback(_done)
