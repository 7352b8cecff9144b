"""Background worker for git reads, clipboard reads, and export writes.

Jobs run on a daemon thread and land in a result queue that the main loop
drains between key presses, so dashboard state is only touched on the loop.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchRequest:
    """One scheduled job, tagged with the key it was issued for."""

    request_id: int
    key: str
    job: Callable[[], object]


@dataclass(frozen=True)
class FetchResult:
    """Completed job: exactly one of ``value``/``error`` is meaningful."""

    request: FetchRequest
    value: object = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FetchScheduler:
    """Single-threaded job runner.

    With ``coalesce`` only the latest pending request survives (a newer
    request replaces one that has not started yet); otherwise every request
    runs in FIFO order. ``inline`` runs jobs synchronously inside
    ``schedule``, which tests use to avoid threads.
    """

    def __init__(self, *, coalesce: bool = True, inline: bool = False, name: str = "lazydiff-fetch") -> None:
        self._coalesce = coalesce
        self._inline = inline
        self._name = name
        self._lock = threading.Lock()
        self._pending: deque[FetchRequest] = deque()
        self._running = False
        self._next_request_id = 1
        self._results: Queue[FetchResult] = Queue()

    def _execute(self, request: FetchRequest) -> None:
        try:
            value = request.job()
        except Exception as exc:
            LOG.warning("%s job %r failed: %s", self._name, request.key, exc)
            self._results.put(FetchResult(request=request, error=exc))
            return
        self._results.put(FetchResult(request=request, value=value))

    def _worker(self) -> None:
        while True:
            with self._lock:
                if not self._pending:
                    self._running = False
                    return
                request = self._pending.popleft()
            self._execute(request)

    def schedule(self, key: str, job: Callable[[], object]) -> int:
        """Queue ``job`` (or replace the pending one) and return its request id."""
        with self._lock:
            request_id = self._next_request_id
            self._next_request_id += 1
            request = FetchRequest(request_id=request_id, key=key, job=job)
            if self._inline:
                start_worker = False
            else:
                if self._coalesce:
                    self._pending.clear()
                self._pending.append(request)
                start_worker = not self._running
                self._running = True

        if self._inline:
            self._execute(request)
            return request_id
        if start_worker:
            worker = threading.Thread(target=self._worker, name=self._name, daemon=True)
            worker.start()
        return request_id

    def drain_results(self) -> list[FetchResult]:
        """Drain all completed results."""
        out: list[FetchResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "FetchRequest",
    "FetchResult",
    "FetchScheduler",
]
