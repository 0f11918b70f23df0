# adapters/deferred.py
from __future__ import annotations
import logging
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)


class DeferredWrite:
    """
    A write scheduled on a background timer.

    The caller gets this handle back immediately; the file is only updated
    once `done` is True. `result()` re-raises whatever the write raised.
    Interpreter exit waits for a pending write; call cancel() to drop it.
    """

    def __init__(self, write: Callable[[], None], delay: float, label: str = "write"):
        self.delay = delay
        self.label = label
        self._write = write
        self._lock = threading.Lock()
        self._state = "pending"
        self._finished = threading.Event()
        self._error: Optional[BaseException] = None
        self._timer = threading.Timer(delay, self._run)
        # interpreter exit waits for a pending write
        self._timer.daemon = False

    def start(self) -> "DeferredWrite":
        self._timer.start()
        return self

    def _run(self) -> None:
        with self._lock:
            if self._state != "pending":
                return
            self._state = "running"
        try:
            self._write()
        except Exception as e:
            log.error("Deferred %s failed: %s", self.label, e)
            self._error = e
        finally:
            self._finished.set()

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def cancelled(self) -> bool:
        return self._state == "cancelled"

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def cancel(self) -> bool:
        """Stop the write if it has not started yet. Returns True when it was stopped."""
        with self._lock:
            if self._state != "pending":
                return False
            self._state = "cancelled"
        self._timer.cancel()
        self._finished.set()
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._finished.wait(timeout)

    def result(self, timeout: Optional[float] = None) -> None:
        if not self._finished.wait(timeout):
            raise TimeoutError(f"deferred {self.label} still pending after {timeout}s")
        if self._error is not None:
            raise self._error
