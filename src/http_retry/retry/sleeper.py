"""
Wait primitives used to pace backoff retries.
"""

import threading
import time
from typing import Protocol, runtime_checkable

from ..exceptions import RetryCancelledError


@runtime_checkable
class Sleeper(Protocol):
    """Blocks the calling thread for a backoff delay."""

    def sleep(self, seconds: float) -> None:
        """
        Wait for the given number of seconds.

        Raises:
            RetryCancelledError: If the wait was cancelled before it ended
        """
        ...


class TimeSleeper:
    """Sleeps with time.sleep. Cannot be cancelled."""

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class InterruptibleSleeper:
    """
    Sleeper whose waits can be cut short from another thread.

    Once cancel() is called, any wait in progress and every later wait
    raises RetryCancelledError, so the pending retry is abandoned.
    """

    def __init__(self) -> None:
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Wake any in-progress wait and refuse further waits."""
        self._cancelled.set()

    def sleep(self, seconds: float) -> None:
        if self._cancelled.wait(timeout=seconds):
            raise RetryCancelledError(f"Backoff wait of {seconds:.1f}s cancelled")


class RecordingSleeper:
    """
    Sleeper that returns immediately and records each requested delay.

    Intended for tests that assert on how often and how long a client waited.
    """

    def __init__(self) -> None:
        self.delays: list[float] = []

    @property
    def count(self) -> int:
        return len(self.delays)

    def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)
