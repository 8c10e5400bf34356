"""Bounded graceful shutdown.

``RUNNING -> DRAINING -> CLOSED | FORCED``: the first termination signal starts
draining and arms a timer. If the server finishes draining first the process
exits 0, otherwise the timer ends it with exit code 1.
"""
from __future__ import annotations

import os
import signal
import sys
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

from .logger import log

SHUTDOWN_TIMEOUT = 10.0


class State(str, Enum):
    RUNNING = "running"
    DRAINING = "draining"
    CLOSED = "closed"
    FORCED = "forced"


class Timer(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def start_timer(interval: float, callback: Callable[[], None]) -> Timer:
    # daemon thread, fires even while the event loop is blocked
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    timer.start()
    return timer


def force_exit(code: int) -> None:
    sys.stdout.flush()
    os._exit(code)


def signal_name(sig: int) -> str:
    try:
        return signal.Signals(sig).name
    except ValueError:
        return str(sig)


class GracefulShutdown:
    def __init__(
        self,
        stop: Callable[[], None],
        timeout: float = SHUTDOWN_TIMEOUT,
        timer_factory: TimerFactory = start_timer,
        exit: Callable[[int], None] = force_exit,
    ) -> None:
        self.timeout = timeout
        self.state = State.RUNNING
        self._stop = stop
        self._timer_factory = timer_factory
        self._exit = exit
        self._timer: Optional[Timer] = None
        # Reentrant: a signal can arrive while the main thread is inside closed().
        self._lock = threading.RLock()

    def on_signal(self, sig: int) -> None:
        with self._lock:
            if self.state is not State.RUNNING:
                return
            self.state = State.DRAINING
            log(f"Received {signal_name(sig)}, shutting down gracefully...")
            self._timer = self._timer_factory(self.timeout, self._expire)
        self._stop()

    def closed(self) -> int:
        """Record that the server finished draining and return the exit code."""
        with self._lock:
            if self.state is State.FORCED:
                return 1
            if self.state is State.CLOSED:
                return 0
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self.state = State.CLOSED
            log("Server closed")
            return 0

    def _expire(self) -> None:
        with self._lock:
            if self.state is not State.DRAINING:
                return
            self.state = State.FORCED
            log("Forcing shutdown")
        self._exit(1)
