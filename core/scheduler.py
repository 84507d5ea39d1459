"""Thread-based scheduler for delayed and periodic engine callbacks."""

import logging
import threading
from typing import Callable

from .interfaces import Cancellable, Scheduler

logger = logging.getLogger(__name__)


def _run_safely(callback: Callable[[], None]) -> None:
    try:
        callback()
    except Exception as e:
        logger.error(f"Scheduled callback failed: {type(e).__name__}: {e}")


class TimerHandle(Cancellable):
    """Wraps a one-shot threading.Timer."""

    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class Ticker(Cancellable):
    """Calls a function every `interval` seconds on a daemon thread."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name='wordmatch-ticker', daemon=True)

    def start(self) -> 'Ticker':
        self._thread.start()
        return self

    def _run(self) -> None:
        # Event.wait returns True once cancel() is called
        while not self._stopped.wait(self.interval):
            _run_safely(self.callback)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stopped.is_set()

    def cancel(self) -> None:
        self._stopped.set()


class ThreadingScheduler(Scheduler):
    """Scheduler using daemon threads, suitable for servers and consoles."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay, _run_safely, args=(callback,))
        timer.daemon = True
        timer.start()
        return TimerHandle(timer)

    def start_ticker(self, interval: float, callback: Callable[[], None]) -> Cancellable:
        return Ticker(interval, callback).start()
