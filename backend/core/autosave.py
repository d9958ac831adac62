"""
Trailing-edge debouncer for set autosave.

Each edit to a workout exercise reschedules a single pending save for that
record; only the last edit inside the delay window is written. Pending saves
are cancelled when the edit is committed, cancelled, or the session closes.
"""
import logging
import threading
from threading import Lock
from typing import Callable, Dict, Optional, Protocol

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY_SECONDS = 0.5


class Timer(Protocol):
    """The subset of threading.Timer the debouncer relies on."""

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _default_timer_factory(delay: float, fn: Callable[[], None]) -> Timer:
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    return timer


class AutosaveDebouncer:
    """
    Debounce save callbacks per key.

    Args:
        delay: Seconds to wait after the last schedule() before saving
        timer_factory: Builds the timer; tests pass a manual one
    """

    def __init__(
        self,
        delay: float = AUTOSAVE_DELAY_SECONDS,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self._delay = delay
        self._timer_factory = timer_factory or _default_timer_factory
        self._timers: Dict[str, Timer] = {}
        self._lock = Lock()
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    def pending(self, key: Optional[str] = None) -> bool:
        with self._lock:
            if key is None:
                return bool(self._timers)
            return key in self._timers

    def schedule(self, key: str, callback: Callable[[], None]) -> None:
        """Replace any pending save for ``key`` with ``callback``."""
        with self._lock:
            if self._closed:
                return
            existing = self._timers.pop(key, None)
            if existing is not None:
                existing.cancel()
            timer = self._timer_factory(self._delay, lambda: self._fire(key, timer, callback))
            self._timers[key] = timer
        timer.start()

    def _fire(self, key: str, timer: Timer, callback: Callable[[], None]) -> None:
        with self._lock:
            # A newer schedule() or a cancel() already superseded this timer
            if self._timers.get(key) is not timer:
                return
            del self._timers[key]
        try:
            callback()
        except Exception:
            # Runs on a timer thread; the next edit or the commit rewrites the sets
            logger.exception("Autosave failed for %s", key)

    def cancel(self, key: Optional[str] = None) -> None:
        """Cancel the pending save for ``key``, or every pending save."""
        with self._lock:
            if key is None:
                timers = list(self._timers.values())
                self._timers.clear()
            else:
                timer = self._timers.pop(key, None)
                timers = [timer] if timer is not None else []
        for timer in timers:
            timer.cancel()

    def close(self) -> None:
        """Cancel everything and refuse further scheduling."""
        with self._lock:
            self._closed = True
        self.cancel()
