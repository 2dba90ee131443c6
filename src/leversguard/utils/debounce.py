# src/leversguard/utils/debounce.py
import logging
import threading
from typing import Any, Callable, Dict, Hashable

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Collapses rapid repeated calls per key into a single delayed call.

    Each trigger for a key restarts that key's timer; only the last callback
    runs once the key has been quiet for `delay_s` seconds.
    """

    def __init__(self, delay_s: float = 0.3):
        self.delay_s = delay_s
        self._timers: Dict[Hashable, threading.Timer] = {}
        self._lock = threading.Lock()

    def trigger(self, key: Hashable, callback: Callable[..., Any], *args: Any) -> None:
        with self._lock:
            existing = self._timers.pop(key, None)
            if existing is not None:
                existing.cancel()
            timer = threading.Timer(self.delay_s, self._fire, args=(key, callback, args))
            timer.daemon = True
            self._timers[key] = timer
            timer.start()

    def _fire(self, key: Hashable, callback: Callable[..., Any], args: tuple) -> None:
        with self._lock:
            current = self._timers.get(key)
            if current is not threading.current_thread():
                return
            del self._timers[key]
        try:
            callback(*args)
        except Exception as e:
            logger.error("Debounced call for %s failed: %s", key, e, exc_info=True)

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)

    def cancel_all(self) -> None:
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
