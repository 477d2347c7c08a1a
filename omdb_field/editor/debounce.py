from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Lock, Timer
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_WAIT_SECONDS = 0.15


class Debouncer:
    """
    Trailing-edge debounce for one callable.

    Each `call` replaces the pending arguments and restarts the timer; only the last
    call within `wait` seconds runs. Owned by a single editor instance.
    """

    def __init__(self, func: Callable[..., Any], wait: float = DEFAULT_WAIT_SECONDS) -> None:
        self._func = func
        self.wait = wait
        self._lock = Lock()
        self._run_lock = Lock()
        self._timer: Timer | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def call(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> bool:
        """
        Run the pending call now on the caller's thread. Returns False when nothing was pending.

        Waits for a call the timer already started.
        """
        with self._run_lock:
            with self._lock:
                if self._timer is not None:
                    self._timer.cancel()
                self._timer = None
                pending, self._pending = self._pending, None
            if pending is None:
                return False
            args, kwargs = pending
            self._func(*args, **kwargs)
            return True

    def _fire(self) -> None:
        with self._run_lock:
            with self._lock:
                self._timer = None
                pending, self._pending = self._pending, None
            if pending is None:
                return
            args, kwargs = pending
            try:
                self._func(*args, **kwargs)
            except Exception as e:
                logger.error(f"Debounced call failed: {e}")
