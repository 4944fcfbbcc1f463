"""Generation tokens for last-request-wins delivery."""

import threading


class Generation:
    """Monotonic request counter.

    Issuing a token invalidates every earlier one. Tokens are issued on the
    event loop; worker threads only read them through ``is_current``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def issue(self) -> int:
        with self._lock:
            self._current += 1
            return self._current

    def invalidate(self) -> None:
        """Make every outstanding token stale without starting a new request."""
        self.issue()

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current
