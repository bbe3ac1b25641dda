from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from app.llm.errors import PermissionDeniedError, RateLimitExceededError
from app.llm.types import PermissionSet

logger = logging.getLogger("uvicorn.error")

WINDOW_S = 60.0


class RequestGovernor:
    """Allow-list and per-minute request cap placed in front of governed calls.

    The rate window is reset-on-expiry, not a true sliding window: once more
    than WINDOW_S has passed since the window started, the counter drops to
    zero and the window restarts at "now". A burst straddling that boundary
    can therefore be admitted up to twice the ceiling within 60 seconds.
    """

    def __init__(self, permissions: PermissionSet, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.permissions = permissions
        self._clock = clock
        self._lock = threading.Lock()
        self.request_count = 0
        self.window_start = clock()

    @property
    def limit(self) -> int:
        return self.permissions.max_requests_per_minute

    def check_permission(self, action: str) -> bool:
        return self.permissions.allows(action)

    def check_rate_limit(self) -> bool:
        with self._lock:
            return self._check_rate_limit()

    def record_request(self) -> None:
        with self._lock:
            self.request_count += 1

    def reset(self) -> None:
        with self._lock:
            self._reset(self._clock())

    def retry_after(self) -> float:
        with self._lock:
            return self._retry_after()

    def admit(self, action: str) -> None:
        """Permission check, rate check and charge as one step.

        Raises PermissionDeniedError or RateLimitExceededError. Nothing is
        charged for a refused request; an admitted one is charged exactly once.
        """
        if not self.check_permission(action):
            logger.warning("llm:governor denied action=%s", action)
            raise PermissionDeniedError(action)
        with self._lock:
            if not self._check_rate_limit():
                logger.warning("llm:governor rate_limited count=%s limit=%s", self.request_count, self.limit)
                raise RateLimitExceededError(self.limit, self._retry_after())
            self.request_count += 1

    def _check_rate_limit(self) -> bool:
        now = self._clock()
        if now - self.window_start > WINDOW_S:
            self._reset(now)
        return self.request_count < self.limit

    def _reset(self, now: float) -> None:
        self.request_count = 0
        self.window_start = now

    def _retry_after(self) -> float:
        return max(0.0, WINDOW_S - (self._clock() - self.window_start))
