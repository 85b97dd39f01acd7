# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock

from flask import jsonify, request

from marketplace_auth.shared.config import load_config
from marketplace_auth.shared.logging import logger

from .request_logger import client_ip


class InMemoryRateLimiter:
    """Sliding window of hit timestamps per key, process-local."""

    def __init__(
        self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.limit = max(1, int(limit))
        self.window = max(0.1, float(window_seconds))
        self._clock = clock
        self._lock = Lock()
        self._hits: dict[str, deque[float]] = {}

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] > self.window:
                hits.popleft()
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            return True


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Per-IP limit on a view; a blocked call answers 429 without running it."""
    security = load_config().security
    limiter = InMemoryRateLimiter(
        limit or security.rate_limit_requests,
        window_seconds or security.rate_limit_window,
    )

    def decorator(view: Callable):
        if not security.enable_rate_limit:
            return view

        @wraps(view)
        def limited(*args, **kwargs):
            if limiter.allow(f"{request.endpoint}:{client_ip()}"):
                return view(*args, **kwargs)
            logger.warning(
                f"rate_limit: {request.method} {request.path} over {limiter.limit}/{limiter.window:.0f}s"
            )
            return jsonify({"error": "rate_limited"}), 429

        return limited

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
