# utils/rate_limiter.py - In-memory fixed-window rate limiter
"""
Fixed-window rate limiter keyed by client identifier.

Each identifier gets a window that starts with its first request and lasts
`window_seconds`. Up to `max_requests` are admitted per window; a new window
starts with the first request after the old one expires. Bursts of up to
2 x max_requests are possible across a window boundary.

State lives in process memory: one limiter per endpoint class, created at
startup and shared by every request handler. Not shared across processes.
"""

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from fastapi import Request

from utils.logger import get_rate_limit_logger

logger = get_rate_limit_logger()

# Used when no proxy header identifies the caller (local development)
LOOPBACK_CLIENT_ID = "127.0.0.1"


@dataclass(frozen=True)
class RateLimitConfig:
    window_seconds: float
    max_requests: int

    def __post_init__(self):
        if self.max_requests <= 0:
            raise ValueError("max_requests must be greater than 0")
        if self.window_seconds <= 0:
            raise ValueError("window_seconds must be greater than 0")


@dataclass
class RateLimitRecord:
    count: int
    reset_time: float  # epoch seconds


class RateLimiter:
    """Per-identifier request counter with expiring fixed windows."""

    def __init__(self, config: RateLimitConfig, name: str = "default",
                 clock: Callable[[], float] = time.time):
        self.config = config
        self.name = name
        self._clock = clock
        self._store: Dict[str, RateLimitRecord] = {}
        self._lock = threading.Lock()

    def _live_record(self, client_id: str, now: float) -> Optional[RateLimitRecord]:
        record = self._store.get(client_id)
        if record is None or now > record.reset_time:
            return None
        return record

    def is_allowed(self, client_id: str) -> bool:
        """Admit or reject one request for `client_id`, counting it if admitted."""
        with self._lock:
            now = self._clock()
            record = self._live_record(client_id, now)

            if record is None:
                # First request or window expired
                self._store[client_id] = RateLimitRecord(
                    count=1, reset_time=now + self.config.window_seconds
                )
                return True

            if record.count >= self.config.max_requests:
                return False

            record.count += 1
            return True

    def remaining(self, client_id: str) -> int:
        with self._lock:
            record = self._live_record(client_id, self._clock())
            if record is None:
                return self.config.max_requests
            return max(0, self.config.max_requests - record.count)

    def reset_time(self, client_id: str) -> float:
        """When the current window ends, or when a window opened now would end."""
        with self._lock:
            now = self._clock()
            record = self._live_record(client_id, now)
            if record is None:
                return now + self.config.window_seconds
            return record.reset_time

    def cleanup(self) -> int:
        """Drop every expired record. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [cid for cid, rec in self._store.items() if now > rec.reset_time]
            for client_id in expired:
                del self._store[client_id]
        return len(expired)

    def __len__(self) -> int:
        return len(self._store)


class RateLimitSweeper:
    """Periodically runs cleanup() on a set of limiters from the event loop."""

    def __init__(self, limiters: Iterable[RateLimiter], interval_seconds: float):
        self.limiters: List[RateLimiter] = list(limiters)
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep(self) -> int:
        removed = 0
        for limiter in self.limiters:
            count = limiter.cleanup()
            if count:
                logger.debug(f"[{limiter.name}] Removed {count} expired rate limit records")
            removed += count
        return removed

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.sweep()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Rate limit sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Rate limit sweeper stopped")


def resolve_client_id(headers: Mapping[str, str]) -> str:
    """
    Best-effort caller identifier from proxy headers.

    Trusts whatever proxy sits in front of the app: a client talking to the
    origin directly can set X-Forwarded-For itself and pick its own key.
    """
    forwarded = headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    cf_ip = headers.get("CF-Connecting-IP")
    if cf_ip:
        return cf_ip

    return LOOPBACK_CLIENT_ID


def get_client_ip(request: Request) -> str:
    """Extract client identifier from a FastAPI request."""
    return resolve_client_id(request.headers)
