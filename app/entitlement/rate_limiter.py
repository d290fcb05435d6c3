import math
import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from app.logging.logger import Log


@dataclass
class RateWindow:
    """Request count of one client key inside one fixed window."""

    window_start: float
    count: int


class RateWindowTable:
    """Process-local map of client key to window, guarded by a single lock."""

    def __init__(self) -> None:
        self._windows: dict[str, RateWindow] = {}
        self._lock = threading.Lock()

    @contextmanager
    def locked(self) -> Iterator[dict[str, RateWindow]]:
        with self._lock:
            yield self._windows

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)


def client_key(
    forwarded_for: str | None,
    remote_addr: str | None,
    client_id: str | None,
    client_id_chars: int = 40,
) -> str:
    """Best-effort client identity: first forwarded address plus a truncated client id."""
    address = (forwarded_for or "").split(",")[0].strip() or (remote_addr or "").strip() or "local"
    return f"{address}::{(client_id or '')[:client_id_chars]}"


class RateLimiter:
    """Fixed-window request counter per client key."""

    def __init__(
        self,
        table: RateWindowTable,
        *,
        window_seconds: float = 60.0,
        max_requests: int = 12,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._table = table
        self._window_seconds = window_seconds
        self._max_requests = max_requests
        self._clock = clock
        self._last_sweep = clock()

    def allow(self, key: str) -> bool:
        now = self._clock()
        with self._table.locked() as windows:
            if now - self._last_sweep > self._window_seconds:
                self._sweep(windows, now)
            window = windows.get(key)
            if window is None or now - window.window_start > self._window_seconds:
                windows[key] = RateWindow(window_start=now, count=1)
                return True
            window.count += 1
            allowed = window.count <= self._max_requests
        if not allowed:
            Log.warning(f"Rate limit exceeded ({window.count} requests in window)")
        return allowed

    def retry_after_seconds(self, key: str) -> int:
        now = self._clock()
        with self._table.locked() as windows:
            window = windows.get(key)
            if window is None:
                return 0
            remaining = window.window_start + self._window_seconds - now
        return max(1, math.ceil(remaining))

    def _sweep(self, windows: dict[str, RateWindow], now: float) -> None:
        stale = [k for k, w in windows.items() if now - w.window_start > self._window_seconds]
        for k in stale:
            del windows[k]
        self._last_sweep = now
        if stale:
            Log.debug(f"Swept {len(stale)} stale rate-limit window(s)")
