"""
In-memory rate limiting.

Sliding window per client identifier. A RateLimiter instance is created
by the application factory and handed to the middleware, so every app
owns its own counters.

Note: For multiple instances behind a load balancer, back this with a
shared store instead of process memory.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, List, Optional, Tuple

import structlog
from starlette.requests import Request

logger = structlog.get_logger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for a rate limit rule."""

    max_requests: int  # Maximum number of requests allowed
    window_seconds: int  # Time window in seconds
    block_duration_seconds: int = 0  # Block after exceeding limit (0 = no block)


@dataclass
class ClientState:
    """State tracking for a single client."""

    requests: List[float] = field(default_factory=list)  # Request timestamps
    blocked_until: float = 0.0


class RateLimiter:
    """
    Sliding window rate limiter keyed by client identifier.

    Thread-safe; idle clients are evicted once their window (and block)
    has expired.

    Attributes:
        config: Rate limit configuration
        _clients: Client identifier to state
        _lock: Guards _clients
    """

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Callable[[], float] = time.time,
        cleanup_interval: float = 60.0,
    ) -> None:
        self.config = config
        self._clock = clock
        self._clients: Dict[str, ClientState] = defaultdict(ClientState)
        self._lock = Lock()
        self._last_cleanup = clock()
        self._cleanup_interval = cleanup_interval

    @property
    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._clients)

    def _cleanup_old_entries(self, now: float) -> None:
        """Remove expired entries to prevent unbounded growth."""
        if now - self._last_cleanup < self._cleanup_interval:
            return

        self._last_cleanup = now
        cutoff = now - self.config.window_seconds

        expired_clients = [
            client_id
            for client_id, state in self._clients.items()
            if (not state.requests or state.requests[-1] <= cutoff)
            and state.blocked_until <= now
        ]

        for client_id in expired_clients:
            del self._clients[client_id]

        if expired_clients:
            logger.debug("Evicted idle rate limit entries", count=len(expired_clients))

    @staticmethod
    def get_client_id(request: Request) -> str:
        """
        Extract the client identifier from a request.

        Uses the first X-Forwarded-For hop for proxied requests.
        """
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        if request.client:
            return request.client.host

        return "unknown"

    def check(self, client_id: str) -> Tuple[bool, Optional[int]]:
        """
        Record a request and report whether it is within the limit.

        Returns:
            Tuple of (is_allowed, retry_after_seconds); retry_after is None when allowed
        """
        now = self._clock()

        with self._lock:
            self._cleanup_old_entries(now)

            state = self._clients[client_id]

            if state.blocked_until > now:
                retry_after = int(state.blocked_until - now) + 1
                logger.warning(
                    "Rate limited client still blocked",
                    client_id=client_id,
                    retry_after_seconds=retry_after,
                )
                return False, retry_after

            window_start = now - self.config.window_seconds
            state.requests = [ts for ts in state.requests if ts > window_start]

            if len(state.requests) >= self.config.max_requests:
                if self.config.block_duration_seconds > 0:
                    state.blocked_until = now + self.config.block_duration_seconds
                    retry_after = self.config.block_duration_seconds
                else:
                    retry_after = int(state.requests[0] - window_start) + 1

                logger.warning(
                    "Rate limit exceeded",
                    client_id=client_id,
                    requests_in_window=len(state.requests),
                    max_requests=self.config.max_requests,
                    retry_after_seconds=retry_after,
                )
                return False, retry_after

            state.requests.append(now)
            return True, None

    def get_remaining(self, client_id: str) -> int:
        """Number of requests the client may still make in the current window."""
        now = self._clock()

        with self._lock:
            state = self._clients.get(client_id)
            if not state:
                return self.config.max_requests

            if state.blocked_until > now:
                return 0

            window_start = now - self.config.window_seconds
            active_requests = len([ts for ts in state.requests if ts > window_start])
            return max(0, self.config.max_requests - active_requests)
