import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CachedToken:
    token: str
    expires_at: float


class TokenCache:
    """
    Memoized auth token with a timestamp-based validity check.

    Not locked; concurrent refreshes may each call ``fetch``.
    Inject ``clock`` to control time in tests.
    """

    def __init__(
        self,
        ttl: float,
        clock: Callable[[], float] = time.time,
        refresh_margin: float = 0,
    ):
        self.ttl = ttl
        self.clock = clock
        self.refresh_margin = refresh_margin
        self._cached: CachedToken | None = None

    @property
    def is_valid(self) -> bool:
        if self._cached is None:
            return False
        return self.clock() < self._cached.expires_at - self.refresh_margin

    def get(self, fetch: Callable[[], str]) -> str:
        """Return the cached token, calling ``fetch`` if it is missing or stale."""
        if self.is_valid:
            return self._cached.token

        token = fetch()
        self._cached = CachedToken(token=token, expires_at=self.clock() + self.ttl)
        logger.debug("[django-razorpay] Refreshed cached token")
        return token

    def invalidate(self) -> None:
        self._cached = None
