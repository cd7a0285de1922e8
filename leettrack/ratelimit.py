# backend/leettrack/ratelimit.py
from functools import wraps

from flask import current_app
from flask_jwt_extended import get_jwt_identity
from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import FixedWindowRateLimiter

from .errors import RateLimited


class RateLimitStore:
    """
    Counter store used by the ``rate_limited`` decorator.

    ``check`` returns True when the call identified by ``key`` is still within
    ``limit`` calls for the current ``window`` (seconds).
    """

    def check(self, key: str, limit: int, window: float) -> bool:
        raise NotImplementedError


class LimitsRateLimitStore(RateLimitStore):
    """
    Fixed-window counters on a ``limits`` storage backend.

    ``memory://`` keeps counters in-process and resets on restart; point
    ``storage_uri`` at ``redis://...`` to share them between instances.
    """

    def __init__(self, storage_uri: str = "memory://"):
        self.storage = storage_from_string(storage_uri)
        self.limiter = FixedWindowRateLimiter(self.storage)

    def check(self, key: str, limit: int, window: float) -> bool:
        item = RateLimitItemPerSecond(limit, max(1, int(window)))
        return self.limiter.hit(item, key)

    def reset(self):
        self.storage.reset()


def get_rate_limiter() -> RateLimitStore:
    return current_app.extensions["rate_limiter"]


def rate_limited(action: str, limit: int, window: float = 60):
    """
    Per-user limit for a JWT-protected view. Must sit below ``@jwt_required()``.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            key = f"{get_jwt_identity()}_{action}"
            if not get_rate_limiter().check(key, limit, window):
                raise RateLimited("Too many requests")
            return view(*args, **kwargs)

        return wrapper

    return decorator
