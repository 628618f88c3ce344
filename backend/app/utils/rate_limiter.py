"""
Simple Memory-based Rate Limiter.
Per-process only; put a shared limiter in front when running several workers.
Entries are never evicted: the store keeps one (scope, ip) key per client seen
for the life of the process.
"""
import time
from fastapi import Request, HTTPException
from typing import Dict, Tuple

# In-memory storage: {(scope, ip): (window_start, count)}
_rate_limit_store: Dict[Tuple[str, str], Tuple[float, int]] = {}


def reset_rate_limits() -> None:
    _rate_limit_store.clear()


def rate_limit(requests: int, window: int, scope: str = "default"):
    """
    Dependency for rate limiting, keyed by client IP within `scope`.
    Example: Depends(rate_limit(requests=5, window=60, scope="initiate"))
    """
    def limiter(request: Request):
        ip = request.client.host if request.client else "unknown"
        key = (scope, ip)
        now = time.time()

        if key not in _rate_limit_store:
            _rate_limit_store[key] = (now, 1)
            return True

        window_start, count = _rate_limit_store[key]

        # Reset window if expired
        if now - window_start > window:
            _rate_limit_store[key] = (now, 1)
            return True

        if count >= requests:
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded. Try again in {int(window - (now - window_start))} seconds."
            )

        _rate_limit_store[key] = (window_start, count + 1)
        return True

    return limiter
