from typing import Optional

from fastapi import Depends, HTTPException, Request, Response

from .config import get_settings
from .constants import RATE_LIMIT_MESSAGE
from .services.completion_service import CompletionClient
from .services.rate_limiter import (
    FixedWindowRateLimiter,
    RateLimitResult,
    retry_after_seconds,
)

_completion_client: Optional[CompletionClient] = None
_rate_limiter: Optional[FixedWindowRateLimiter] = None


def get_completion_client() -> CompletionClient:
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient.from_settings(get_settings())
    return _completion_client


def get_rate_limiter() -> FixedWindowRateLimiter:
    global _rate_limiter
    if _rate_limiter is None:
        settings = get_settings()
        _rate_limiter = FixedWindowRateLimiter(
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
    return _rate_limiter


async def close_completion_client() -> None:
    global _completion_client
    if _completion_client is not None:
        await _completion_client.close()
        _completion_client = None


def _rate_limit_headers(result: RateLimitResult) -> dict:
    return {
        "RateLimit-Limit": str(result.limit),
        "RateLimit-Remaining": str(result.remaining),
        "RateLimit-Reset": str(retry_after_seconds(result)),
    }


def enforce_rate_limit(
    request: Request,
    response: Response,
    limiter: FixedWindowRateLimiter = Depends(get_rate_limiter),
) -> None:
    client_host = request.client.host if request.client else "unknown"
    result = limiter.hit(client_host)
    headers = _rate_limit_headers(result)

    if not result.allowed:
        headers["Retry-After"] = str(retry_after_seconds(result))
        raise HTTPException(status_code=429, detail=RATE_LIMIT_MESSAGE, headers=headers)

    response.headers.update(headers)
