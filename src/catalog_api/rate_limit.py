"""Fixed-window request limit per client address, shared by every route."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

RATE_LIMIT_SCOPE = "catalog"


def client_address(request: Request) -> str:
    """Address the limit is keyed on."""
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


class RequestRateLimiter:
    """
    ``http`` middleware counting every request against one window per address.

    :param limit: Limit string such as ``"100 per 15 minute"``.
    :param message: Body message of the 429 response.
    """

    def __init__(self, limit: str, message: str):
        self.limit: RateLimitItem = parse(limit)
        self.message = message
        self._limiter = FixedWindowRateLimiter(MemoryStorage())

    def hit(self, address: str) -> bool:
        """Count one request; False once the window is used up."""
        return self._limiter.hit(self.limit, RATE_LIMIT_SCOPE, address)

    async def __call__(self, request: Request, call_next):
        address = client_address(request)
        if not self.hit(address):
            logger.warning(f"Rate limit exceeded for {address} on {request.method} {request.url.path} ({self.limit})")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"message": self.message},
            )
        return await call_next(request)
