"""Per-client request rate limits.

Every route shares the global limit, enforced by ``SlowAPIMiddleware``.
Uploads and password-gated share access carry a second, tighter limit
applied through the ``RouteRateLimit`` dependency.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.core.config import Settings
from app.core.errors import ErrorKind, RateLimitedError

logger = logging.getLogger(__name__)


def create_limiter(settings: Settings) -> Limiter:
    """Build the limiter for one application; counters live in its memory."""
    return Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit_global],
        enabled=settings.rate_limit_enabled,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    # Called synchronously by the middleware, so this must not be a coroutine
    logger.warning(
        "Rate limit exceeded by %s on %s", get_remote_address(request), request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": RateLimitedError.default_message, "kind": ErrorKind.RATE_LIMITED.value},
    )


class RouteRateLimit:
    """Dependency counting requests of one route group per client."""

    def __init__(self, scope: str, setting: str):
        self.scope = scope
        self.setting = setting

    async def __call__(self, request: Request) -> None:
        limiter: Limiter = request.app.state.limiter
        if not limiter.enabled:
            return

        settings: Settings = request.app.state.settings
        item = parse(getattr(settings, self.setting))
        client = get_remote_address(request)
        if not limiter.limiter.hit(item, self.scope, client):
            logger.warning("%s rate limit exceeded by %s", self.scope, client)
            raise RateLimitedError()


upload_rate_limit = RouteRateLimit("upload", "rate_limit_upload")
share_access_rate_limit = RouteRateLimit("share_access", "rate_limit_share_access")
