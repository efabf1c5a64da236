import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from souq.auth.utils import resolve_token

logger = logging.getLogger(__name__)


def bearer_token(request: Request) -> Optional[str]:
    auth = request.headers.get("Authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    return auth.split(" ", 1)[1].strip() or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Attach the caller (or None) to request.state.user; routes decide what is required."""

    async def dispatch(self, request: Request, call_next):
        token = bearer_token(request)
        request.state.user = resolve_token(token) if token else None
        if token and request.state.user is None:
            logger.debug("🔒 Ignoring unusable bearer token on %s", request.url.path)

        return await call_next(request)
