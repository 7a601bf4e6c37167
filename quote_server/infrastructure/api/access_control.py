"""API key access control.

The gate runs as middleware ahead of route dispatch. For every request it
either hands control to the downstream handler or answers 401 itself, never
both.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ...domain.constants import (
    API_KEY_HEADER,
    CAN_MAKER_CONTROL_SETTLEMENT_PARAM,
    DEFAULT_API_KEY_EXEMPT_PATHS,
)

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

INVALID_API_KEY_ERROR = "Invalid API key"


class ApiKeyGate:
    """Decides whether a request may proceed based on path, query and API key."""

    def __init__(
        self,
        exempt_paths: Iterable[str] = DEFAULT_API_KEY_EXEMPT_PATHS,
        allowlist: Iterable[str] | None = None,
    ):
        """Initialize the gate.

        Args:
            exempt_paths: Paths that bypass the key check entirely
            allowlist: Accepted keys; when empty any single string key is accepted
        """
        self._exempt_paths = frozenset(exempt_paths)
        self._allowlist = frozenset(allowlist or ())

    def is_authorized(self, path: str, query: Mapping[str, Any], api_key: Any) -> bool:
        """Check whether a request may reach its handler.

        Args:
            path: Request path
            query: Query parameters
            api_key: API key header value; a list when the header was repeated

        Returns:
            True if the request may proceed
        """
        if path in self._exempt_paths:
            return True
        if query.get(CAN_MAKER_CONTROL_SETTLEMENT_PARAM):
            return True
        if not isinstance(api_key, str) or not api_key:
            return False
        if self._allowlist:
            return api_key in self._allowlist
        return True


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Starlette middleware enforcing an ApiKeyGate."""

    def __init__(self, app: ASGIApp, gate: ApiKeyGate):
        super().__init__(app)
        self._gate = gate

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        api_keys = request.headers.getlist(API_KEY_HEADER)
        api_key: Any = api_keys[0] if len(api_keys) == 1 else (api_keys or None)

        if self._gate.is_authorized(request.url.path, request.query_params, api_key):
            return await call_next(request)

        logger.info(f"Rejected {request.method} {request.url.path}: invalid API key")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"errors": [INVALID_API_KEY_ERROR]},
        )
