"""FastAPI dependency injection setup.

The quote service is bound to the application at composition time (see
``create_app``); routes resolve it from application state so that each app
instance talks to its own quoter.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request

from ...application.quote_service import QuoteService
from ...domain.exceptions import MalformedRequestBodyException
from ...domain.models import InboundRequest


def get_quote_service(request: Request) -> QuoteService:
    """Get the quote service bound to the running application.

    Returns:
        QuoteService: Application service wrapping the injected quoter
    """
    return request.app.state.quote_service


async def get_json_body(request: Request) -> Any:
    """Decode the JSON request body; an empty body decodes to an empty object.

    Raises:
        MalformedRequestBodyException: If the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise MalformedRequestBodyException() from e


def _group_repeated(items: list[tuple[str, str]]) -> dict[str, Any]:
    grouped: dict[str, list[str]] = {}
    for key, value in items:
        grouped.setdefault(key, []).append(value)
    return {key: values[0] if len(values) == 1 else values for key, values in grouped.items()}


def to_inbound_request(request: Request, body: Any = None) -> InboundRequest:
    """Build the framework-free request view consumed by the request parser."""
    return InboundRequest(
        path=request.url.path,
        query=_group_repeated(request.query_params.multi_items()),
        headers=_group_repeated(request.headers.items()),
        body=body,
    )
