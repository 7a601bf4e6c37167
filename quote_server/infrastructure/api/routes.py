"""API routes for the quote server.

This module wires each HTTP method and path to a handler. Handlers parse the
request, make exactly one call through the quote service and map the result:
400 with every error when parsing fails, 204 when there is nothing to return,
200 with the payload otherwise.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from ...application.quote_service import QuoteService, QuoteKind
from ...application.request_parser import (
    parse_sign_request,
    parse_submit_request,
    parse_taker_request,
)
from ...domain.models import InvalidRequest
from .dependencies import get_json_body, get_quote_service, to_inbound_request
from .error_handlers import create_error_response

if TYPE_CHECKING:
    from ...domain.models import InboundRequest

logger = logging.getLogger(__name__)


def _rejected(raw: InboundRequest, parsed: InvalidRequest) -> JSONResponse:
    logger.info(f"Rejected request to {raw.path}: {'; '.join(parsed.errors)}")
    return create_error_response(status.HTTP_400_BAD_REQUEST, parsed.errors)


def _payload_response(payload: Any) -> Response:
    if not payload:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=jsonable_encoder(payload, by_alias=True, exclude_none=True),
    )


async def taker_request_handler(
    kind: QuoteKind, quote_service: QuoteService, raw: InboundRequest
) -> Response:
    """Serve an indicative or firm quote request."""
    parsed = parse_taker_request(raw)
    if isinstance(parsed, InvalidRequest):
        return _rejected(raw, parsed)

    payload = await quote_service.fetch_quote(kind, parsed.request)
    return _payload_response(payload)


async def otc_quote_handler(quote_service: QuoteService, raw: InboundRequest) -> Response:
    """Serve a firm OTC quote request."""
    parsed = parse_taker_request(raw)
    if isinstance(parsed, InvalidRequest):
        return _rejected(raw, parsed)

    response = await quote_service.fetch_firm_otc_quote(parsed.request)
    return _payload_response(response)


async def submit_request_handler(quote_service: QuoteService, raw: InboundRequest) -> Response:
    """Serve a last look fill submission."""
    parsed = parse_submit_request(raw)
    if isinstance(parsed, InvalidRequest):
        return _rejected(raw, parsed)

    receipt = await quote_service.submit_fill(parsed.request)
    return _payload_response(receipt)


async def sign_request_handler(quote_service: QuoteService, raw: InboundRequest) -> Response:
    """Serve an OTC order signing request."""
    parsed = parse_sign_request(raw)
    if isinstance(parsed, InvalidRequest):
        return _rejected(raw, parsed)

    response = await quote_service.sign_otc_order(parsed.request)
    return _payload_response(response)


# Create router
router = APIRouter()


@router.get("/")
async def root() -> Response:
    """The root path serves nothing."""
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.get("/price")
async def fetch_price(
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Indicative quote."""
    return await taker_request_handler("indicative", quote_service, to_inbound_request(request))


@router.get("/quote")
async def fetch_quote(
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Firm quote."""
    return await taker_request_handler("firm", quote_service, to_inbound_request(request))


@router.post("/submit")
async def submit_fill(
    request: Request,
    body: Any = Depends(get_json_body),  # noqa: B008
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Last look fill submission."""
    return await submit_request_handler(quote_service, to_inbound_request(request, body))


@router.get("/rfqm/v2/price")
async def fetch_otc_price(
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Indicative price for an OTC order."""
    return await taker_request_handler("indicative", quote_service, to_inbound_request(request))


@router.get("/rfqm/v2/otc/quote")
async def fetch_otc_quote(
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Firm OTC quote; nonce and nonceBucket are required."""
    return await otc_quote_handler(quote_service, to_inbound_request(request))


@router.post("/rfqm/v2/sign")
async def sign_otc_order(
    request: Request,
    body: Any = Depends(get_json_body),  # noqa: B008
    quote_service: QuoteService = Depends(get_quote_service),  # noqa: B008
) -> Response:
    """Sign an OTC order."""
    return await sign_request_handler(quote_service, to_inbound_request(request, body))
