"""Application service for quote operations.

This service delegates each parsed request to the injected quoter exactly
once and normalizes what comes back. Quoter failures are not caught here;
they propagate to the API layer's generic error handler.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from ..domain.exceptions import ProtocolVersionMismatchException

if TYPE_CHECKING:
    from ..domain.models import (
        FirmQuoteResponse,
        IndicativeQuoteResponse,
        OtcQuoteResponse,
        SignRequest,
        SignResponse,
        SubmitReceipt,
        SubmitRequest,
        TakerRequest,
    )
    from ..ports.quoter import Quoter

logger = logging.getLogger(__name__)

QuoteKind = Literal["indicative", "firm"]


class QuoteService:
    """Application service that orchestrates calls to the quoter."""

    def __init__(self, quoter: Quoter):
        """Initialize the quote service.

        Args:
            quoter: Port implemented by the market maker
        """
        self._quoter = quoter

    async def fetch_quote(self, kind: QuoteKind, taker_request: TakerRequest) -> Any | None:
        """Fetch an indicative or firm quote and unwrap its versioned envelope.

        Args:
            kind: "indicative" for a price, "firm" for a signed quote
            taker_request: Parsed taker request

        Returns:
            The quote payload, or None when no quote is offered

        Raises:
            ProtocolVersionMismatchException: If the quoter tagged its answer
                with a different protocol version than the request
        """
        envelope: IndicativeQuoteResponse | FirmQuoteResponse | None
        if kind == "firm":
            envelope = await self._quoter.fetch_firm_quote(taker_request)
        else:
            envelope = await self._quoter.fetch_indicative_quote(taker_request)

        if envelope is None:
            return None
        if envelope.protocol_version != taker_request.protocol_version:
            logger.error(
                f"Response and request protocol versions do not match: "
                f"requested {taker_request.protocol_version}, got {envelope.protocol_version}"
            )
            raise ProtocolVersionMismatchException(
                taker_request.protocol_version, envelope.protocol_version
            )
        return envelope.response

    async def fetch_firm_otc_quote(self, taker_request: TakerRequest) -> OtcQuoteResponse | None:
        """Fetch a firm OTC quote; a quote without an order counts as no quote."""
        response = await self._quoter.fetch_firm_otc_quote(taker_request)
        if response is None or response.order is None:
            return None
        return response

    async def submit_fill(self, submit_request: SubmitRequest) -> SubmitReceipt | None:
        """Forward a fill submission to the quoter."""
        return await self._quoter.submit_fill(submit_request)

    async def sign_otc_order(self, sign_request: SignRequest) -> SignResponse | None:
        """Forward an OTC signing request to the quoter."""
        return await self._quoter.sign_otc_order(sign_request)
