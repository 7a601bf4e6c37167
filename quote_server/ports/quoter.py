"""Quoter port interface.

Defines the protocol interface for the market maker's quoting and settlement
logic. This port is part of the hexagonal architecture: the quote server only
calls it, and a concrete implementation is injected at composition time.
"""

from __future__ import annotations

from typing import Protocol

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


class Quoter(Protocol):
    """Protocol interface for quote sourcing, fill submission and OTC signing."""

    async def fetch_indicative_quote(
        self, taker_request: TakerRequest
    ) -> IndicativeQuoteResponse | None:
        """Fetch a non-binding price for a taker request.

        Args:
            taker_request: Parsed taker request, tagged with its protocol version

        Returns:
            Versioned quote envelope whose tag matches the request's version,
            or None when no quote is offered
        """
        ...

    async def fetch_firm_quote(self, taker_request: TakerRequest) -> FirmQuoteResponse | None:
        """Fetch a binding, signed quote for a taker request.

        Args:
            taker_request: Parsed taker request, tagged with its protocol version

        Returns:
            Versioned quote envelope whose tag matches the request's version,
            or None when no quote is offered
        """
        ...

    async def fetch_firm_otc_quote(self, taker_request: TakerRequest) -> OtcQuoteResponse | None:
        """Fetch a firm OTC order quote; the request carries nonce and nonce bucket.

        Args:
            taker_request: Parsed protocol version 4 taker request

        Returns:
            OTC quote, or None / a quote without an order when declined
        """
        ...

    async def submit_fill(self, submit_request: SubmitRequest) -> SubmitReceipt | None:
        """Decide whether to proceed with a last look fill.

        Args:
            submit_request: Parsed submission carrying the order and fee

        Returns:
            Submit receipt, or None when there is nothing to report
        """
        ...

    async def sign_otc_order(self, sign_request: SignRequest) -> SignResponse | None:
        """Sign an OTC order the taker has already signed.

        Args:
            sign_request: Parsed sign request carrying the order and taker signature

        Returns:
            Sign response, or None when the maker declines to sign
        """
        ...
