"""Shared pytest fixtures for quote server tests."""

import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add the project root to Python path for imports
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from quote_server.domain.constants import API_KEY_HEADER, NULL_ADDRESS  # noqa: E402
from quote_server.domain.models import (  # noqa: E402
    InboundRequest,
    OtcOrder,
    ServiceConfiguration,
    Signature,
    V3SignedOrder,
    V4RfqOrder,
    V4SignedRfqOrder,
)

TX_ORIGIN = "0x61935cbdd02287b511119ddb11aeb42f1593b7ef"
SELL_TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
BUY_TOKEN = "0x6b175474e89094c44da98b954eedeac495271d0f"
TAKER = "0x8a333a18B924554D6e83EF9E9944DE6260f61D3B"
FEE_TOKEN = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"


@pytest.fixture
def base_query() -> dict[str, str]:
    """Minimal valid taker query parameters."""
    return {
        "sellTokenAddress": NULL_ADDRESS,
        "buyTokenAddress": NULL_ADDRESS,
        "takerAddress": NULL_ADDRESS,
        "sellAmountBaseUnits": "1225000000",
    }


@pytest.fixture
def make_request():
    """Build an InboundRequest carrying an API key header."""

    def _make(query=None, body=None, path="/price", api_key="0xfoo") -> InboundRequest:
        headers = {API_KEY_HEADER: api_key} if api_key is not None else {}
        return InboundRequest(path=path, query=query or {}, headers=headers, body=body)

    return _make


@pytest.fixture
def mock_quoter() -> Mock:
    """Mock Quoter port with every operation as an AsyncMock."""
    quoter = Mock()
    quoter.fetch_indicative_quote = AsyncMock(return_value=None)
    quoter.fetch_firm_quote = AsyncMock(return_value=None)
    quoter.fetch_firm_otc_quote = AsyncMock(return_value=None)
    quoter.submit_fill = AsyncMock(return_value=None)
    quoter.sign_otc_order = AsyncMock(return_value=None)
    return quoter


@pytest.fixture
def service_config() -> ServiceConfiguration:
    """Development configuration with presence-only API key checks."""
    return ServiceConfiguration(api_port=8000, log_level="INFO", environment="development")


@pytest.fixture
def fake_v3_order() -> V3SignedOrder:
    return V3SignedOrder(
        chain_id=1,
        exchange_address="0xabc",
        maker_address="0xabc",
        taker_address="0xabc",
        fee_recipient_address="0xabc",
        sender_address="",
        maker_asset_amount=Decimal(1),
        taker_asset_amount=Decimal(1),
        maker_fee=Decimal(0),
        taker_fee=Decimal(0),
        expiration_time_seconds=Decimal(1000),
        salt=Decimal(1000),
        maker_asset_data="0xabc",
        taker_asset_data="0xabc",
        maker_fee_asset_data="0xabc",
        taker_fee_asset_data="0xabc",
        signature="fakeSignature",
    )


@pytest.fixture
def fake_v4_order() -> V4RfqOrder:
    return V4RfqOrder(
        maker_token=TX_ORIGIN,
        taker_token=TX_ORIGIN,
        maker_amount=Decimal(1),
        taker_amount=Decimal(1),
        maker=TX_ORIGIN,
        taker=TX_ORIGIN,
        tx_origin=TX_ORIGIN,
        pool="0x00",
        expiry=Decimal(1000),
        salt=Decimal(1000),
        chain_id=1,
        verifying_contract=TX_ORIGIN,
    )


@pytest.fixture
def fake_signature() -> Signature:
    return Signature(signature_type=3, v=27, r="0x00", s="0x00")


@pytest.fixture
def fake_v4_signed_order(fake_v4_order: V4RfqOrder, fake_signature: Signature) -> V4SignedRfqOrder:
    return V4SignedRfqOrder(**fake_v4_order.model_dump(), signature=fake_signature)


@pytest.fixture
def fake_otc_order() -> OtcOrder:
    return OtcOrder(
        maker_token=TX_ORIGIN,
        taker_token=TX_ORIGIN,
        maker_amount=Decimal(1),
        taker_amount=Decimal(1),
        maker=TX_ORIGIN,
        taker=TX_ORIGIN,
        tx_origin=TX_ORIGIN,
        expiry_and_nonce=Decimal("62771017353866807638357894232076664161023554444640345128970"),
        chain_id=1,
        verifying_contract=TX_ORIGIN,
    )


@pytest.fixture
def submit_body() -> dict:
    """Valid JSON body for POST /submit."""
    return {
        "order": {
            "makerToken": TX_ORIGIN,
            "takerToken": TX_ORIGIN,
            "makerAmount": "1",
            "takerAmount": "1",
            "maker": TX_ORIGIN,
            "taker": TX_ORIGIN,
            "txOrigin": TX_ORIGIN,
            "pool": "0x00",
            "expiry": "1000",
            "salt": "1000",
            "chainId": 1,
            "verifyingContract": TX_ORIGIN,
        },
        "orderHash": "0xf000",
        "fee": {"amount": "0", "token": FEE_TOKEN, "type": "fixed"},
        "takerTokenFillAmount": "1225000000000000000",
    }


@pytest.fixture
def sign_body() -> dict:
    """Valid JSON body for POST /rfqm/v2/sign."""
    return {
        "order": {
            "makerToken": TX_ORIGIN,
            "takerToken": TX_ORIGIN,
            "makerAmount": "1",
            "takerAmount": "1",
            "maker": TX_ORIGIN,
            "taker": TX_ORIGIN,
            "txOrigin": TX_ORIGIN,
            "expiryAndNonce": "62771017353866807638357894232076664161023554444640345128970",
            "chainId": 1,
            "verifyingContract": TX_ORIGIN,
        },
        "orderHash": "0xf000",
        "fee": {"amount": "100", "token": FEE_TOKEN, "type": "bps"},
        "takerSignature": {"signatureType": 3, "v": 27, "r": "0x00", "s": "0x00"},
    }
