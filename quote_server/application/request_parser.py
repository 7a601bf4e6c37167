"""Request parsing for taker, submit and sign requests.

Turns raw query parameters and JSON bodies into typed, protocol-version
tagged requests. Structural problems are reported all at once by the schema
validator; business rules are then checked one at a time in a fixed order:
protocol version, amount exclusivity, last look fee, OTC nonce.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from ..domain.constants import API_KEY_HEADER
from ..domain.models import (
    Fee,
    InboundRequest,
    InvalidRequest,
    OtcOrder,
    Signature,
    SignRequest,
    SubmitRequest,
    V3TakerRequest,
    V4RfqOrder,
    V4TakerRequest,
    ValidRequest,
)
from ..domain.schemas import (
    SignRequestSchema,
    SubmitRequestSchema,
    TakerRequestSchema,
    V4TakerRequestSchema,
)
from .schema_validator import SchemaValidationResult, create_schema_validator

if TYPE_CHECKING:
    from ..domain.models import TakerRequest
    from ..domain.schemas import FeeSchema, OtcOrderSchema, SignatureSchema, V4RfqOrderSchema

TX_ORIGIN_REQUIRED_ERROR = 'V4 queries require a valid "txOrigin"'
AMOUNT_EXCLUSIVITY_ERROR = (
    'A request must specify either a "buyAmountBaseUnits" or a "sellAmountBaseUnits" '
    "(but not both)."
)
LAST_LOOK_FEE_ERROR = "When isLastLook is true, a fee must be present"
OTC_NONCE_ERROR = (
    "nonce and nonceBucket fields must be present when requesting a quote for an OtcOrder"
)

ALLOWED_FEE_TYPES = ("bps", "fixed")
OTC_QUOTE_PATH = re.compile(r"otc/quote")

schema_validator = create_schema_validator()


def _api_key(headers: dict[str, Any]) -> str | None:
    # Repeated headers arrive as lists and are treated as absent.
    api_key = headers.get(API_KEY_HEADER)
    return api_key if isinstance(api_key, str) else None


def _schema_errors(result: SchemaValidationResult) -> InvalidRequest:
    return InvalidRequest(errors=[str(error) for error in result.errors])


def _optional_decimal(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None


def _nest_fee_params(query: dict[str, Any]) -> dict[str, Any]:
    """Fold the flat ``feeAmount``/``feeToken``/``feeType`` query keys into ``fee``."""
    nested = dict(query)
    fee_amount = nested.pop("feeAmount", None)
    fee_token = nested.pop("feeToken", None)
    fee_type = nested.pop("feeType", None)
    if fee_amount and fee_token and fee_type:
        nested["fee"] = {"amount": fee_amount, "token": fee_token, "type": fee_type}
    return nested


def _is_zero_address(address: str) -> bool:
    return int(address, 16) == 0


def parse_taker_request(raw: InboundRequest) -> ValidRequest[TakerRequest] | InvalidRequest:
    """Parse a price or quote request from its query parameters.

    Args:
        raw: Inbound request; ``query``, ``headers`` and ``path`` are read

    Returns:
        ValidRequest with a V3 or V4 taker request, or InvalidRequest with
        every schema error or the first failed business rule
    """
    query = _nest_fee_params(raw.query)
    schema = V4TakerRequestSchema if query.get("protocolVersion") == "4" else TakerRequestSchema
    result = schema_validator.validate(query, schema)
    if not result.is_valid:
        return _schema_errors(result)
    params = result.value

    if params.protocol_version is None or params.protocol_version == "3":
        protocol_version = "3"
    elif params.protocol_version == "4":
        protocol_version = "4"
        if params.tx_origin is None or _is_zero_address(params.tx_origin):
            return InvalidRequest(errors=[TX_ORIGIN_REQUIRED_ERROR])
    else:
        return InvalidRequest(errors=[f"Invalid protocol version: {params.protocol_version}."])

    if (params.buy_amount_base_units is None) == (params.sell_amount_base_units is None):
        return InvalidRequest(errors=[AMOUNT_EXCLUSIVITY_ERROR])

    # Query values are strings, so only the literal "true" enables last look.
    is_last_look = protocol_version == "4" and params.is_last_look == "true"
    fee = None
    if is_last_look:
        if params.fee is None or params.fee.type not in ALLOWED_FEE_TYPES:
            return InvalidRequest(errors=[LAST_LOOK_FEE_ERROR])
        fee = Fee(amount=Decimal(params.fee.amount), token=params.fee.token, type=params.fee.type)

    nonce = params.nonce
    nonce_bucket = params.nonce_bucket
    if OTC_QUOTE_PATH.search(raw.path) and (not nonce or not nonce_bucket):
        return InvalidRequest(errors=[OTC_NONCE_ERROR])

    can_maker_control_settlement = (
        None
        if params.can_maker_control_settlement is None
        else params.can_maker_control_settlement == "true"
    )
    base_fields: dict[str, Any] = {
        "sell_token_address": params.sell_token_address,
        "buy_token_address": params.buy_token_address,
        "taker_address": params.taker_address,
        "api_key": _api_key(raw.headers),
        "can_maker_control_settlement": can_maker_control_settlement,
        "sell_amount_base_units": _optional_decimal(params.sell_amount_base_units),
        "buy_amount_base_units": _optional_decimal(params.buy_amount_base_units),
        "comparison_price": _optional_decimal(params.comparison_price),
    }

    taker_request: TakerRequest
    if protocol_version == "3":
        taker_request = V3TakerRequest(**base_fields)
    else:
        taker_request = V4TakerRequest(
            **base_fields,
            tx_origin=params.tx_origin,
            is_last_look=is_last_look,
            fee=fee,
            nonce=nonce,
            nonce_bucket=nonce_bucket,
        )
    return ValidRequest(request=taker_request)


def _to_fee(fee: FeeSchema) -> Fee:
    return Fee(amount=Decimal(fee.amount), token=fee.token, type=fee.type)


def _to_signature(signature: SignatureSchema) -> Signature:
    return Signature(
        signature_type=signature.signature_type, v=signature.v, r=signature.r, s=signature.s
    )


def _to_v4_order(order: V4RfqOrderSchema) -> V4RfqOrder:
    return V4RfqOrder(
        maker_token=order.maker_token,
        taker_token=order.taker_token,
        maker_amount=Decimal(order.maker_amount),
        taker_amount=Decimal(order.taker_amount),
        maker=order.maker,
        taker=order.taker,
        tx_origin=order.tx_origin,
        pool=order.pool,
        expiry=Decimal(order.expiry),
        salt=Decimal(order.salt),
        chain_id=order.chain_id,
        verifying_contract=order.verifying_contract,
    )


def _to_otc_order(order: OtcOrderSchema) -> OtcOrder:
    return OtcOrder(
        maker_token=order.maker_token,
        taker_token=order.taker_token,
        maker_amount=Decimal(order.maker_amount),
        taker_amount=Decimal(order.taker_amount),
        maker=order.maker,
        taker=order.taker,
        tx_origin=order.tx_origin,
        expiry_and_nonce=Decimal(order.expiry_and_nonce),
        chain_id=order.chain_id,
        verifying_contract=order.verifying_contract,
    )


def parse_submit_request(raw: InboundRequest) -> ValidRequest[SubmitRequest] | InvalidRequest:
    """Parse a last look fill submission from its JSON body."""
    result = schema_validator.validate(raw.body, SubmitRequestSchema)
    if not result.is_valid:
        return _schema_errors(result)
    body = result.value

    submit_request = SubmitRequest(
        order=_to_v4_order(body.order),
        order_hash=body.order_hash,
        fee=_to_fee(body.fee),
        taker_token_fill_amount=Decimal(body.taker_token_fill_amount),
        api_key=_api_key(raw.headers),
    )
    return ValidRequest(request=submit_request)


def parse_sign_request(raw: InboundRequest) -> ValidRequest[SignRequest] | InvalidRequest:
    """Parse an OTC order signing request from its JSON body."""
    result = schema_validator.validate(raw.body, SignRequestSchema)
    if not result.is_valid:
        return _schema_errors(result)
    body = result.value

    sign_request = SignRequest(
        order=_to_otc_order(body.order),
        order_hash=body.order_hash,
        fee=_to_fee(body.fee),
        taker_signature=_to_signature(body.taker_signature),
        api_key=_api_key(raw.headers),
    )
    return ValidRequest(request=sign_request)
