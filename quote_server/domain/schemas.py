"""Payload schemas for inbound requests and outbound responses.

Each schema is a declarative Pydantic model describing the raw wire payload:
required keys, string patterns and enumerations. Schemas are data; the
cross-field business rules (amount exclusivity, last look, OTC nonces) live in
the request parser. Schemas that nest another schema reference it as a
sub-schema, which must be registered with the validator first.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

ADDRESS_PATTERN = r"^0x[0-9a-fA-F]{40}$"
HEX_PATTERN = r"^0x[0-9a-fA-F]*$"
WHOLE_NUMBER_PATTERN = r"^\d+$"
NUMBER_PATTERN = r"^\d+(\.\d+)?$"


def _number_to_string(value: Any) -> Any:
    """JSON bodies may carry integers where decimal strings are expected."""
    if isinstance(value, int | Decimal) and not isinstance(value, bool):
        return str(value)
    return value


Address = Annotated[str, StringConstraints(pattern=ADDRESS_PATTERN)]
HexString = Annotated[str, StringConstraints(pattern=HEX_PATTERN)]
WholeNumberString = Annotated[str, StringConstraints(pattern=WHOLE_NUMBER_PATTERN)]
NumberString = Annotated[str, StringConstraints(pattern=NUMBER_PATTERN)]
BaseUnits = Annotated[
    str, StringConstraints(pattern=WHOLE_NUMBER_PATTERN), BeforeValidator(_number_to_string)
]
DecimalAmount = Annotated[
    str, StringConstraints(pattern=NUMBER_PATTERN), BeforeValidator(_number_to_string)
]


class PayloadSchema(BaseModel):
    """Base for all payload schemas; unknown keys are ignored."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore", alias_generator=to_camel)

    schema_id: ClassVar[str]


# Shared sub-schemas


class FeeSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/feeSchema"

    amount: DecimalAmount
    token: Address
    type: Literal["bps", "fixed"]


class TakerFeeSchema(PayloadSchema):
    """Fee as un-flattened from query parameters.

    The fee type is left open here; the last-look rule enforces the allowed
    kinds so the taker receives a single targeted message.
    """

    schema_id: ClassVar[str] = "/takerFeeSchema"

    amount: NumberString
    token: Address
    type: str


class SignatureSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/signatureSchema"

    signature_type: int
    v: int
    r: HexString
    s: HexString


class V4RfqOrderSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/v4RfqOrderSchema"

    maker_token: Address
    taker_token: Address
    maker_amount: BaseUnits
    taker_amount: BaseUnits
    maker: Address
    taker: Address
    tx_origin: Address
    pool: HexString
    expiry: BaseUnits
    salt: BaseUnits
    chain_id: int
    verifying_contract: Address


class OtcOrderSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/otcOrderSchema"

    maker_token: Address
    taker_token: Address
    maker_amount: BaseUnits
    taker_amount: BaseUnits
    maker: Address
    taker: Address
    tx_origin: Address
    expiry_and_nonce: BaseUnits
    chain_id: int
    verifying_contract: Address


# Requests


class TakerRequestSchema(PayloadSchema):
    """Query parameters of a price or quote request (protocol version 3 and unknown)."""

    schema_id: ClassVar[str] = "/takerRequestSchema"

    sell_token_address: Address
    buy_token_address: Address
    taker_address: Address
    sell_amount_base_units: WholeNumberString | None = None
    buy_amount_base_units: WholeNumberString | None = None
    comparison_price: NumberString | None = None
    can_maker_control_settlement: str | None = None
    protocol_version: str | None = None
    tx_origin: Address | None = None
    nonce: WholeNumberString | None = None
    nonce_bucket: WholeNumberString | None = None


class V4TakerRequestSchema(TakerRequestSchema):
    """Query parameters of a protocol version 4 price or quote request."""

    schema_id: ClassVar[str] = "/v4TakerRequestSchema"

    is_last_look: str | None = None
    fee: TakerFeeSchema | None = None


class SubmitRequestSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/submitRequestSchema"

    order: V4RfqOrderSchema
    order_hash: HexString
    fee: FeeSchema
    taker_token_fill_amount: BaseUnits


class SignRequestSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/signRequestSchema"

    order: OtcOrderSchema
    order_hash: HexString
    fee: FeeSchema
    taker_signature: SignatureSchema


# Responses


class SubmitReceiptSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/submitReceiptSchema"

    fee: FeeSchema
    proceed_with_fill: bool
    signed_order_hash: str
    taker_token_fill_amount: BaseUnits | None = None


class SignResponseSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/signResponseSchema"

    proceed_with_fill: bool
    fee: FeeSchema | None = None
    maker_signature: SignatureSchema | None = None


class OtcQuoteResponseSchema(PayloadSchema):
    schema_id: ClassVar[str] = "/otcQuoteResponseSchema"

    order: OtcOrderSchema | None = None
    maker_signature: SignatureSchema | None = None


# Sub-schemas come before the schemas that reference them.
ALL_SCHEMAS: tuple[type[PayloadSchema], ...] = (
    FeeSchema,
    TakerFeeSchema,
    SignatureSchema,
    V4RfqOrderSchema,
    OtcOrderSchema,
    TakerRequestSchema,
    V4TakerRequestSchema,
    SubmitRequestSchema,
    SignRequestSchema,
    SubmitReceiptSchema,
    SignResponseSchema,
    OtcQuoteResponseSchema,
)
