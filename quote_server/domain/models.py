"""Domain models for the quote server.

This module contains the typed requests handed to the quoter, the quote and
receipt payloads it answers with, and the service configuration. Models are
immutable Pydantic v2 models using snake_case attributes with camelCase wire
aliases. Domain models are free from any infrastructure dependencies.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_API_KEY_EXEMPT_PATHS

SupportedVersion = Literal["3", "4"]
FeeType = Literal["bps", "fixed"]

VersionT = TypeVar("VersionT", bound=str)
QuoteT = TypeVar("QuoteT")
RequestT = TypeVar("RequestT")


class WireModel(BaseModel):
    """Base for models that travel over the wire with camelCase keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Fee(WireModel):
    """Value object describing the fee a taker commits to."""

    amount: Decimal = Field(..., description="Fee amount in base units or basis points")
    token: str = Field(..., description="Token the fee is paid in")
    type: FeeType = Field(..., description="Fee kind: bps or fixed")


class Signature(WireModel):
    """ECDSA signature as used by V4 orders."""

    signature_type: int
    v: int
    r: str
    s: str


# Taker requests


class BaseTakerRequest(WireModel):
    """Fields shared by every protocol version of a taker request."""

    model_config = ConfigDict(
        frozen=True, strict=True, populate_by_name=True, alias_generator=to_camel
    )

    sell_token_address: str
    buy_token_address: str
    taker_address: str
    api_key: str | None = None
    can_maker_control_settlement: bool | None = None
    sell_amount_base_units: Decimal | None = None
    buy_amount_base_units: Decimal | None = None
    comparison_price: Decimal | None = None


class V3TakerRequest(BaseTakerRequest):
    """Taker request for protocol version 3."""

    protocol_version: Literal["3"] = "3"


class V4TakerRequest(BaseTakerRequest):
    """Taker request for protocol version 4.

    ``nonce`` and ``nonce_bucket`` are only populated for OTC quote requests.
    """

    protocol_version: Literal["4"] = "4"
    tx_origin: str
    is_last_look: bool = False
    fee: Fee | None = None
    nonce: str | None = None
    nonce_bucket: str | None = None


TakerRequest = Annotated[V3TakerRequest | V4TakerRequest, Field(discriminator="protocol_version")]


# V3 quote payloads


class V3SignedOrder(WireModel):
    chain_id: int
    exchange_address: str
    maker_address: str
    taker_address: str
    fee_recipient_address: str
    sender_address: str
    maker_asset_amount: Decimal
    taker_asset_amount: Decimal
    maker_fee: Decimal
    taker_fee: Decimal
    expiration_time_seconds: Decimal
    salt: Decimal
    maker_asset_data: str
    taker_asset_data: str
    maker_fee_asset_data: str
    taker_fee_asset_data: str
    signature: str


class V3RfqIndicativeQuote(WireModel):
    maker_asset_data: str
    maker_asset_amount: Decimal
    taker_asset_data: str
    taker_asset_amount: Decimal
    expiration_time_seconds: Decimal


class V3RfqFirmQuote(WireModel):
    signed_order: V3SignedOrder


# V4 quote payloads


class V4RfqOrder(WireModel):
    """Fields of a V4 RFQ order, excluding its signature."""

    maker_token: str
    taker_token: str
    maker_amount: Decimal
    taker_amount: Decimal
    maker: str
    taker: str
    tx_origin: str
    pool: str
    expiry: Decimal
    salt: Decimal
    chain_id: int
    verifying_contract: str


class V4SignedRfqOrder(V4RfqOrder):
    signature: Signature


class V4RfqIndicativeQuote(WireModel):
    maker_token: str
    maker_amount: Decimal
    taker_token: str
    taker_amount: Decimal
    expiry: Decimal


class V4RfqFirmQuote(WireModel):
    signed_order: V4SignedRfqOrder


class OtcOrder(WireModel):
    """Fields of an OTC order; replay protection is packed into ``expiry_and_nonce``."""

    maker_token: str
    taker_token: str
    maker_amount: Decimal
    taker_amount: Decimal
    maker: str
    taker: str
    tx_origin: str
    expiry_and_nonce: Decimal
    chain_id: int
    verifying_contract: str


class VersionedQuote(WireModel, Generic[VersionT, QuoteT]):
    """Envelope pairing a protocol version tag with an optional quote payload.

    The tag must match the version of the request that produced it, e.g.
    ``VersionedQuote[Literal["4"], V4RfqIndicativeQuote]``.
    """

    protocol_version: VersionT
    response: QuoteT | None = None


IndicativeQuoteResponse = (
    VersionedQuote[Literal["3"], V3RfqIndicativeQuote]
    | VersionedQuote[Literal["4"], V4RfqIndicativeQuote]
)
FirmQuoteResponse = (
    VersionedQuote[Literal["3"], V3RfqFirmQuote] | VersionedQuote[Literal["4"], V4RfqFirmQuote]
)


class OtcQuoteResponse(WireModel):
    """Firm OTC quote; an absent order means the maker declined to quote."""

    order: OtcOrder | None = None
    maker_signature: Signature | None = None


# Submission and signing


class SubmitRequest(WireModel):
    model_config = ConfigDict(
        frozen=True, strict=True, populate_by_name=True, alias_generator=to_camel
    )

    order: V4RfqOrder
    order_hash: str
    fee: Fee
    taker_token_fill_amount: Decimal
    api_key: str | None = None


class SubmitReceipt(WireModel):
    fee: Fee
    proceed_with_fill: bool
    signed_order_hash: str
    taker_token_fill_amount: Decimal | None = None


class SignRequest(WireModel):
    model_config = ConfigDict(
        frozen=True, strict=True, populate_by_name=True, alias_generator=to_camel
    )

    order: OtcOrder
    order_hash: str
    fee: Fee
    taker_signature: Signature
    api_key: str | None = None


class SignResponse(WireModel):
    proceed_with_fill: bool
    fee: Fee | None = None
    maker_signature: Signature | None = None


# Inbound HTTP and parse results


class InboundRequest(BaseModel):
    """Framework-free view of an HTTP request handed to the request parser.

    Repeated query parameters and headers are carried as lists so the parser
    can reject them.
    """

    model_config = ConfigDict(frozen=True)

    path: str = "/"
    query: dict[str, Any] = Field(default_factory=dict)
    headers: dict[str, Any] = Field(default_factory=dict)
    body: Any = None


class ValidRequest(BaseModel, Generic[RequestT]):
    """Successful parse carrying the typed request."""

    model_config = ConfigDict(frozen=True)

    is_valid: Literal[True] = True
    request: RequestT


class InvalidRequest(BaseModel):
    """Failed parse carrying every user-facing error message."""

    model_config = ConfigDict(frozen=True)

    is_valid: Literal[False] = False
    errors: list[str] = Field(..., min_length=1)


# Configuration


class ValidationLevel(str, Enum):
    """Value object representing validation issue severity levels."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class ValidationIssue(BaseModel):
    """Value object representing a configuration validation issue."""

    level: ValidationLevel = Field(..., description="Issue severity")
    category: str = Field(..., description="Issue category: CONFIG, ACCESS, etc.")
    message: str = Field(..., description="Human-readable issue description")
    resolution: str | None = Field(None, description="Suggested resolution steps")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional context")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        """Ensure category is uppercase."""
        return v.upper()

    model_config = ConfigDict(frozen=True, strict=True)


class ValidationResult(BaseModel):
    """Aggregate root representing the complete validation result."""

    is_valid: bool = Field(default=True, description="Overall validation status")
    context: str = Field(default="", description="Validation context")
    issues: list[ValidationIssue] = Field(default_factory=list, description="All validation issues")

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add a validation issue to the result."""
        self.issues.append(issue)
        if issue.level == ValidationLevel.ERROR:
            self.is_valid = False

    def get_issues_by_level(self, level: ValidationLevel) -> list[ValidationIssue]:
        """Get all issues of a specific level."""
        return [issue for issue in self.issues if issue.level == level]

    def has_warnings(self) -> bool:
        """Check if validation has any warnings."""
        return any(issue.level == ValidationLevel.WARNING for issue in self.issues)

    model_config = ConfigDict(strict=True)


class ServiceConfiguration(BaseModel):
    """Domain model for service configuration."""

    model_config = ConfigDict(strict=True, frozen=True)

    api_port: int = Field(..., ge=1, le=65535, description="API port number")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        ..., description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        ..., description="Deployment environment"
    )
    api_key_allowlist: tuple[str, ...] = Field(
        default=(),
        description="Accepted API keys; empty means any single string key is accepted",
    )
    api_key_exempt_paths: tuple[str, ...] = Field(
        default=DEFAULT_API_KEY_EXEMPT_PATHS,
        description="Paths that bypass the API key check",
    )

    @field_validator("api_key_allowlist")
    @classmethod
    def validate_allowlist(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject blank keys, which would otherwise match nothing."""
        if any(not key for key in v):
            raise ValueError("API key allow-list cannot contain empty keys")
        return v
