"""Domain layer - Typed requests, quote payloads and payload schemas."""

from .exceptions import (
    ConfigurationException,
    DomainException,
    MalformedRequestBodyException,
    ProtocolVersionMismatchException,
    SchemaNotRegisteredException,
)
from .models import (
    Fee,
    FirmQuoteResponse,
    InboundRequest,
    IndicativeQuoteResponse,
    InvalidRequest,
    OtcOrder,
    OtcQuoteResponse,
    ServiceConfiguration,
    Signature,
    SignRequest,
    SignResponse,
    SubmitReceipt,
    SubmitRequest,
    TakerRequest,
    V3RfqFirmQuote,
    V3RfqIndicativeQuote,
    V3SignedOrder,
    V3TakerRequest,
    V4RfqFirmQuote,
    V4RfqIndicativeQuote,
    V4RfqOrder,
    V4SignedRfqOrder,
    V4TakerRequest,
    ValidRequest,
    VersionedQuote,
)

__all__ = [
    "ConfigurationException",
    "DomainException",
    "Fee",
    "FirmQuoteResponse",
    "InboundRequest",
    "IndicativeQuoteResponse",
    "InvalidRequest",
    "MalformedRequestBodyException",
    "OtcOrder",
    "OtcQuoteResponse",
    "ProtocolVersionMismatchException",
    "SchemaNotRegisteredException",
    "ServiceConfiguration",
    "SignRequest",
    "SignResponse",
    "Signature",
    "SubmitReceipt",
    "SubmitRequest",
    "TakerRequest",
    "V3RfqFirmQuote",
    "V3RfqIndicativeQuote",
    "V3SignedOrder",
    "V3TakerRequest",
    "V4RfqFirmQuote",
    "V4RfqIndicativeQuote",
    "V4RfqOrder",
    "V4SignedRfqOrder",
    "V4TakerRequest",
    "ValidRequest",
    "VersionedQuote",
]
