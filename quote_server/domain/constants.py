"""Wire-level constants shared by the parser, the access gate and the routes."""

API_KEY_HEADER = "0x-api-key"

CAN_MAKER_CONTROL_SETTLEMENT_PARAM = "canMakerControlSettlement"

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

DEFAULT_API_KEY_EXEMPT_PATHS = ("/submit",)
