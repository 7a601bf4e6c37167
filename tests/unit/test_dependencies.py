"""Tests for the FastAPI dependency helpers."""

from unittest.mock import AsyncMock, Mock

import pytest
from quote_server.domain.exceptions import MalformedRequestBodyException
from quote_server.infrastructure.api.dependencies import (
    get_json_body,
    get_quote_service,
    to_inbound_request,
)


class TestDependencies:
    """Test cases for dependency functions."""

    def test_get_quote_service_reads_app_state(self) -> None:
        request = Mock()
        request.app.state.quote_service = sentinel = Mock()

        assert get_quote_service(request) is sentinel

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("raw", "expected"), [(b"", {}), (b"  ", {}), (b'{"a": 1}', {"a": 1})])
    async def test_get_json_body(self, raw: bytes, expected) -> None:
        request = Mock()
        request.body = AsyncMock(return_value=raw)

        assert await get_json_body(request) == expected

    @pytest.mark.asyncio
    async def test_get_json_body_rejects_malformed_json(self) -> None:
        request = Mock()
        request.body = AsyncMock(return_value=b"{not json")

        with pytest.raises(MalformedRequestBodyException):
            await get_json_body(request)

    def test_to_inbound_request_groups_repeated_values(self) -> None:
        request = Mock()
        request.url.path = "/price"
        request.query_params.multi_items.return_value = [
            ("sellTokenAddress", "0x1"),
            ("sellTokenAddress", "0x2"),
            ("takerAddress", "0x3"),
        ]
        request.headers.items.return_value = [("0x-api-key", "0xfoo")]

        inbound = to_inbound_request(request, body={"a": 1})

        assert inbound.path == "/price"
        assert inbound.query == {"sellTokenAddress": ["0x1", "0x2"], "takerAddress": "0x3"}
        assert inbound.headers == {"0x-api-key": "0xfoo"}
        assert inbound.body == {"a": 1}
