"""Tests for main app module.

These tests cover the FastAPI application composition.
"""

from __future__ import annotations

import os
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient
from quote_server.domain.exceptions import ConfigurationException
from quote_server.domain.models import ServiceConfiguration
from quote_server.main import create_app, lifespan


class TestMainApp:
    """Tests for main app module."""

    def test_create_app_binds_quoter_and_config(
        self, mock_quoter: Mock, service_config: ServiceConfiguration
    ) -> None:
        app = create_app(mock_quoter, service_config)

        assert app.state.config is service_config
        assert app.state.quote_service._quoter is mock_quoter
        assert app.docs_url is None
        assert app.openapi_url is None

    def test_create_app_loads_configuration_from_environment(self, mock_quoter: Mock) -> None:
        with patch.dict(os.environ, {"API_KEY_ALLOWLIST": "0xgood"}, clear=True):
            app = create_app(mock_quoter)

        assert app.state.config.api_key_allowlist == ("0xgood",)

    def test_create_app_rejects_invalid_environment(self, mock_quoter: Mock) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=True):
            with pytest.raises(ConfigurationException):
                create_app(mock_quoter)

    def test_apps_do_not_share_quoters(self, service_config: ServiceConfiguration) -> None:
        first, second = Mock(), Mock()

        first_app = create_app(first, service_config)
        second_app = create_app(second, service_config)

        assert first_app.state.quote_service._quoter is first
        assert second_app.state.quote_service._quoter is second

    @pytest.mark.asyncio
    async def test_lifespan_logs_configuration(
        self, service_config: ServiceConfiguration, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = Mock()
        app.state.config = service_config

        with caplog.at_level("INFO", logger="quote_server.main"):
            async with lifespan(app):
                pass

        assert "Starting quote server" in caplog.text
        assert "API Port: 8000" in caplog.text
        assert "Log Level: INFO" in caplog.text
        assert "API key exempt paths: /submit" in caplog.text
        assert "Shutting down quote server" in caplog.text

    def test_client_context_runs_lifespan(
        self, mock_quoter: Mock, service_config: ServiceConfiguration
    ) -> None:
        with TestClient(create_app(mock_quoter, service_config)) as client:
            response = client.get("/", headers={"0x-api-key": "0xfoo"})

        assert response.status_code == 404
