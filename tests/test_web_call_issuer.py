"""
Unit tests for the Retell web call issuer.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from voice_session.config.constants import (
    CREATE_WEB_CALL_FAILED_MESSAGE,
    MISSING_CREDENTIALS_MESSAGE,
)
from voice_session.config.settings import RetellSettings
from voice_session.exceptions import ConfigurationError, ProviderError
from voice_session.services.web_call_issuer import WebCallIssuer


def mock_response(status_code, body=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def settings():
    return RetellSettings(
        api_key="test-api-key",
        agent_id="test-agent-id",
        base_url="https://retell.example.test/",
        request_timeout=4,
    )


@pytest.fixture
def issuer(settings):
    return WebCallIssuer(settings)


def test_endpoint(issuer):
    assert issuer.endpoint == "https://retell.example.test/v2/create-web-call"


@pytest.mark.asyncio
async def test_create_web_call(issuer):
    body = {
        "call_type": "web_call",
        "access_token": "token",
        "call_id": "call-1",
        "agent_id": "test-agent-id",
        "call_status": "registered",
    }

    with patch("requests.post", return_value=mock_response(201, body)) as mock_post:
        credentials = await issuer.create_web_call()

    assert credentials.access_token == "token"
    assert credentials.call_id == "call-1"
    mock_post.assert_called_once_with(
        "https://retell.example.test/v2/create-web-call",
        headers={
            "Authorization": "Bearer test-api-key",
            "Content-Type": "application/json",
        },
        json={"agent_id": "test-agent-id"},
        timeout=4,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "settings",
    [RetellSettings(api_key="key"), RetellSettings(agent_id="agent"), RetellSettings()],
)
async def test_missing_credentials(settings):
    issuer = WebCallIssuer(settings)

    with patch("requests.post") as mock_post:
        with pytest.raises(ConfigurationError) as exc_info:
            await issuer.create_web_call()

    assert str(exc_info.value) == MISSING_CREDENTIALS_MESSAGE
    mock_post.assert_not_called()


@pytest.mark.asyncio
async def test_provider_rejection(issuer):
    response = mock_response(401, {"error_message": "Invalid API key"})

    with patch("requests.post", return_value=response):
        with pytest.raises(ProviderError) as exc_info:
            await issuer.create_web_call()

    assert str(exc_info.value) == "Invalid API key"
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_provider_rejection_plain_text(issuer):
    response = mock_response(503, text="Service Unavailable")

    with patch("requests.post", return_value=response):
        with pytest.raises(ProviderError) as exc_info:
            await issuer.create_web_call()

    assert str(exc_info.value) == "Service Unavailable"
    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_provider_unreachable(issuer):
    with patch("requests.post", side_effect=requests.Timeout("Read timed out")):
        with pytest.raises(ProviderError) as exc_info:
            await issuer.create_web_call()

    assert "Read timed out" in str(exc_info.value)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_unexpected_success_body(issuer):
    with patch("requests.post", return_value=mock_response(201, {"call_id": "call-1"})):
        with pytest.raises(ProviderError) as exc_info:
            await issuer.create_web_call()

    assert str(exc_info.value) == CREATE_WEB_CALL_FAILED_MESSAGE
