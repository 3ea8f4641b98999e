from unittest.mock import patch

from voice_session.config.constants import CONNECT_TIMEOUT, DEFAULT_RETELL_BASE_URL
from voice_session.config.settings import RetellSettings, SessionSettings


def test_retell_settings_from_env():
    env = {"RETELL_API_KEY": "key", "RETELL_AGENT_ID": "agent", "RETELL_REQUEST_TIMEOUT": "7"}
    with patch.dict("os.environ", env, clear=True):
        settings = RetellSettings.load_from_env()

    assert settings.api_key == "key"
    assert settings.agent_id == "agent"
    assert settings.base_url == DEFAULT_RETELL_BASE_URL
    assert settings.request_timeout == 7.0
    assert settings.is_configured is True


def test_retell_settings_missing_credentials():
    with patch.dict("os.environ", {"RETELL_API_KEY": ""}, clear=True):
        settings = RetellSettings.load_from_env()

    assert settings.api_key is None
    assert settings.agent_id is None
    assert settings.is_configured is False


def test_session_settings_defaults():
    with patch.dict("os.environ", {}, clear=True):
        settings = SessionSettings.load_from_env()

    assert settings.token_url.endswith("/api/create-web-call")
    assert settings.connect_timeout == CONNECT_TIMEOUT


def test_session_settings_timeout_disabled():
    for value in ("0", ""):
        with patch.dict("os.environ", {"CALL_CONNECT_TIMEOUT": value}, clear=True):
            assert SessionSettings.load_from_env().connect_timeout is None
