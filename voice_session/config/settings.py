"""
Typed settings for the token issuance endpoint and the session controller.

Settings are read from the environment once and passed down explicitly, so
the endpoint and the controller can be built with any values in tests.
"""

import os
from dataclasses import dataclass
from typing import Optional

from voice_session.config.constants import (
    CONNECT_TIMEOUT,
    DEFAULT_RETELL_BASE_URL,
    DEFAULT_TOKEN_ENDPOINT_URL,
    REQUEST_TIMEOUT,
)


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    seconds = float(value)
    return seconds if seconds > 0 else None


@dataclass(frozen=True)
class RetellSettings:
    """
    Credentials and connection details for the Retell API.

    Missing credentials are allowed here; the issuer reports them as a
    configuration error when a call is requested.
    """

    api_key: Optional[str] = None
    agent_id: Optional[str] = None
    base_url: str = DEFAULT_RETELL_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and bool(self.agent_id)

    @staticmethod
    def load_from_env() -> "RetellSettings":
        """Load Retell settings from RETELL_* environment variables."""
        return RetellSettings(
            api_key=os.environ.get("RETELL_API_KEY") or None,
            agent_id=os.environ.get("RETELL_AGENT_ID") or None,
            base_url=os.environ.get("RETELL_BASE_URL", DEFAULT_RETELL_BASE_URL),
            request_timeout=float(
                os.environ.get("RETELL_REQUEST_TIMEOUT", REQUEST_TIMEOUT)
            ),
        )


@dataclass(frozen=True)
class SessionSettings:
    """Settings for the client side of a session."""

    token_url: str = DEFAULT_TOKEN_ENDPOINT_URL
    request_timeout: float = REQUEST_TIMEOUT
    # None disables the connect watchdog
    connect_timeout: Optional[float] = CONNECT_TIMEOUT

    @staticmethod
    def load_from_env() -> "SessionSettings":
        """Load session settings from TOKEN_ENDPOINT_URL and CALL_CONNECT_TIMEOUT."""
        return SessionSettings(
            token_url=os.environ.get("TOKEN_ENDPOINT_URL", DEFAULT_TOKEN_ENDPOINT_URL),
            request_timeout=float(
                os.environ.get("TOKEN_REQUEST_TIMEOUT", REQUEST_TIMEOUT)
            ),
            connect_timeout=_optional_float(
                os.environ.get("CALL_CONNECT_TIMEOUT", str(CONNECT_TIMEOUT))
            ),
        )
