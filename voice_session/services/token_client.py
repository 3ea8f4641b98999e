"""
Client for the token issuance endpoint.

The endpoint is called with ``POST`` and no body. A 2xx answer carries
``{"access_token", "call_id"}``; anything else carries ``{"error"}``.
Credentials are returned fresh for every request and never cached.
"""

import asyncio
import logging
from typing import Any, Dict, Protocol

import requests
from pydantic import ValidationError

from voice_session.config.constants import (
    CREATE_CALL_FAILED_MESSAGE,
    LOGGER_NAME,
    REQUEST_TIMEOUT,
)
from voice_session.exceptions import TokenIssuanceError
from voice_session.models.call_schemas import WebCallCredentials

logger = logging.getLogger(LOGGER_NAME)


class TokenProvider(Protocol):
    """Anything able to obtain credentials for one call start."""

    async def create_web_call(self) -> WebCallCredentials:
        ...


class HttpTokenProvider:
    """
    Token provider backed by the HTTP token issuance endpoint.

    ``requests`` is blocking, so each request runs in a worker thread.
    """

    def __init__(self, url: str, timeout: float = REQUEST_TIMEOUT):
        """
        Initialize the token client.

        Args:
            url: Full URL of the token issuance endpoint
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    async def create_web_call(self) -> WebCallCredentials:
        """
        Request credentials for a new web call.

        Returns:
            WebCallCredentials: Token and call identifier for one call start

        Raises:
            TokenIssuanceError: The endpoint was unreachable or rejected the request
        """
        logger.info(f"Requesting web call token from {self.url}")
        try:
            response = await asyncio.to_thread(
                requests.post, self.url, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Token request failed: {e}")
            raise TokenIssuanceError(str(e) or CREATE_CALL_FAILED_MESSAGE) from e

        data = self._json_body(response)

        if not response.ok:
            message = data.get("error") or CREATE_CALL_FAILED_MESSAGE
            logger.warning(
                f"Token endpoint returned {response.status_code}: {message}"
            )
            raise TokenIssuanceError(str(message), status_code=response.status_code)

        try:
            credentials = WebCallCredentials(**data)
        except ValidationError as e:
            logger.error(f"Invalid token response: {e}")
            raise TokenIssuanceError(
                "Invalid response from token endpoint",
                status_code=response.status_code,
            ) from e

        logger.info(f"Received web call token for call: {credentials.call_id}")
        return credentials

    @staticmethod
    def _json_body(response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            logger.debug(f"Token endpoint returned a non-JSON body: {response.text[:200]}")
            return {}
        return data if isinstance(data, dict) else {}
