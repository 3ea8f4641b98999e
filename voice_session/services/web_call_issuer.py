"""
Server-side creation of Retell web calls.

``WebCallIssuer`` receives its credentials through ``RetellSettings`` and asks
the Retell API for a web call, returning the access token and call id the
browser-side controller needs to start the call.
"""

import asyncio
import logging
from typing import Any, Dict

import requests
from pydantic import ValidationError

from voice_session.config.constants import (
    CREATE_WEB_CALL_FAILED_MESSAGE,
    LOGGER_NAME,
    MISSING_CREDENTIALS_MESSAGE,
    RETELL_CREATE_WEB_CALL_PATH,
)
from voice_session.config.settings import RetellSettings
from voice_session.exceptions import ConfigurationError, ProviderError
from voice_session.models.call_schemas import WebCallCredentials

logger = logging.getLogger(LOGGER_NAME)


class WebCallIssuer:
    """Creates web calls for the configured Retell agent."""

    def __init__(self, settings: RetellSettings):
        self.settings = settings

    @property
    def endpoint(self) -> str:
        return self.settings.base_url.rstrip("/") + RETELL_CREATE_WEB_CALL_PATH

    async def create_web_call(self) -> WebCallCredentials:
        """
        Create a web call with the Retell API.

        Returns:
            WebCallCredentials: Access token and call id of the new web call

        Raises:
            ConfigurationError: API key or agent id is not configured
            ProviderError: Retell was unreachable or rejected the request
        """
        if not self.settings.is_configured:
            raise ConfigurationError(MISSING_CREDENTIALS_MESSAGE)

        logger.info(f"Creating web call for agent: {self.settings.agent_id}")
        try:
            response = await asyncio.to_thread(
                requests.post,
                self.endpoint,
                headers={
                    "Authorization": f"Bearer {self.settings.api_key}",
                    "Content-Type": "application/json",
                },
                json={"agent_id": self.settings.agent_id},
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Retell createWebCall error: {e}")
            raise ProviderError(str(e) or CREATE_WEB_CALL_FAILED_MESSAGE) from e

        if not response.ok:
            message = self._error_message(response)
            logger.error(
                f"Retell createWebCall error: {response.status_code} {message}"
            )
            raise ProviderError(message, status_code=response.status_code)

        try:
            credentials = WebCallCredentials(**response.json())
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Unexpected createWebCall response: {e}")
            raise ProviderError(CREATE_WEB_CALL_FAILED_MESSAGE) from e

        logger.info(f"Created web call: {credentials.call_id}")
        return credentials

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body: Any = response.json()
        except ValueError:
            return response.text.strip() or CREATE_WEB_CALL_FAILED_MESSAGE
        if isinstance(body, dict):
            detail: Dict[str, Any] = body
            for key in ("message", "error", "error_message"):
                if detail.get(key):
                    return str(detail[key])
        return CREATE_WEB_CALL_FAILED_MESSAGE
