"""
Capability interface for the real-time calling client.

A calling client represents a live or potential audio session with the remote
agent. It emits the events named in ``voice_session.config.constants``:

- ``call_started`` / ``call_ready`` / ``call_ended``
- ``agent_start_talking`` / ``agent_stop_talking``
- ``update`` with a payload carrying an optional ``transcript``
- ``error`` with a payload carrying an optional ``message``

Events are delivered synchronously, in emission order, to handlers registered
with ``on``. An ``error`` event nobody listens to is logged, not raised.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from pyee import EventEmitter

from voice_session.config.constants import EVENT_ERROR, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class CallingClient(EventEmitter, ABC):
    """Event-emitting client able to start and stop one call at a time."""

    @abstractmethod
    async def start_call(self, access_token: str) -> None:
        """
        Begin a call authenticated by a single-use access token.

        Args:
            access_token: Token returned by the token issuance endpoint

        Raises:
            Exception: Any failure while negotiating the call
        """

    @abstractmethod
    async def stop_call(self) -> None:
        """End any active call. Must be safe to call when no call is active."""

    def off(self, event: str, handler: Callable[..., Any]) -> None:
        """Detach a handler previously registered with ``on``."""
        self.remove_listener(event, handler)

    def _emit_handle_potential_error(self, event: str, error: Any) -> None:
        # Handlers are detached after a call ends; a late error must not raise
        if event == EVENT_ERROR:
            logger.warning(f"Unhandled {EVENT_ERROR} event from calling client: {error}")
