import asyncio
import logging
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from voice_session.calling.client import CallingClient
from voice_session.models.call_schemas import WebCallCredentials


class FakeCallingClient(CallingClient):
    """Calling client double; tests emit events on it by hand."""

    def __init__(self):
        super().__init__()
        self.access_tokens: List[str] = []
        self.stop_call_count = 0
        self.start_error: Optional[BaseException] = None
        self.start_gate: Optional[asyncio.Event] = None
        self.stop_error: Optional[BaseException] = None

    async def start_call(self, access_token: str) -> None:
        self.access_tokens.append(access_token)
        if self.start_gate is not None:
            await self.start_gate.wait()
        if self.start_error is not None:
            raise self.start_error

    async def stop_call(self) -> None:
        self.stop_call_count += 1
        if self.stop_error is not None:
            raise self.stop_error


async def settle():
    """Let pending tasks run until they block."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture
def credentials():
    return WebCallCredentials(access_token="test-access-token", call_id="test-call-id")


@pytest.fixture
def token_provider(credentials):
    provider = MagicMock()
    provider.create_web_call = AsyncMock(return_value=credentials)
    return provider


@pytest.fixture
def fake_client():
    return FakeCallingClient()


@pytest.fixture
def client_factory(fake_client):
    return MagicMock(return_value=fake_client)
