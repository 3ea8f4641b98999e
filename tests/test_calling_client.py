import pytest

from voice_session.calling.client import CallingClient
from tests.conftest import FakeCallingClient


def test_calling_client_is_abstract():
    with pytest.raises(TypeError):
        CallingClient()


def test_events_delivered_in_order():
    client = FakeCallingClient()
    received = []
    client.on("call_started", lambda *args: received.append("call_started"))
    client.on("update", lambda payload: received.append(payload["transcript"]))

    client.emit("call_started")
    client.emit("update", {"transcript": "one"})
    client.emit("update", {"transcript": "two"})

    assert received == ["call_started", "one", "two"]


def test_off_detaches_handler():
    client = FakeCallingClient()
    received = []

    def handler(payload):
        received.append(payload)

    client.on("update", handler)
    client.off("update", handler)
    client.emit("update", {"transcript": "ignored"})

    assert received == []
    assert client.listeners("update") == []


@pytest.mark.asyncio
async def test_fake_client_records_calls():
    client = FakeCallingClient()

    await client.start_call("token")
    await client.stop_call()
    await client.stop_call()

    assert client.access_tokens == ["token"]
    assert client.stop_call_count == 2


@pytest.mark.parametrize("payload", [{"message": "late"}, RuntimeError("socket closed"), None])
def test_unhandled_error_event_does_not_raise(payload):
    client = FakeCallingClient()

    client.emit("error", payload)

    assert client.listeners("error") == []


def test_unhandled_error_after_remove_all_listeners():
    client = FakeCallingClient()
    client.on("error", lambda payload: None)
    client.remove_all_listeners()

    client.emit("error", {"message": "late"})
