"""
Models module for session state and wire payloads.

Key components:
- session_state: The session status enumeration and the observable snapshot
  published by the session controller.
- call_schemas: Pydantic models for the token issuance endpoint responses and
  for the payloads carried by calling client events.

Usage examples:
```python
from voice_session.models import SessionSnapshot, SessionStatus, UpdatePayload

snapshot = SessionSnapshot(status=SessionStatus.READY)
update = UpdatePayload.from_event({"transcript": "agent: hello"})
```
"""

from voice_session.models.call_schemas import (
    CallErrorPayload,
    CreateWebCallResponse,
    ErrorResponse,
    UpdatePayload,
    WebCallCredentials,
)
from voice_session.models.session_state import (
    ACTIVE_STATUSES,
    SessionSnapshot,
    SessionStatus,
)

__all__ = [
    "ACTIVE_STATUSES",
    "CallErrorPayload",
    "CreateWebCallResponse",
    "ErrorResponse",
    "SessionSnapshot",
    "SessionStatus",
    "UpdatePayload",
    "WebCallCredentials",
]
