"""
Session status and the observable snapshot of a session.

Exactly one status is current at any time. It decides which user action is
offered (start or stop) and which transitions the controller accepts.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SessionStatus(str, Enum):
    """Lifecycle status of a voice session."""

    IDLE = "idle"
    CONNECTING = "connecting"
    READY = "ready"
    ACTIVE = "active"
    ERROR = "error"


# A session is in flight in any of these; start is ignored and stop applies.
ACTIVE_STATUSES = frozenset(
    {SessionStatus.CONNECTING, SessionStatus.READY, SessionStatus.ACTIVE}
)


class SessionSnapshot(BaseModel):
    """Immutable view of the controller state handed to subscribers."""

    model_config = ConfigDict(frozen=True)

    status: SessionStatus = Field(SessionStatus.IDLE, description="Current status")
    error_message: str = Field("", description="Human readable error, only set in error")
    transcript: str = Field("", description="Formatted transcript of the current session")

    @property
    def is_call_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
