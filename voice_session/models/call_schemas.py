"""
Pydantic models for the token issuance endpoint and calling client events.

The endpoint answers ``POST /api/create-web-call`` with either a
``CreateWebCallResponse`` or an ``ErrorResponse``. Calling client events carry
loosely shaped payloads; ``UpdatePayload`` and ``CallErrorPayload`` pick the
fields the controller reads out of mappings, plain objects or exceptions.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


def _payload_fields(payload: Any, *names: str) -> Dict[str, Any]:
    """Collect the named fields from a mapping or an object with attributes."""
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return {name: payload[name] for name in names if name in payload}
    return {name: getattr(payload, name) for name in names if hasattr(payload, name)}


class WebCallCredentials(BaseModel):
    """Access token and call identifier for exactly one call start."""

    access_token: str = Field(..., description="Short-lived token authorizing one call start")
    call_id: str = Field(..., description="Identifier of the created web call")

    @field_validator("access_token")
    def validate_access_token(cls, v):
        """Validate that the access token is not empty."""
        if not v.strip():
            raise ValueError("Access token cannot be empty")
        return v


class CreateWebCallResponse(WebCallCredentials):
    """Success body of the token issuance endpoint."""


class ErrorResponse(BaseModel):
    """Failure body of the token issuance endpoint."""

    error: str = Field(..., description="Human readable reason for the failure")


class UpdatePayload(BaseModel):
    """Payload of an ``update`` event."""

    transcript: Any = None

    @classmethod
    def from_event(cls, payload: Any) -> "UpdatePayload":
        return cls(**_payload_fields(payload, "transcript"))


class CallErrorPayload(BaseModel):
    """Payload of an ``error`` event."""

    message: Optional[str] = None

    @classmethod
    def from_event(cls, payload: Any) -> "CallErrorPayload":
        if isinstance(payload, str):
            return cls(message=payload)
        if isinstance(payload, BaseException):
            return cls(message=str(payload) or None)
        message = _payload_fields(payload, "message").get("message")
        return cls(message=None if message is None else str(message))
