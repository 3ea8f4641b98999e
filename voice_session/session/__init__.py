"""
Session module: the call lifecycle and its display text.

Key components:
- controller: SessionController, the state machine driving one live call.
- transcript: format_transcript, turning update payloads into display text.
- presentation: Status and action labels for a call button.
"""

from voice_session.session.controller import SessionController
from voice_session.session.presentation import action_label, status_label
from voice_session.session.transcript import format_transcript

__all__ = ["SessionController", "action_label", "format_transcript", "status_label"]
