"""Labels shown next to the call button for each session status."""

from voice_session.models.session_state import SessionStatus

STATUS_LABELS = {
    SessionStatus.IDLE: "Tap to talk",
    SessionStatus.CONNECTING: "Connecting…",
    SessionStatus.READY: "Speak",
    SessionStatus.ACTIVE: "Listening",
}


def status_label(status: SessionStatus, error_message: str = "") -> str:
    if status == SessionStatus.ERROR:
        return error_message or "Error"
    return STATUS_LABELS[status]


def action_label(call_active: bool) -> str:
    return "End call" if call_active else "Start call"
