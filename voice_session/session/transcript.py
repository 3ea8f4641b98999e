"""Turn raw transcript payloads into display text."""

from collections.abc import Mapping
from typing import Any


def _format_entry(entry: Any) -> str:
    if isinstance(entry, Mapping):
        if "content" in entry:
            return f"{entry.get('role') or ''}: {entry['content']}"
    elif entry is not None and hasattr(entry, "content"):
        return f"{getattr(entry, 'role', None) or ''}: {entry.content}"
    return str(entry)


def format_transcript(raw: Any) -> str:
    """
    Render a transcript payload as text.

    ``None`` becomes an empty string and strings pass through unchanged. A
    list or tuple of turns is rendered one ``"role: content"`` line per turn,
    in order; turns without content fall back to ``str``. Anything else is
    rendered with ``str``. Never raises.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (list, tuple)):
        return "\n".join(_format_entry(entry) for entry in raw)
    return str(raw)
