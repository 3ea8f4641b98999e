from types import SimpleNamespace

import pytest

from voice_session.session.transcript import format_transcript


def test_none_is_empty():
    assert format_transcript(None) == ""


def test_string_unchanged():
    assert format_transcript("x") == "x"
    assert format_transcript("") == ""


def test_turn_entries():
    raw = [{"role": "user", "content": "hi"}, {"role": "agent", "content": "hello"}]
    assert format_transcript(raw) == "user: hi\nagent: hello"


def test_missing_role_defaults_to_empty():
    assert format_transcript([{"content": "hi"}, {"role": None, "content": "yo"}]) == ": hi\n: yo"


def test_entries_without_content_use_str():
    raw = [{"role": "agent"}, "plain", 42, None]
    assert format_transcript(raw) == "{'role': 'agent'}\nplain\n42\nNone"


def test_object_entries():
    raw = (SimpleNamespace(role="agent", content="hello"), SimpleNamespace(content="bare"))
    assert format_transcript(raw) == "agent: hello\n: bare"


def test_empty_sequence():
    assert format_transcript([]) == ""


@pytest.mark.parametrize("raw, expected", [(12, "12"), ({"a": 1}, "{'a': 1}"), (3.5, "3.5")])
def test_other_types_use_str(raw, expected):
    assert format_transcript(raw) == expected


def test_idempotent_on_own_output():
    text = format_transcript([{"role": "user", "content": "hi"}, {"role": "agent", "content": "hello"}])
    assert format_transcript(text) == text
