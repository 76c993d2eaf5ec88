from datetime import datetime, timedelta, timezone

from chat_memory.domain.models import ChatMessage, Message
from chat_memory.memory import CONTEXT_WINDOW_SIZE, HISTORY_LIMIT, build_prompt_window, recent_history


def _history(n):
    base = datetime(2024, 5, 1, tzinfo=timezone.utc)
    roles = ("user", "assistant")
    return [Message(role=roles[i % 2], content=f"m{i}", created_at=base + timedelta(seconds=i)) for i in range(n)]


def test_window_constants():
    assert CONTEXT_WINDOW_SIZE == 8
    assert HISTORY_LIMIT == 10


def test_window_short_history_is_complete():
    history = _history(3)
    window = build_prompt_window(history, "sys")
    assert window == [
        ChatMessage(role="system", content="sys"),
        ChatMessage(role="user", content="m0"),
        ChatMessage(role="assistant", content="m1"),
        ChatMessage(role="user", content="m2"),
    ]


def test_window_long_history_keeps_last_eight():
    history = _history(20)
    window = build_prompt_window(history, "sys")
    assert len(window) == 9
    assert window[0] == ChatMessage(role="system", content="sys")
    assert [m.content for m in window[1:]] == [f"m{i}" for i in range(12, 20)]
    assert [m.role for m in window[1:]] == [m.role for m in history[-8:]]


def test_window_is_pure():
    history = _history(11)
    snapshot = list(history)
    assert build_prompt_window(history, "sys") == build_prompt_window(history, "sys")
    assert history == snapshot


def test_window_empty_history():
    assert build_prompt_window([], "sys") == [ChatMessage(role="system", content="sys")]


def test_recent_history_bounded():
    assert len(recent_history(_history(25))) == 10
    assert [m.content for m in recent_history(_history(25))][0] == "m15"
    assert len(recent_history(_history(4))) == 4
