from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest


class FakeMessages:
    """Stand-in for ``anthropic.Anthropic().messages`` recording each call."""

    def __init__(self, text: str | None = None, exc: Exception | None = None):
        self.text = text
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class FakeClient:
    def __init__(self, text: str | None = None, exc: Exception | None = None):
        self.messages = FakeMessages(text=text, exc=exc)


@pytest.fixture
def remote_payload() -> dict[str, Any]:
    return {
        "parts": [
            {"key": "task", "label": "Task", "text": "Write a haiku", "suggestions": ["Write a poem"]},
            {"key": "role", "label": "Role / Persona", "text": "A poet"},
            {"key": "mood", "label": "Mood", "text": "gloomy", "suggestions": ["dark"]},
        ],
        "assembled_prompt": "As a poet, write a haiku.",
    }


@pytest.fixture
def make_client():
    def _make(payload: Any = None, *, text: str | None = None, exc: Exception | None = None) -> FakeClient:
        if text is None and payload is not None:
            text = json.dumps(payload)
        return FakeClient(text=text, exc=exc)

    return _make
