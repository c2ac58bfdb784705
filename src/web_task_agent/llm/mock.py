"""Mock LLM clients for testing and offline use."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Iterable, Sequence

from .base import AssistantMessage, LLMClient


class ScriptedLLM(LLMClient):
    """Return assistant messages from a predefined sequence."""

    def __init__(self, responses: Iterable[AssistantMessage]) -> None:
        self._responses: Deque[AssistantMessage] = deque(responses)
        self.requests: list[list[dict[str, Any]]] = []

    def complete(
        self,
        messages: Sequence[dict[str, Any]],
        tools: Sequence[dict[str, Any]],
    ) -> AssistantMessage:
        self.requests.append(list(messages))
        if not self._responses:
            raise RuntimeError("ScriptedLLM ran out of responses")
        return self._responses.popleft()
