"""Utilities for parsing LLM output."""

from __future__ import annotations

import json
from typing import Any, Optional

from .base import AssistantMessage, ToolCall


def parse_tool_arguments(text: Optional[str]) -> dict[str, Any]:
    """Decode the JSON arguments of a tool call into a dict."""

    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = _strip_code_fence(cleaned).strip()
        if cleaned.startswith("json"):
            cleaned = cleaned[len("json") :]
    if not cleaned or cleaned == "null":
        return {}
    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError("Tool arguments must be a JSON object")
    return data


def parse_assistant_message(message: dict[str, Any]) -> AssistantMessage:
    """Convert a chat-completions ``message`` payload to :class:`AssistantMessage`."""

    calls = []
    for index, item in enumerate(message.get("tool_calls") or []):
        function = item.get("function") or {}
        calls.append(
            ToolCall(
                id=item.get("id") or f"call_{index}",
                name=function.get("name", ""),
                arguments=function.get("arguments") or "{}",
            )
        )
    return AssistantMessage(content=message.get("content") or None, tool_calls=calls)


def _strip_code_fence(block: str) -> str:
    parts = block.split("```")
    if len(parts) >= 3:
        return parts[1]
    return block.strip("`")
