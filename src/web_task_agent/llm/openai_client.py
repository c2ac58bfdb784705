"""LLM client for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx

from ..config import LLMConfig
from .base import AssistantMessage, LLMClient
from .json_parser import parse_assistant_message

LOGGER = logging.getLogger(__name__)

_BASE_URLS = {
    "groq": "https://api.groq.com/openai/v1",
    "openai": "https://api.openai.com/v1",
}
_RESERVED_PARAMETERS = {"timeout", "temperature", "system_prompt", "responses"}


class OpenAIChatLLM(LLMClient):
    """Call an OpenAI-compatible chat completion API with function calling."""

    def __init__(self, config: LLMConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        if not config.model:
            raise ValueError("LLM model must be specified for OpenAIChatLLM")
        self._config = config
        headers = {"Content-Type": "application/json"}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"
        base_url = config.base_url or _BASE_URLS.get(config.provider.lower(), _BASE_URLS["openai"])
        self._client = httpx.Client(
            base_url=base_url,
            timeout=config.parameters.get("timeout", 60),
            headers=headers,
            transport=transport,
        )
        self._temperature = config.parameters.get("temperature", 0.0)

    def complete(
        self,
        messages: Sequence[dict[str, Any]],
        tools: Sequence[dict[str, Any]],
    ) -> AssistantMessage:
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": list(messages),
            "temperature": self._temperature,
        }
        if tools:
            payload["tools"] = list(tools)
            payload["tool_choice"] = "auto"
        payload.update(
            {
                k: v
                for k, v in self._config.parameters.items()
                if k not in _RESERVED_PARAMETERS
            }
        )
        LOGGER.debug("Requesting completion for %d messages", len(payload["messages"]))
        response = self._client.post("/chat/completions", json=payload)
        response.raise_for_status()
        data = response.json()
        try:
            message = data["choices"][0]["message"]
        except (KeyError, IndexError) as exc:
            raise ValueError(f"Unexpected response format: {data}") from exc
        return parse_assistant_message(message)

    def close(self) -> None:
        self._client.close()
