"""Factories for constructing components from configuration."""

from __future__ import annotations

from .browser.playwright_session import PlaywrightBrowserSession
from .config import BrowserConfig, LLMConfig
from .llm.base import AssistantMessage, LLMClient, ToolCall
from .llm.mock import ScriptedLLM
from .llm.openai_client import OpenAIChatLLM
from .tools.browser_tools import BrowserToolset
from .transcript.base import ConsoleTranscript, Transcript


def build_llm(config: LLMConfig) -> LLMClient:
    provider = config.provider.lower()
    if provider in {"groq", "openai", "openai-compatible"}:
        return OpenAIChatLLM(config)
    if provider == "mock":
        responses = [
            AssistantMessage(
                content=item.get("content"),
                tool_calls=[ToolCall(**call) for call in item.get("tool_calls", [])],
            )
            for item in config.parameters.get("responses", [])
        ]
        return ScriptedLLM(responses)
    raise ValueError(f"Unsupported LLM provider: {config.provider}")


def build_toolset(config: BrowserConfig) -> BrowserToolset:
    return BrowserToolset(PlaywrightBrowserSession(config), config)


def build_transcript() -> Transcript:
    return ConsoleTranscript()
