"""Configuration models for the web task agent."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"


class LLMConfig(BaseModel):
    """Settings for the LLM provider."""

    provider: str = Field(default="groq")
    model: Optional[str] = DEFAULT_MODEL
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    parameters: dict[str, Any] = Field(default_factory=dict)


class BrowserConfig(BaseModel):
    """Settings for the browser session."""

    headless: bool = False
    default_timeout: float = Field(default=15.0, description="Seconds allowed per page operation.")
    navigation_timeout: float = Field(default=20.0, description="Seconds allowed per navigation.")
    settle_timeout: float = Field(
        default=1.0,
        description="Upper bound (seconds) for the page to settle after navigate/click/submit.",
    )
    lookup_settle_timeout: float = Field(
        default=0.5,
        description="Upper bound (seconds) for the page to settle after lookups and fills.",
    )
    viewport_width: int = 1280
    viewport_height: int = 720


class TaskConfig(BaseModel):
    """Task definition provided by the user."""

    description: str


class RunnerConfig(BaseSettings):
    """Top-level configuration for running the agent."""

    model_config = SettingsConfigDict(
        env_prefix="WEB_TASK_AGENT_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    task: Optional[TaskConfig] = None
    llm: LLMConfig = Field(default_factory=LLMConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    max_steps: int = Field(default=30, description="Maximum number of LLM calls per run.")


_API_KEY_VARIABLES = {"groq": "GROQ_API_KEY"}


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> RunnerConfig:
    """Load configuration from an optional file and overrides."""

    data: dict[str, Any] = {}
    if path:
        import yaml

        data = yaml.safe_load(path.read_text()) or {}
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    config = RunnerConfig(**data, **settings_kwargs)
    if data:
        merged = config.model_dump(mode="python")
        _deep_update(merged, data)
        config = RunnerConfig.model_validate(merged)
    return _with_api_key_from_env(config, os.environ)


def _with_api_key_from_env(config: RunnerConfig, env: Mapping[str, str]) -> RunnerConfig:
    """Fill ``llm.api_key`` from the provider's conventional variable."""

    if config.llm.api_key:
        return config
    variable = _API_KEY_VARIABLES.get(config.llm.provider.lower(), "OPENAI_API_KEY")
    api_key = env.get(variable)
    if not api_key:
        return config
    llm = config.llm.model_copy(update={"api_key": api_key})
    return config.model_copy(update={"llm": llm})


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Recursively merge ``updates`` into ``target`` in-place."""

    for key, value in updates.items():
        if (
            isinstance(value, Mapping)
            and isinstance(existing := target.get(key), Mapping)
        ):
            nested: dict[str, Any]
            if isinstance(existing, dict):
                nested = existing
            else:
                nested = dict(existing)
            _deep_update(nested, value)
            target[key] = nested
        else:
            target[key] = value
