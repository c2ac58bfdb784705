"""Shared models used across the web task agent."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)


class ToolName(str, enum.Enum):
    """Names of the browser tools exposed to the agent loop."""

    OPEN_BROWSER = "open_browser"
    NAVIGATE = "navigate"
    FIND_INPUT_LABELS = "find_input_labels"
    FIND_ELEMENT = "find_element"
    CLICK_ELEMENT = "click_element"
    SUBMIT_BUTTON = "submit_button"
    FILL_INPUT = "fill_input"
    CLOSE_BROWSER = "close_browser"


# Tool requests ---------------------------------------------------------------


class ToolRequest(BaseModel):
    """Base class for tool arguments. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


class EmptyRequest(ToolRequest):
    """Arguments of tools that take none."""


_HTTP_URL = TypeAdapter(AnyHttpUrl)


class NavigateRequest(ToolRequest):
    url: str = Field(description="The URL to open", json_schema_extra={"format": "uri"})

    @field_validator("url")
    @classmethod
    def _must_be_http_url(cls, value: str) -> str:
        # Validated as a URL but kept verbatim, without normalization.
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            raise ValueError(f"{value!r} is not a valid http(s) URL") from exc
        return value


class FindElementRequest(ToolRequest):
    text: str = Field(min_length=1, description="The exact visible text of the element")


class ClickElementRequest(ToolRequest):
    selector: str = Field(min_length=1, description="The selector of the element to click")


class SubmitButtonRequest(ToolRequest):
    button_name: str = Field(min_length=1, description="The exact text of the button")


class FillInputRequest(ToolRequest):
    label: str = Field(min_length=1, description="The label of the input field")
    value: str = Field(description="The value to type")


# Tool results ----------------------------------------------------------------


class ResultLevel(str, enum.Enum):
    """Outcome class of a tool that did not raise."""

    SUCCESS = "success"
    WARNING = "warning"


class ToolResult(BaseModel):
    """Structured result returned by every tool."""

    status: str
    level: ResultLevel = ResultLevel.SUCCESS


class PageResult(ToolResult):
    """Result of a tool that changed the page; carries the sanitized body."""

    url: Optional[str] = None
    selector: Optional[str] = None
    button: Optional[str] = None
    html: str = ""


class LabelInfo(BaseModel):
    """A ``label`` element: the id of the control it targets and its text."""

    model_config = ConfigDict(populate_by_name=True)

    target: Optional[str] = Field(default=None, alias="for")
    text: str


class LabelsResult(ToolResult):
    labels: list[LabelInfo] = Field(default_factory=list)


class ElementResult(ToolResult):
    selector: str
    found: bool = True


class FillResult(ToolResult):
    label: str
    value: str


# Transcript ------------------------------------------------------------------


class ToolCallRecord(BaseModel):
    """A single tool invocation and its outcome."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    result: Optional[dict[str, Any]] = None
    error: Optional[str] = None


class EventLevel(str, enum.Enum):
    """Severity of transcript events."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class TranscriptEvent(BaseModel):
    """Event emitted while the agent loop runs."""

    type: str
    message: str
    level: EventLevel = EventLevel.INFO
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
