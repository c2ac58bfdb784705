"""Tool descriptors and the errors tools raise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..models import ToolName, ToolRequest, ToolResult


class ToolError(RuntimeError):
    """Base class for failures local to a single tool call."""


class SessionNotOpenError(ToolError):
    """Raised when a tool needs a browser session but none is open."""

    def __init__(self) -> None:
        super().__init__("Browser not opened. Call open_browser first.")


class ElementNotFoundError(ToolError):
    """Raised when a lookup matches nothing on the page."""


class ToolArgumentError(ToolError):
    """Raised when a tool is unknown or its arguments fail validation."""


@dataclass(frozen=True)
class ToolSpec:
    """A named operation exposed to the agent loop."""

    name: ToolName
    description: str
    request_model: type[ToolRequest]
    handler: Callable[[Any], ToolResult]

    def definition(self) -> dict[str, Any]:
        """Return the OpenAI function-calling definition for this tool."""

        schema = self.request_model.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        schema.setdefault("properties", {})
        schema["additionalProperties"] = False
        return {
            "type": "function",
            "function": {
                "name": self.name.value,
                "description": self.description,
                "parameters": schema,
                "strict": True,
            },
        }
