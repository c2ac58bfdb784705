"""Agent loop that lets the model drive the browser tools."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ..browser.base import BrowserActionError
from ..config import RunnerConfig
from ..llm.base import AssistantMessage, LLMClient, ToolCall
from ..llm.json_parser import parse_tool_arguments
from ..models import (
    EventLevel,
    ResultLevel,
    ToolCallRecord,
    ToolName,
    TranscriptEvent,
)
from ..tools.base import ToolArgumentError, ToolError
from ..tools.browser_tools import BrowserToolset
from ..transcript.base import Transcript
from .prompt import CLOSE_NUDGE, SYSTEM_POLICY, build_messages

LOGGER = logging.getLogger(__name__)


@dataclass
class AgentResult:
    """Outcome of one agent run."""

    success: bool
    summary: Optional[str] = None
    steps: int = 0
    tool_calls: list[ToolCallRecord] = field(default_factory=list)
    error: Optional[str] = None


class AgentRunner:
    """Relays between the model and the tool set until the task ends.

    The loop makes no decisions of its own: the model picks every tool call,
    and ordering is enforced only by the tools' precondition checks.
    """

    def __init__(
        self,
        config: RunnerConfig,
        llm: LLMClient,
        toolset: BrowserToolset,
        transcript: Transcript,
        system_prompt: Optional[str] = None,
    ) -> None:
        self._config = config
        self._llm = llm
        self._toolset = toolset
        self._transcript = transcript
        self._system_prompt = system_prompt or config.llm.parameters.get(
            "system_prompt", SYSTEM_POLICY
        )

    def run(self, task: str) -> AgentResult:
        """Run ``task`` to completion and return the outcome."""

        LOGGER.info("Starting agent for task: %s", task)
        self._emit("task_started", f"Starting task: {task}")
        messages = build_messages(task, self._system_prompt)
        tools = self._toolset.definitions()
        result = AgentResult(success=False)
        nudged = False
        try:
            while True:
                if result.steps >= self._config.max_steps:
                    raise RuntimeError(
                        f"Agent did not finish within {self._config.max_steps} steps"
                    )
                reply = self._llm.complete(messages, tools)
                result.steps += 1
                messages.append(reply.to_message())
                if reply.content:
                    result.summary = reply.content
                    if not reply.tool_calls:
                        self._emit(
                            "final_answer",
                            f"Final Answer: {reply.content}",
                            level=EventLevel.SUCCESS,
                        )
                if not reply.tool_calls:
                    if self._toolset.session.is_open and not nudged:
                        # One more turn for the model to close the browser.
                        nudged = True
                        messages.append({"role": "user", "content": CLOSE_NUDGE})
                        continue
                    result.success = True
                    return result
                if self._run_tool_calls(reply, messages, result):
                    result.success = True
                    return result
        except Exception as exc:
            LOGGER.exception("Unhandled agent error")
            result.error = str(exc)
            self._emit("run_error", str(exc), level=EventLevel.ERROR)
            return result
        finally:
            if self._toolset.session.is_open:
                LOGGER.warning("Closing browser left open by the agent")
                try:
                    self._toolset.session.close()
                except Exception:
                    LOGGER.exception("Failed to close browser after run")

    def _run_tool_calls(
        self,
        reply: AssistantMessage,
        messages: list[dict[str, Any]],
        result: AgentResult,
    ) -> bool:
        """Execute requested calls in order. Return ``True`` once the browser is closed."""

        closed = False
        for call in reply.tool_calls:
            record = self._invoke(call)
            result.tool_calls.append(record)
            if record.error is not None:
                content = f"Error: {record.error}"
            else:
                content = json.dumps(record.result, ensure_ascii=False)
            messages.append(
                {
                    "role": "tool",
                    "tool_call_id": call.id,
                    "name": call.name,
                    "content": content,
                }
            )
            if call.name == ToolName.CLOSE_BROWSER.value and record.error is None:
                closed = True
        return closed

    def _invoke(self, call: ToolCall) -> ToolCallRecord:
        record = ToolCallRecord(name=call.name)
        try:
            try:
                record.arguments = parse_tool_arguments(call.arguments)
            except ValueError as exc:
                raise ToolArgumentError(f"Malformed arguments for {call.name}: {exc}") from exc
            self._emit(
                "tool_call",
                f"Agent wants to run tool: {call.name}",
                data={"arguments": record.arguments},
            )
            outcome = self._toolset.dispatch(call.name, record.arguments)
        except (ToolError, BrowserActionError) as exc:
            LOGGER.info("Tool %s failed: %s", call.name, exc)
            record.error = str(exc)
            self._emit(
                "tool_error",
                f"Tool {call.name} failed: {exc}",
                level=EventLevel.ERROR,
            )
            return record
        record.result = outcome.model_dump(mode="json", by_alias=True, exclude_none=True)
        level = EventLevel.WARNING if outcome.level is ResultLevel.WARNING else EventLevel.INFO
        self._emit(
            "tool_result",
            f"Tool {call.name} responded: {outcome.status}",
            level=level,
            data=record.result,
        )
        return record

    def _emit(
        self,
        type_: str,
        message: str,
        *,
        level: EventLevel = EventLevel.INFO,
        data: Optional[dict[str, Any]] = None,
    ) -> None:
        self._transcript.emit(
            TranscriptEvent(type=type_, message=message, level=level, data=data or {})
        )
