"""Browser tools the agent loop can call."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from ..browser.base import BrowserSession
from ..config import BrowserConfig
from ..dom.sanitizer import extract_labels, sanitize_html
from ..models import (
    ClickElementRequest,
    ElementResult,
    EmptyRequest,
    FillInputRequest,
    FillResult,
    FindElementRequest,
    LabelsResult,
    NavigateRequest,
    PageResult,
    ResultLevel,
    SubmitButtonRequest,
    ToolName,
    ToolResult,
)
from .base import ElementNotFoundError, SessionNotOpenError, ToolArgumentError, ToolSpec

LOGGER = logging.getLogger(__name__)


def text_selector(text: str) -> str:
    """Return a Playwright selector matching elements whose visible text is ``text``."""

    return f"text={json.dumps(text)}"


class BrowserToolset:
    """The fixed set of browser operations, bound to one session.

    Any control loop can drive it through :meth:`dispatch`; the language
    model sees it through :meth:`definitions`.
    """

    def __init__(self, session: BrowserSession, config: Optional[BrowserConfig] = None) -> None:
        self._session = session
        self._config = config or BrowserConfig()
        self._tools: dict[str, ToolSpec] = {
            spec.name.value: spec
            for spec in (
                ToolSpec(
                    ToolName.OPEN_BROWSER,
                    "Opens a browser (singleton). MUST be called first.",
                    EmptyRequest,
                    lambda _: self.open_browser(),
                ),
                ToolSpec(
                    ToolName.NAVIGATE,
                    "Navigates to a URL and returns the simplified page DOM.",
                    NavigateRequest,
                    self.navigate,
                ),
                ToolSpec(
                    ToolName.FIND_INPUT_LABELS,
                    "Extracts all visible input labels from the current page.",
                    EmptyRequest,
                    lambda _: self.find_input_labels(),
                ),
                ToolSpec(
                    ToolName.FIND_ELEMENT,
                    "Finds an element strictly by visible text and returns its selector.",
                    FindElementRequest,
                    self.find_element,
                ),
                ToolSpec(
                    ToolName.CLICK_ELEMENT,
                    "Clicks an element using a selector returned by find_element.",
                    ClickElementRequest,
                    self.click_element,
                ),
                ToolSpec(
                    ToolName.SUBMIT_BUTTON,
                    "Clicks a button by its visible name.",
                    SubmitButtonRequest,
                    self.submit_button,
                ),
                ToolSpec(
                    ToolName.FILL_INPUT,
                    "Fills an input field by its label text.",
                    FillInputRequest,
                    self.fill_input,
                ),
                ToolSpec(
                    ToolName.CLOSE_BROWSER,
                    "Closes the browser. Must only be called after task completion.",
                    EmptyRequest,
                    lambda _: self.close_browser(),
                ),
            )
        }

    @property
    def session(self) -> BrowserSession:
        return self._session

    def definitions(self) -> list[dict[str, Any]]:
        return [spec.definition() for spec in self._tools.values()]

    def dispatch(self, name: str, arguments: Mapping[str, Any]) -> ToolResult:
        """Validate ``arguments`` for tool ``name`` and run it."""

        spec = self._tools.get(name)
        if spec is None:
            raise ToolArgumentError(f"Unknown tool: {name}")
        try:
            request = spec.request_model.model_validate(dict(arguments))
        except ValidationError as exc:
            raise ToolArgumentError(f"Invalid arguments for {name}: {exc}") from exc
        LOGGER.info("Running tool %s", name)
        return spec.handler(request)

    # Tools -------------------------------------------------------------------

    def open_browser(self) -> ToolResult:
        if self._session.open():
            self._session.wait_until_stable(self._config.lookup_settle_timeout)
        return ToolResult(status="Browser opened and ready.")

    def navigate(self, request: NavigateRequest) -> PageResult:
        self._require_session()
        url = request.url
        self._session.goto(url)
        return PageResult(status="Navigated", url=url, html=self._settled_html())

    def find_input_labels(self) -> LabelsResult:
        self._require_session()
        labels = extract_labels(self._session.body_html())
        self._session.wait_until_stable(self._config.lookup_settle_timeout)
        return LabelsResult(status=f"Found {len(labels)} labels", labels=labels)

    def find_element(self, request: FindElementRequest) -> ElementResult:
        self._require_session()
        selector = text_selector(request.text)
        matches = self._session.count(selector)
        if matches == 0:
            raise ElementNotFoundError(f'Element with text "{request.text}" not found.')
        LOGGER.debug("Found %d elements for %s", matches, selector)
        self._session.wait_until_stable(self._config.lookup_settle_timeout)
        return ElementResult(status=f"Found {matches} matching elements", selector=selector)

    def click_element(self, request: ClickElementRequest) -> PageResult:
        self._require_session()
        self._session.click(request.selector)
        return PageResult(
            status="Clicked element",
            selector=request.selector,
            html=self._settled_html(),
        )

    def submit_button(self, request: SubmitButtonRequest) -> PageResult:
        self._require_session()
        if self._session.count_role("button", request.button_name) == 0:
            raise ElementNotFoundError(f'Button "{request.button_name}" not found.')
        self._session.click_role("button", request.button_name)
        return PageResult(
            status="Clicked button",
            button=request.button_name,
            html=self._settled_html(),
        )

    def fill_input(self, request: FillInputRequest) -> FillResult:
        self._require_session()
        if self._session.count_label(request.label) == 0:
            raise ElementNotFoundError(f'Input labelled "{request.label}" not found.')
        self._session.fill_label(request.label, request.value)
        self._session.wait_until_stable(self._config.lookup_settle_timeout)
        return FillResult(status="Filled input", label=request.label, value=request.value)

    def close_browser(self) -> ToolResult:
        if self._session.close():
            return ToolResult(status="Browser closed.")
        return ToolResult(status="Browser was not open.", level=ResultLevel.WARNING)

    # Helpers -----------------------------------------------------------------

    def _require_session(self) -> None:
        if not self._session.is_open:
            raise SessionNotOpenError()

    def _settled_html(self) -> str:
        self._session.wait_until_stable(self._config.settle_timeout)
        return sanitize_html(self._session.body_html())
