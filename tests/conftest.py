from __future__ import annotations

import pytest

from web_task_agent.browser.base import BrowserActionError, BrowserSession
from web_task_agent.config import BrowserConfig
from web_task_agent.tools.browser_tools import BrowserToolset


class StubBrowserSession(BrowserSession):
    """In-memory session that records every driver call."""

    def __init__(self, html: str = "<main><p>Start</p></main>") -> None:
        self.html = html
        self.calls: list[tuple] = []
        self.launches = 0
        self.matches: dict[str, int] = {}
        self.buttons: dict[str, int] = {}
        self.labels: dict[str, int] = {}
        self.filled: dict[str, str] = {}
        self.pages_after_click: dict[str, str] = {}
        self.goto_error: str | None = None
        self.close_error: str | None = None
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> bool:
        self.calls.append(("open",))
        if self._open:
            return False
        self._open = True
        self.launches += 1
        return True

    def close(self) -> bool:
        self.calls.append(("close",))
        if self.close_error:
            raise BrowserActionError(self.close_error)
        if not self._open:
            return False
        self._open = False
        return True

    def goto(self, url: str) -> None:
        self.calls.append(("goto", url))
        if self.goto_error:
            raise BrowserActionError(self.goto_error)

    def body_html(self) -> str:
        self.calls.append(("body_html",))
        return self.html

    def count(self, selector: str) -> int:
        self.calls.append(("count", selector))
        return self.matches.get(selector, 0)

    def click(self, selector: str) -> None:
        self.calls.append(("click", selector))
        if selector in self.pages_after_click:
            self.html = self.pages_after_click[selector]

    def count_role(self, role: str, name: str) -> int:
        self.calls.append(("count_role", role, name))
        return self.buttons.get(name, 0)

    def click_role(self, role: str, name: str) -> None:
        self.calls.append(("click_role", role, name))

    def count_label(self, label: str) -> int:
        self.calls.append(("count_label", label))
        return self.labels.get(label, 0)

    def fill_label(self, label: str, value: str) -> None:
        self.calls.append(("fill_label", label, value))
        self.filled[label] = value

    def wait_until_stable(self, timeout: float) -> None:
        self.calls.append(("wait_until_stable", timeout))

    def driver_calls(self) -> list[tuple]:
        """Calls other than lifecycle bookkeeping."""

        return [call for call in self.calls if call[0] not in {"open", "close"}]


@pytest.fixture
def session() -> StubBrowserSession:
    return StubBrowserSession()


@pytest.fixture
def toolset(session: StubBrowserSession) -> BrowserToolset:
    return BrowserToolset(session, BrowserConfig(settle_timeout=0.2, lookup_settle_timeout=0.1))
