"""Playwright-powered browser session implementation."""

from __future__ import annotations

import logging
from typing import Optional

from playwright.sync_api import Error
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from ..config import BrowserConfig
from .base import BrowserActionError, BrowserSession

LOGGER = logging.getLogger(__name__)


class PlaywrightBrowserSession(BrowserSession):
    """Browser session backed by a Playwright-driven Chromium."""

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        self._config = config or BrowserConfig()
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    @property
    def is_open(self) -> bool:
        return self._page is not None

    def open(self) -> bool:
        if self._page is not None:
            LOGGER.debug("Reusing open browser session")
            return False
        LOGGER.info("Launching Chromium (headless=%s)", self._config.headless)
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self._config.headless,
                args=["--no-sandbox", "--disable-dev-shm-usage"],
            )
            self._context = self._browser.new_context(
                viewport={
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                }
            )
            self._context.set_default_timeout(_to_timeout(self._config.default_timeout))
            self._context.set_default_navigation_timeout(
                _to_timeout(self._config.navigation_timeout)
            )
            self._page = self._context.new_page()
        except Error as exc:
            try:
                self._release()
            except Error:
                LOGGER.debug("Cleanup after failed launch also failed", exc_info=True)
            raise BrowserActionError(str(exc)) from exc
        return True

    def close(self) -> bool:
        if self._playwright is None:
            return False
        LOGGER.info("Closing browser session")
        try:
            self._release()
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc
        return True

    def _release(self) -> None:
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = None
        self._browser = None
        self._playwright = None
        self._page = None
        try:
            if context:
                context.close()
        finally:
            try:
                if browser:
                    browser.close()
            finally:
                if playwright:
                    playwright.stop()

    def goto(self, url: str) -> None:
        page = self._require_page()
        LOGGER.debug("Navigating to %s", url)
        try:
            page.goto(url, wait_until="networkidle")
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def body_html(self) -> str:
        page = self._require_page()
        try:
            return page.inner_html("body")
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def count(self, selector: str) -> int:
        page = self._require_page()
        try:
            return page.locator(selector).count()
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def click(self, selector: str) -> None:
        page = self._require_page()
        LOGGER.debug("Clicking %s", selector)
        try:
            page.click(selector)
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def count_role(self, role: str, name: str) -> int:
        page = self._require_page()
        try:
            return page.get_by_role(role, name=name).count()
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def click_role(self, role: str, name: str) -> None:
        page = self._require_page()
        LOGGER.debug("Clicking %s named %r", role, name)
        try:
            page.get_by_role(role, name=name).click()
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def count_label(self, label: str) -> int:
        page = self._require_page()
        try:
            return page.get_by_label(label, exact=True).count()
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def fill_label(self, label: str, value: str) -> None:
        page = self._require_page()
        LOGGER.debug("Filling input labelled %r", label)
        try:
            page.get_by_label(label, exact=True).fill(value)
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def wait_until_stable(self, timeout: float) -> None:
        page = self._require_page()
        try:
            page.wait_for_load_state("networkidle", timeout=_to_timeout(timeout))
        except PlaywrightTimeoutError:
            LOGGER.debug("Page still busy after %.1fs, continuing", timeout)
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def _require_page(self):
        if self._page is None:
            raise BrowserActionError("Browser session is not started")
        return self._page


def _to_timeout(timeout: float) -> int:
    return int(timeout * 1000)
