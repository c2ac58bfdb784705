"""Browser session abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BrowserActionError(RuntimeError):
    """Raised when the browser driver fails to carry out an operation."""


class BrowserSession(ABC):
    """Owner of at most one browser and one page.

    ``open`` and ``close`` manage the lifecycle; every other method operates
    on the open page and raises :class:`BrowserActionError` when there is none.
    """

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether a page is currently available."""

    @abstractmethod
    def open(self) -> bool:
        """Launch the browser if needed. Return ``True`` if a new one was started."""

    @abstractmethod
    def close(self) -> bool:
        """Release the browser. Return ``False`` if nothing was open."""

    @abstractmethod
    def goto(self, url: str) -> None:
        """Load ``url`` and wait for the network to go idle."""

    @abstractmethod
    def body_html(self) -> str:
        """Return the inner HTML of the page body."""

    @abstractmethod
    def count(self, selector: str) -> int:
        """Return how many elements match ``selector``."""

    @abstractmethod
    def click(self, selector: str) -> None:
        """Click the element matching ``selector``."""

    @abstractmethod
    def count_role(self, role: str, name: str) -> int:
        """Return how many elements have ``role`` and accessible ``name``."""

    @abstractmethod
    def click_role(self, role: str, name: str) -> None:
        """Click the element with ``role`` and accessible ``name``."""

    @abstractmethod
    def count_label(self, label: str) -> int:
        """Return how many controls are labelled exactly ``label``."""

    @abstractmethod
    def fill_label(self, label: str, value: str) -> None:
        """Set the value of the control labelled exactly ``label``."""

    @abstractmethod
    def wait_until_stable(self, timeout: float) -> None:
        """Wait at most ``timeout`` seconds for pending network activity to end."""
