"""Transcript channels that show the agent loop's progress."""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console

from ..models import TranscriptEvent


class Transcript(ABC):
    """Interface for rendering agent loop events."""

    @abstractmethod
    def emit(self, event: TranscriptEvent) -> None:
        """Render a transcript event."""


class ConsoleTranscript(Transcript):
    """Print events to the console using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def emit(self, event: TranscriptEvent) -> None:
        style = {
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "success": "green",
        }.get(event.level.value, "white")
        self._console.print(event.message, style=style, markup=False)
        if event.data:
            self._console.print(event.data, style="dim")
