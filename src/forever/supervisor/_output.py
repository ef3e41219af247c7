"""Console reporter for the supervisor.

This module provides the Reporter implementation that prints supervisor
notices and lifecycle events to the terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, final

from rich.console import Console
from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from ._models import Event


@final
class ConsoleReporter:
    """Reporter that writes to the console with a ``[forever]`` prefix.

    Notices are printed plainly; lifecycle events are highlighted so they
    stand out from the supervised command's own output.
    """

    __slots__ = ("_console", "_event_style", "_prefix_style")

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the reporter.

        Args:
            console: Rich Console instance for output. If None, creates a new one.
        """
        self._console = console or Console()
        self._prefix_style = Style(color="blue", bold=True)
        self._event_style = Style(color="cyan")

    def notice(self, message: str) -> None:
        text = Text()
        _ = text.append("[forever]", style=self._prefix_style)
        _ = text.append(" ")
        _ = text.append(message)
        self._console.print(text)

    def event(self, event: Event) -> None:
        text = Text()
        _ = text.append("[forever]", style=self._prefix_style)
        _ = text.append(" ")
        _ = text.append(event.label, style=Style(dim=True))
        _ = text.append(" ")
        _ = text.append(event.message, style=self._event_style)
        self._console.print(text)
