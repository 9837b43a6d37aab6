"""
Console transport — Rich terminal output for notifications.

Used by ``upower-notify run --dry-run`` and wherever no notification
server is available.
"""

from __future__ import annotations

import itertools

from rich.console import Console
from rich.panel import Panel

from upower_notify.core import Urgency
from upower_notify.notifications.channel import NotificationHandle, NotificationTransport

_URGENCY_STYLE = {
    Urgency.LOW: "blue",
    Urgency.NORMAL: "yellow",
    Urgency.CRITICAL: "bold red",
}


class ConsoleHandle(NotificationHandle):
    def __init__(self, console: Console, notification_id: int, summary: str) -> None:
        self._console = console
        self.notification_id = notification_id
        self.summary = summary
        self.closed = False

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._console.print(f"[dim]✕ #{self.notification_id} {self.summary}[/dim]")


class ConsoleTransport(NotificationTransport):
    """Rich terminal output transport."""

    name: str = "console"

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._ids = itertools.count(1)

    async def show(
        self,
        summary: str,
        body: str,
        *,
        icon: str = "",
        urgency: Urgency = Urgency.NORMAL,
        timeout: int = 5000,
    ) -> NotificationHandle:
        notification_id = next(self._ids)
        style = _URGENCY_STYLE.get(urgency, "blue")
        expiry = "never expires" if timeout == 0 else f"{timeout} ms"

        if urgency == Urgency.CRITICAL:
            self._console.print(
                Panel(
                    body,
                    title=f"#{notification_id} {summary}",
                    subtitle=expiry,
                    border_style=style,
                )
            )
        else:
            self._console.print(
                f"\n[bold {style}]#{notification_id} {summary}[/bold {style}] [dim]({expiry})[/dim]"
            )
            if body:
                self._console.print(f"  {body}")

        return ConsoleHandle(self._console, notification_id, summary)
