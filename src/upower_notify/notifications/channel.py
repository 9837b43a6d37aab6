"""
NotificationTransport — abstract base class for notification backends.

Each backend (freedesktop D-Bus, console) inherits from this ABC,
implements ``show()`` and returns a ``NotificationHandle`` that can
later be closed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from upower_notify.core import Urgency


class NotificationHandle(ABC):
    """A notification currently on screen."""

    @abstractmethod
    async def close(self) -> None:
        """Withdraw the notification."""
        ...


class NotificationTransport(ABC):
    """Base class for notification transports."""

    name: str = "unnamed"

    @abstractmethod
    async def show(
        self,
        summary: str,
        body: str,
        *,
        icon: str = "",
        urgency: Urgency = Urgency.NORMAL,
        timeout: int = 5000,
    ) -> NotificationHandle:
        """Display a notification. ``timeout`` is in ms, 0 means never expire."""
        ...

    async def connect(self) -> None:
        """Establish connection (e.g. bus login). No-op by default."""

    async def disconnect(self) -> None:
        """Tear down connection. No-op by default."""
