"""
Freedesktop transport — desktop notifications over the session bus.

Talks to ``org.freedesktop.Notifications`` with dbus-fast. Each shown
notification is identified by the id returned from ``Notify``, which
is what ``CloseNotification`` takes.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from dbus_fast import BusType, Variant
from dbus_fast.aio import MessageBus
from dbus_fast.errors import DBusError

from upower_notify.core import Urgency
from upower_notify.notifications.channel import NotificationHandle, NotificationTransport

logger = logging.getLogger(__name__)

NOTIFICATIONS_SERVICE = "org.freedesktop.Notifications"
NOTIFICATIONS_PATH = "/org/freedesktop/Notifications"

# Bus-level failures: the notification server itself is gone or unreachable.
_FATAL_CLOSE_ERRORS = frozenset(
    "org.freedesktop.DBus.Error." + name
    for name in (
        "ServiceUnknown",
        "NameHasNoOwner",
        "NoReply",
        "Timeout",
        "Disconnected",
        "NoServer",
        "AccessDenied",
        "UnknownMethod",
        "UnknownObject",
        "UnknownInterface",
    )
)


class FreedesktopHandle(NotificationHandle):
    """A notification identified by its server-side id."""

    def __init__(self, interface: Any, notification_id: int) -> None:
        self._interface = interface
        self.notification_id = notification_id

    async def close(self) -> None:
        try:
            await self._interface.call_close_notification(self.notification_id)
        except DBusError as e:
            if e.type in _FATAL_CLOSE_ERRORS:
                raise
            # The server answers with an error once the notification has expired
            # or been dismissed by the user.
            logger.debug("Notification %d already gone: %s", self.notification_id, e)

    def __repr__(self) -> str:
        return f"FreedesktopHandle({self.notification_id})"


class FreedesktopTransport(NotificationTransport):
    """Desktop notifications via org.freedesktop.Notifications."""

    name: str = "freedesktop"

    def __init__(self, app_name: str = "upower-notify", *, bus: Optional[MessageBus] = None) -> None:
        self.app_name = app_name
        self._bus = bus
        self._owns_bus = bus is None
        self._interface: Any = None

    async def connect(self) -> None:
        if self._bus is None:
            self._bus = await MessageBus(bus_type=BusType.SESSION).connect()
        introspection = await self._bus.introspect(NOTIFICATIONS_SERVICE, NOTIFICATIONS_PATH)
        proxy = self._bus.get_proxy_object(
            NOTIFICATIONS_SERVICE, NOTIFICATIONS_PATH, introspection
        )
        self._interface = proxy.get_interface(NOTIFICATIONS_SERVICE)

    async def disconnect(self) -> None:
        if self._bus is not None and self._owns_bus:
            self._bus.disconnect()
            self._bus = None
        self._interface = None

    async def show(
        self,
        summary: str,
        body: str,
        *,
        icon: str = "",
        urgency: Urgency = Urgency.NORMAL,
        timeout: int = 5000,
    ) -> NotificationHandle:
        if self._interface is None:
            await self.connect()

        hints = {"urgency": Variant("y", urgency.level)}
        notification_id = await self._interface.call_notify(
            self.app_name,  # app_name
            0,  # replaces_id
            icon,
            summary,
            body,
            [],  # actions
            hints,
            timeout,  # expire_timeout, 0 = never
        )
        logger.debug("Notification %d shown: %s", notification_id, summary)
        return FreedesktopHandle(self._interface, notification_id)
