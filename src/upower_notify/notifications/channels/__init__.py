"""Notification transport implementations."""

from upower_notify.notifications.channels.console import ConsoleTransport
from upower_notify.notifications.channels.freedesktop import FreedesktopTransport

__all__ = ["ConsoleTransport", "FreedesktopTransport"]
