"""
Notification transports for upower-notify.

The dispatcher only needs ``show()`` and ``NotificationHandle.close()``;
backends live under ``upower_notify.notifications.channels``.
"""

from upower_notify.notifications.channel import NotificationHandle, NotificationTransport

__all__ = [
    "NotificationHandle",
    "NotificationTransport",
]
