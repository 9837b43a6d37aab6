"""
ChannelState — the single notification slot of one event stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from upower_notify.notifications.channel import NotificationHandle

logger = logging.getLogger(__name__)


@dataclass
class ChannelState:
    """Holds the notification currently shown for a channel, if any."""

    name: str
    active_handle: Optional[NotificationHandle] = None

    async def close_active(self) -> None:
        """Close and forget the active notification. No-op on an empty slot."""
        handle, self.active_handle = self.active_handle, None
        if handle is not None:
            logger.debug("Closing previous %s notification", self.name)
            await handle.close()

    def replace(self, handle: NotificationHandle) -> None:
        if self.active_handle is not None:
            raise RuntimeError(f"channel {self.name!r} still holds an open notification")
        self.active_handle = handle
