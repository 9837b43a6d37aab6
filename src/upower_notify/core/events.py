"""
UPower enumerations watched by the daemon.

Values match the integers UPower exposes on the
``org.freedesktop.UPower.Device`` interface.
"""

from __future__ import annotations

from enum import IntEnum


class WarningLevel(IntEnum):
    UNKNOWN = 0
    NONE = 1
    DISCHARGING = 2
    LOW = 3
    CRITICAL = 4
    ACTION = 5


class PowerState(IntEnum):
    UNKNOWN = 0
    CHARGING = 1
    DISCHARGING = 2
    EMPTY = 3
    FULLY_CHARGED = 4
    PENDING_CHARGE = 5
    PENDING_DISCHARGE = 6


def config_key(event: WarningLevel | PowerState) -> str:
    """Name of the config field holding the reaction for ``event``."""
    return event.name.lower()
