"""
ActionResolver — maps an event to its configured reaction.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from upower_notify.core import Config, ConfigError, ReactionConfig
from upower_notify.core.events import PowerState, WarningLevel, config_key


class ActionResolver:
    """Lookup table from every watched enum member to a ``ReactionConfig``.

    The table is built eagerly; a member without a config entry is a
    startup error, not something discovered when the event first fires.
    """

    def __init__(self, config: Config) -> None:
        # Keyed by (enum class, member): IntEnum members of different
        # enums with the same value compare equal.
        self._table: dict[tuple[type, IntEnum], ReactionConfig] = {}
        self._add(WarningLevel, config.warning_level, "warning_level")
        self._add(PowerState, config.state, "state")

    def _add(self, members: Iterable[IntEnum], section: object, section_name: str) -> None:
        for member in members:
            reaction = getattr(section, config_key(member), None)
            if not isinstance(reaction, ReactionConfig):
                raise ConfigError(
                    f"no reaction configured for {section_name}.{config_key(member)}"
                )
            self._table[(type(member), member)] = reaction

    def resolve(self, event: WarningLevel | PowerState) -> ReactionConfig:
        return self._table[(type(event), event)]
