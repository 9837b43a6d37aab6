"""
Event-to-action engine: resolver, channel state, command runner and
the dispatcher that ties them together.
"""

from upower_notify.engine.channel_state import ChannelState
from upower_notify.engine.commands import CommandRunner
from upower_notify.engine.dispatcher import Dispatcher, MetricsSource
from upower_notify.engine.resolver import ActionResolver

__all__ = [
    "ActionResolver",
    "ChannelState",
    "CommandRunner",
    "Dispatcher",
    "MetricsSource",
]
