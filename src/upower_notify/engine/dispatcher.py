"""
Dispatcher — the event reactor.

Races every watched property stream against a cancellation event,
takes one ready event at a time and drives it through
resolve -> commands -> close previous notification -> show new one.
Handling of one event always runs to completion before the next is
picked, so channels only interleave between events.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterable, AsyncIterator, Mapping, Optional, Protocol

from upower_notify.core import Config
from upower_notify.core.events import PowerState, WarningLevel
from upower_notify.core.formatting import render_template
from upower_notify.core.metrics import MetricsSnapshot
from upower_notify.engine.channel_state import ChannelState
from upower_notify.engine.commands import CommandRunner
from upower_notify.engine.resolver import ActionResolver
from upower_notify.notifications.channel import NotificationTransport

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


class MetricsSource(Protocol):
    async def get_metrics(self) -> MetricsSnapshot: ...


async def _next_event(iterator: AsyncIterator[Any]) -> Any:
    try:
        return await iterator.__anext__()
    except StopAsyncIteration:
        return _EXHAUSTED


class Dispatcher:
    """Turns device events into commands and notifications."""

    def __init__(
        self,
        config: Config,
        *,
        metrics: MetricsSource,
        transport: NotificationTransport,
        commands: Optional[CommandRunner] = None,
        resolver: Optional[ActionResolver] = None,
    ) -> None:
        self.config = config
        self.metrics = metrics
        self.transport = transport
        self.commands = commands or CommandRunner()
        self.resolver = resolver or ActionResolver(config)
        self.channels: dict[str, ChannelState] = {}

    def channel(self, name: str) -> ChannelState:
        if name not in self.channels:
            self.channels[name] = ChannelState(name)
        return self.channels[name]

    async def handle(self, channel_name: str, event: WarningLevel | PowerState) -> None:
        """Run the full reaction for one event on one channel."""
        channel = self.channel(channel_name)
        reaction = self.resolver.resolve(event)

        await self.commands.run_all(reaction.exec.commands)

        await channel.close_active()

        spec = reaction.notification
        if not spec.enable:
            return

        metrics = await self.metrics.get_metrics()
        body = render_template(spec.body, metrics)
        logger.info("Sending notification: %s", spec.summary)
        handle = await self.transport.show(
            spec.summary,
            body,
            icon=spec.icon,
            urgency=spec.urgency,
            timeout=spec.timeout,
        )
        channel.replace(handle)

    async def run(
        self,
        streams: Mapping[str, AsyncIterable[Any]],
        cancel: asyncio.Event,
    ) -> None:
        """Process events until ``cancel`` is set or every stream ends.

        Errors from the metrics source or the transport propagate.
        """
        order = list(streams)
        iterators = {name: streams[name].__aiter__() for name in order}
        for name in order:
            self.channel(name)

        pending: dict[str, asyncio.Task[Any]] = {
            name: asyncio.create_task(_next_event(iterators[name])) for name in order
        }
        cancel_task = asyncio.create_task(cancel.wait())
        last_served = -1

        try:
            while pending:
                if cancel.is_set():
                    break

                await asyncio.wait(
                    [cancel_task, *pending.values()],
                    return_when=asyncio.FIRST_COMPLETED,
                )
                if cancel.is_set():
                    break

                name = self._pick_ready(order, pending, last_served)
                event = pending.pop(name).result()
                if event is _EXHAUSTED:
                    logger.info("%s stream ended", name)
                    continue

                last_served = order.index(name)
                pending[name] = asyncio.create_task(_next_event(iterators[name]))

                logger.info("Received event: %s::%s", type(event).__name__, event.name)
                await self.handle(name, event)
            else:
                logger.info("All event streams ended")
        finally:
            cancel_task.cancel()
            for task in pending.values():
                task.cancel()
            await asyncio.gather(cancel_task, *pending.values(), return_exceptions=True)

        logger.info("Exiting...")

    @staticmethod
    def _pick_ready(
        order: list[str],
        pending: Mapping[str, asyncio.Task[Any]],
        last_served: int,
    ) -> str:
        """First ready channel after the one served last, wrapping around."""
        count = len(order)
        for offset in range(1, count + 1):
            name = order[(last_served + offset) % count]
            task = pending.get(name)
            if task is not None and task.done():
                return name
        raise RuntimeError("woke up with no ready stream")
