"""
Daemon wiring — connects the UPower device and a notification
transport to the dispatcher and runs it until SIGINT/SIGTERM.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Any, Optional

from upower_notify.core import Config
from upower_notify.device import UPowerDevice
from upower_notify.engine import ActionResolver, Dispatcher
from upower_notify.notifications.channel import NotificationTransport
from upower_notify.notifications.channels import ConsoleTransport, FreedesktopTransport

logger = logging.getLogger(__name__)

WARNING_CHANNEL = "warning_level"
STATE_CHANNEL = "state"


def install_signal_handlers(cancel: asyncio.Event) -> None:
    """Set ``cancel`` on SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, cancel.set)


async def run_daemon(
    config: Config,
    *,
    dry_run: bool = False,
    device: Optional[UPowerDevice] = None,
    transport: Optional[NotificationTransport] = None,
    cancel: Optional[asyncio.Event] = None,
) -> None:
    """Watch the configured device until cancelled."""
    resolver = ActionResolver(config)  # fail on config gaps before touching the bus

    if transport is None:
        transport = ConsoleTransport() if dry_run else FreedesktopTransport(config.app_name)
    if device is None:
        device = UPowerDevice(config.device, report_initial_state=config.report_initial_state)
    if cancel is None:
        cancel = asyncio.Event()
        install_signal_handlers(cancel)

    logger.info("Using device %s", config.device)
    streams: dict[str, Any] = {}
    try:
        await device.connect()
        await transport.connect()
        dispatcher = Dispatcher(
            config,
            metrics=device,
            transport=transport,
            resolver=resolver,
        )
        streams = {
            WARNING_CHANNEL: device.watch_warning_level(),
            STATE_CHANNEL: device.watch_state(),
        }
        await dispatcher.run(streams, cancel)
    finally:
        for stream in streams.values():
            await stream.aclose()
        await transport.disconnect()
        await device.disconnect()


async def read_status(config: Config, device: Optional[UPowerDevice] = None) -> dict[str, Any]:
    """One-shot readout of the configured device."""
    device = device or UPowerDevice(config.device)
    try:
        await device.connect()
        metrics = await device.get_metrics()
        return {
            "device": config.device,
            "percentage": metrics.percentage,
            "time_to_empty": metrics.time_to_empty,
            "warning_level": await device.get_warning_level(),
            "state": await device.get_state(),
        }
    finally:
        await device.disconnect()
