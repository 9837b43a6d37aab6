"""
UPowerDevice — system bus adapter for a single UPower device.

Reads ``Percentage``/``TimeToEmpty`` on demand and turns
``PropertiesChanged`` signals for ``WarningLevel``/``State`` into
async streams of enum values. Signals are buffered per stream in an
``asyncio.Queue`` so nothing is lost while the dispatcher is busy.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from dbus_fast import BusType, Variant
from dbus_fast.aio import MessageBus

from upower_notify.core.events import PowerState, WarningLevel
from upower_notify.core.metrics import MetricsSnapshot

logger = logging.getLogger(__name__)

UPOWER_SERVICE = "org.freedesktop.UPower"
DEVICE_INTERFACE = "org.freedesktop.UPower.Device"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

_WATCHED: dict[str, type[WarningLevel] | type[PowerState]] = {
    "WarningLevel": WarningLevel,
    "State": PowerState,
}


def _coerce(enum_cls: Any, raw: int) -> Any:
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning("Unexpected %s value %r, treating as UNKNOWN", enum_cls.__name__, raw)
        return enum_cls.UNKNOWN


class PropertyStream:
    """Async iterator over the values a watched property changes to.

    Subscribes on construction, so changes are buffered even before
    the first ``__anext__``.
    """

    def __init__(
        self,
        device: "UPowerDevice",
        prop: str,
        initial: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self._device = device
        self.prop = prop
        self._initial = initial
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        device._subscribers[prop].append(self._queue)

    def __aiter__(self) -> "PropertyStream":
        return self

    async def __anext__(self) -> Any:
        if self._initial is not None:
            getter, self._initial = self._initial, None
            return await getter()
        return await self._queue.get()

    async def aclose(self) -> None:
        """Stop receiving changes; mirrors ``aclose`` on async generators."""
        subscribers = self._device._subscribers[self.prop]
        if self._queue in subscribers:
            subscribers.remove(self._queue)


class UPowerDevice:
    """A UPower device on the system bus."""

    def __init__(
        self,
        path: str,
        *,
        bus: Optional[MessageBus] = None,
        report_initial_state: bool = False,
    ) -> None:
        self.path = path
        self.report_initial_state = report_initial_state
        self._bus = bus
        self._owns_bus = bus is None
        self._device: Any = None
        self._properties: Any = None
        self._subscribers: dict[str, list[asyncio.Queue[Any]]] = {p: [] for p in _WATCHED}

    async def connect(self) -> None:
        if self._bus is None:
            self._bus = await MessageBus(bus_type=BusType.SYSTEM).connect()
        introspection = await self._bus.introspect(UPOWER_SERVICE, self.path)
        proxy = self._bus.get_proxy_object(UPOWER_SERVICE, self.path, introspection)
        self._device = proxy.get_interface(DEVICE_INTERFACE)
        self._properties = proxy.get_interface(PROPERTIES_INTERFACE)
        self._properties.on_properties_changed(self._on_properties_changed)
        logger.debug("Connected to UPower device %s", self.path)

    async def disconnect(self) -> None:
        if self._properties is not None:
            self._properties.off_properties_changed(self._on_properties_changed)
            self._properties = None
        if self._bus is not None and self._owns_bus:
            self._bus.disconnect()
            self._bus = None
        self._device = None

    def _on_properties_changed(
        self,
        interface_name: str,
        changed: dict[str, Variant],
        invalidated: list[str],
    ) -> None:
        if interface_name != DEVICE_INTERFACE:
            return
        for prop, enum_cls in _WATCHED.items():
            if prop not in changed:
                continue
            value = _coerce(enum_cls, changed[prop].value)
            logger.debug("%s changed to %s", prop, value.name)
            for queue in self._subscribers[prop]:
                queue.put_nowait(value)

    # -- property getters ---------------------------------------------------

    async def get_percentage(self) -> float:
        return float(await self._device.get_percentage())

    async def get_time_to_empty(self) -> int:
        return int(await self._device.get_time_to_empty())

    async def get_warning_level(self) -> WarningLevel:
        return _coerce(WarningLevel, await self._device.get_warning_level())

    async def get_state(self) -> PowerState:
        return _coerce(PowerState, await self._device.get_state())

    async def get_metrics(self) -> MetricsSnapshot:
        """Fresh readings for rendering a notification body."""
        time_to_empty = await self.get_time_to_empty()
        percentage = await self.get_percentage()
        return MetricsSnapshot(percentage=percentage, time_to_empty=time_to_empty)

    # -- change streams -----------------------------------------------------

    def watch_warning_level(self) -> PropertyStream:
        initial = self.get_warning_level if self.report_initial_state else None
        return PropertyStream(self, "WarningLevel", initial)

    def watch_state(self) -> PropertyStream:
        initial = self.get_state if self.report_initial_state else None
        return PropertyStream(self, "State", initial)
