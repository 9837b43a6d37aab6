"""Pytest configuration and fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from upower_notify.core import Urgency
from upower_notify.core.metrics import MetricsSnapshot
from upower_notify.notifications.channel import NotificationHandle, NotificationTransport


class RecordingHandle(NotificationHandle):
    """Handle that records close calls into the transport's log."""

    def __init__(self, transport: "RecordingTransport", number: int, summary: str):
        self.transport = transport
        self.number = number
        self.summary = summary
        self.closed = False

    async def close(self) -> None:
        self.closed = True
        self.transport.log.append(("close", self.number))

    @property
    def is_open(self) -> bool:
        return not self.closed


class RecordingTransport(NotificationTransport):
    """In-memory transport that records every show/close in order."""

    name = "recording"

    def __init__(self):
        self.log: list[tuple] = []
        self.shown: list[dict] = []
        self.handles: list[RecordingHandle] = []

    async def show(self, summary, body, *, icon="", urgency=Urgency.NORMAL, timeout=5000):
        number = len(self.handles) + 1
        self.shown.append(
            {"summary": summary, "body": body, "icon": icon, "urgency": urgency, "timeout": timeout}
        )
        self.log.append(("show", number))
        handle = RecordingHandle(self, number, summary)
        self.handles.append(handle)
        return handle

    @property
    def open_handles(self) -> list[RecordingHandle]:
        return [h for h in self.handles if h.is_open]


class StaticMetrics:
    """Metrics source returning fixed readings, counting fetches."""

    def __init__(self, percentage: float = 42.5, time_to_empty: int = 3720):
        self.snapshot = MetricsSnapshot(percentage=percentage, time_to_empty=time_to_empty)
        self.calls = 0

    async def get_metrics(self) -> MetricsSnapshot:
        self.calls += 1
        return self.snapshot


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test artifacts."""
    dirpath = tempfile.mkdtemp()
    yield Path(dirpath)
    shutil.rmtree(dirpath, ignore_errors=True)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def metrics():
    return StaticMetrics()
