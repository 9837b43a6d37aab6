"""
Text helpers for notification bodies.

Templates understand two placeholders: ``{time}`` (time to empty, as a
phrase) and ``{percentage}`` (charge, as a bare number).
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Union

from upower_notify.core.metrics import MetricsSnapshot

TIME_PLACEHOLDER = "{time}"
PERCENTAGE_PLACEHOLDER = "{percentage}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_duration(duration: Union[timedelta, int, float]) -> str:
    """Render a span as e.g. ``"2 hours, 5 minutes"``.

    Seconds are truncated. Negative spans count as zero.
    """
    if isinstance(duration, timedelta):
        duration = duration.total_seconds()
    total_seconds = max(0, int(duration))
    hours, remainder = divmod(total_seconds, 3600)
    minutes = remainder // 60

    parts = []
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0:
        parts.append(_plural(minutes, "minute"))
    if not parts:
        return "0 minutes"
    return ", ".join(parts)


def format_percentage(value: float) -> str:
    """Shortest exact decimal: ``42.5`` -> ``"42.5"``, ``80.0`` -> ``"80"``, ``1e-05`` -> ``"0.00001"``."""
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_template(template: str, metrics: MetricsSnapshot) -> str:
    """Substitute every known placeholder in ``template``; leave others as-is."""
    return template.replace(
        TIME_PLACEHOLDER, format_duration(metrics.time_to_empty)
    ).replace(PERCENTAGE_PLACEHOLDER, format_percentage(metrics.percentage))
