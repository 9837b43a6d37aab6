"""
MetricsSnapshot — device readings used to render notification bodies.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MetricsSnapshot(BaseModel):
    """Current charge and estimated runtime of the watched device."""

    model_config = ConfigDict(frozen=True)

    percentage: float = 0.0
    time_to_empty: int = 0  # seconds, <= 0 means unknown
