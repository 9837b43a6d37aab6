"""
Core configuration for upower-notify.

Provides:
- Path constants (CONFIG_HOME, CONFIG_FILE)
- Configuration models (Config, ReactionConfig, NotificationSpec, ExecSpec)
- Config loading/saving functions
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_HOME: Path = (
    Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "upower-notify"
)
CONFIG_FILE: Path = CONFIG_HOME / "config.yaml"

DEFAULT_DEVICE = "/org/freedesktop/UPower/devices/battery_BAT0"

# expire_timeout travels as a signed 32-bit D-Bus integer
MAX_TIMEOUT_MS = 2**31 - 1


class ConfigError(ValueError):
    """Raised when the configuration file cannot be loaded or validated."""


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


class Urgency(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        """Numeric urgency as used by the freedesktop notification spec."""
        return {"low": 0, "normal": 1, "critical": 2}[self.value]


class NotificationSpec(BaseModel):
    """What to show for a single event variant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enable: bool = False
    summary: str = ""
    body: str = ""  # template, supports {time} and {percentage}
    icon: str = ""
    timeout: int = Field(default=5000, ge=0, le=MAX_TIMEOUT_MS)  # milliseconds, 0 = never expire
    urgency: Urgency = Urgency.NORMAL

    @field_validator("timeout", mode="before")
    @classmethod
    def _parse_never(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip().lower() == "never":
            return 0
        return value

    @property
    def never_expires(self) -> bool:
        return self.timeout == 0


class ExecSpec(BaseModel):
    """Shell commands spawned for a single event variant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    commands: list[str] = Field(default_factory=list)


class ReactionConfig(BaseModel):
    """Notification plus commands triggered by one event variant."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    notification: NotificationSpec = Field(default_factory=NotificationSpec)
    exec: ExecSpec = Field(default_factory=ExecSpec)


def _reaction(
    summary: str,
    body: str,
    icon: str,
    *,
    enable: bool = True,
    timeout: int = 5000,
    urgency: Urgency = Urgency.NORMAL,
) -> Any:
    return Field(
        default_factory=lambda: ReactionConfig(
            notification=NotificationSpec(
                enable=enable,
                summary=summary,
                body=body,
                icon=icon,
                timeout=timeout,
                urgency=urgency,
            )
        )
    )


class WarningLevelReactions(BaseModel):
    """One reaction per ``WarningLevel`` member."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    unknown: ReactionConfig = Field(default_factory=ReactionConfig)
    none: ReactionConfig = _reaction(
        "Battery Discharging",
        "Power levels normal. <b>{time}</b> remaining ({percentage}%)",
        "battery-good-symbolic",
        enable=False,
        urgency=Urgency.LOW,
    )
    discharging: ReactionConfig = _reaction(
        "Battery Discharging",
        "<b>{time}</b> remaining ({percentage}%)",
        "battery-good-symbolic",
        enable=False,
        urgency=Urgency.LOW,
    )
    low: ReactionConfig = _reaction(
        "Battery low",
        "Approximately <b>{time}</b> remaining ({percentage}%)",
        "battery-low-symbolic",
        timeout=30000,
    )
    critical: ReactionConfig = _reaction(
        "Battery critically low",
        "Shutting down soon unless plugged in.",
        "battery-caution-symbolic",
        timeout=0,
        urgency=Urgency.CRITICAL,
    )
    action: ReactionConfig = _reaction(
        "Battery critically low",
        "The battery is below the critical level and this computer is about to shutdown.",
        "battery-action-symbolic",
        timeout=0,
        urgency=Urgency.CRITICAL,
    )


class PowerStateReactions(BaseModel):
    """One reaction per ``PowerState`` member."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    unknown: ReactionConfig = Field(default_factory=ReactionConfig)
    charging: ReactionConfig = _reaction(
        "Charging",
        "Battery is charging ({percentage}%)",
        "battery-good-charging-symbolic",
        urgency=Urgency.LOW,
    )
    discharging: ReactionConfig = _reaction(
        "Discharging",
        "<b>{time}</b> remaining ({percentage}%)",
        "battery-good-symbolic",
        urgency=Urgency.LOW,
    )
    empty: ReactionConfig = _reaction(
        "Battery empty",
        "The battery is empty.",
        "battery-empty-symbolic",
        enable=False,
        timeout=0,
        urgency=Urgency.CRITICAL,
    )
    fully_charged: ReactionConfig = _reaction(
        "Fully charged",
        "Battery is fully charged ({percentage}%)",
        "battery-full-charged-symbolic",
        urgency=Urgency.LOW,
    )
    pending_charge: ReactionConfig = _reaction(
        "Pending charge",
        "Battery is waiting to charge ({percentage}%)",
        "battery-good-symbolic",
        enable=False,
        urgency=Urgency.LOW,
    )
    pending_discharge: ReactionConfig = _reaction(
        "Pending discharge",
        "Battery is waiting to discharge ({percentage}%)",
        "battery-good-symbolic",
        enable=False,
        urgency=Urgency.LOW,
    )


class Config(BaseModel):
    """Main configuration for upower-notify."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    device: str = DEFAULT_DEVICE
    app_name: str = "upower-notify"
    report_initial_state: bool = False
    warning_level: WarningLevelReactions = Field(default_factory=WarningLevelReactions)
    state: PowerStateReactions = Field(default_factory=PowerStateReactions)


# ---------------------------------------------------------------------------
# Config loading/saving
# ---------------------------------------------------------------------------


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay ``override`` on ``base``; mappings merge, the rest replaces."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from YAML, merged over the built-in defaults.

    A missing file yields the defaults. Anything else that goes wrong
    raises ``ConfigError``.
    """
    path = Path(path) if path else CONFIG_FILE
    logger.debug("Looking for config at: %s", path)
    if not path.exists():
        return Config()

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    merged = _deep_merge(Config().model_dump(mode="json"), data)
    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"invalid config in {path}:\n{e}") from e


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    """Save configuration to a YAML file and return its path."""
    path = Path(path) if path else CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(config.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
    )
    return path


__all__ = [
    "CONFIG_HOME",
    "CONFIG_FILE",
    "DEFAULT_DEVICE",
    "MAX_TIMEOUT_MS",
    "ConfigError",
    "Urgency",
    "NotificationSpec",
    "ExecSpec",
    "ReactionConfig",
    "WarningLevelReactions",
    "PowerStateReactions",
    "Config",
    "load_config",
    "save_config",
]
