"""Tests for the action resolver."""

import pytest

from upower_notify.core import Config, ConfigError, ExecSpec, ReactionConfig, WarningLevelReactions
from upower_notify.core.events import PowerState, WarningLevel
from upower_notify.engine.resolver import ActionResolver


class TestActionResolver:
    @pytest.mark.parametrize("event", list(WarningLevel))
    def test_every_warning_level_resolves(self, event):
        resolver = ActionResolver(Config())
        assert isinstance(resolver.resolve(event), ReactionConfig)

    @pytest.mark.parametrize("event", list(PowerState))
    def test_every_power_state_resolves(self, event):
        resolver = ActionResolver(Config())
        assert isinstance(resolver.resolve(event), ReactionConfig)

    def test_resolves_matching_entry(self):
        cfg = Config()
        resolver = ActionResolver(cfg)
        assert resolver.resolve(WarningLevel.LOW) is cfg.warning_level.low
        assert resolver.resolve(PowerState.FULLY_CHARGED) is cfg.state.fully_charged

    def test_same_value_different_enum_not_confused(self):
        cfg = Config(
            warning_level=WarningLevelReactions(
                discharging=ReactionConfig(exec=ExecSpec(commands=["warn"]))
            )
        )
        resolver = ActionResolver(cfg)
        assert int(WarningLevel.DISCHARGING) == int(PowerState.DISCHARGING)
        assert resolver.resolve(WarningLevel.DISCHARGING).exec.commands == ["warn"]
        assert resolver.resolve(PowerState.DISCHARGING) is cfg.state.discharging

    def test_plain_int_is_not_an_event(self):
        resolver = ActionResolver(Config())
        with pytest.raises(KeyError):
            resolver.resolve(3)

    def test_missing_variant_fails_at_construction(self):
        class Incomplete:
            unknown = none = discharging = low = critical = ReactionConfig()
            # no "action"

        cfg = Config.model_construct(warning_level=Incomplete(), state=Config().state)
        with pytest.raises(ConfigError, match="warning_level.action"):
            ActionResolver(cfg)
