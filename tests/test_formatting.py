"""Tests for duration formatting and template rendering."""

from datetime import timedelta

import pytest

from upower_notify.core.formatting import format_duration, format_percentage, render_template
from upower_notify.core.metrics import MetricsSnapshot


class TestFormatDuration:
    @pytest.mark.parametrize(
        "seconds, expected",
        [
            (0, "0 minutes"),
            (59, "0 minutes"),
            (60, "1 minute"),
            (119, "1 minute"),
            (120, "2 minutes"),
            (3600, "1 hour"),
            (3661, "1 hour, 1 minute"),
            (7200, "2 hours"),
            (7320, "2 hours, 2 minutes"),
            (86400, "24 hours"),
        ],
    )
    def test_phrases(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_accepts_timedelta(self):
        assert format_duration(timedelta(hours=1, minutes=30, seconds=45)) == "1 hour, 30 minutes"

    def test_negative_saturates_to_zero(self):
        assert format_duration(-3600) == "0 minutes"
        assert format_duration(timedelta(seconds=-5)) == "0 minutes"

    def test_fractional_seconds_truncated(self):
        assert format_duration(119.9) == "1 minute"


class TestFormatPercentage:
    def test_keeps_fraction(self):
        assert format_percentage(42.5) == "42.5"

    def test_integral_value_has_no_decimal(self):
        assert format_percentage(80.0) == "80"

    def test_no_rounding(self):
        assert format_percentage(33.333333333) == "33.333333333"

    def test_small_values_not_in_scientific_notation(self):
        assert format_percentage(0.00001) == "0.00001"

    def test_large_values_not_in_scientific_notation(self):
        assert format_percentage(1e16) == "10000000000000000"


class TestRenderTemplate:
    def test_time_and_percentage(self):
        metrics = MetricsSnapshot(percentage=42.5, time_to_empty=90)
        assert render_template("{time} / {percentage}%", metrics) == "1 minute / 42.5%"

    def test_no_placeholders_unchanged(self):
        metrics = MetricsSnapshot(percentage=10.0, time_to_empty=60)
        template = "Shutting down soon unless plugged in."
        assert render_template(template, metrics) == template

    def test_repeated_placeholders(self):
        metrics = MetricsSnapshot(percentage=7.0, time_to_empty=3661)
        rendered = render_template("{percentage}% {time} {percentage}% {time}", metrics)
        assert rendered == "7% 1 hour, 1 minute 7% 1 hour, 1 minute"

    def test_unknown_placeholder_left_verbatim(self):
        metrics = MetricsSnapshot(percentage=50.0, time_to_empty=0)
        assert render_template("{state} {percentage}", metrics) == "{state} 50"

    def test_unknown_time_renders_zero(self):
        metrics = MetricsSnapshot(percentage=99.0, time_to_empty=0)
        assert render_template("<b>{time}</b> remaining", metrics) == "<b>0 minutes</b> remaining"
