"""Tests for the alert engine: detection rules and alert lifecycle."""

from datetime import timedelta

import pytest

from config import Settings
from core.alerts import AlertEngine
from models.enums import AlertCategory
from conftest import BASE_TIME


def _categories(alerts):
    return [a.category for a in alerts]


class TestPanelDegradation:
    """Tests for the trailing-average degradation rule."""

    def test_no_alert_with_insufficient_history(self, alert_engine, hourly_readings, make_reading):
        """Fewer than 30 points never alerts, even on a total collapse."""
        for reading in hourly_readings(28):
            alert_engine.evaluate(reading)

        raised = alert_engine.evaluate(
            make_reading(timestamp=BASE_TIME + timedelta(hours=28), power_produced=0.0)
        )

        assert len(alert_engine.history) == 29
        assert AlertCategory.PANEL_DEGRADATION not in _categories(raised)

    def test_thirtieth_point_is_evaluated(self, alert_engine, hourly_readings, make_reading):
        """The reading that brings history to 30 points can itself alert."""
        for reading in hourly_readings(29):
            alert_engine.evaluate(reading)

        raised = alert_engine.evaluate(
            make_reading(timestamp=BASE_TIME + timedelta(hours=29), power_produced=0.0)
        )

        assert len(alert_engine.history) == 30
        assert _categories(raised) == [AlertCategory.PANEL_DEGRADATION]
        assert raised[0].message == "Panel degradation detected: 100% performance loss"

    def test_records_every_reading(self, alert_engine, hourly_readings):
        """Efficiency is recorded even while history is insufficient."""
        for reading in hourly_readings(5):
            alert_engine.evaluate(reading)

        assert len(alert_engine.history) == 5
        assert alert_engine.history.latest().ratio == pytest.approx(0.8)

    def test_constant_efficiency_does_not_alert(self, alert_engine, hourly_readings):
        """31 readings at the same ratio give zero degradation."""
        for reading in hourly_readings(31):
            assert alert_engine.evaluate(reading) == []

        assert alert_engine.active_alerts() == ()

    def test_half_of_average_alerts_with_severity_ten(self, alert_engine, hourly_readings, make_reading):
        """Current efficiency at 50% of the window average scores 0.5 / 0.05."""
        for reading in hourly_readings(30):
            alert_engine.evaluate(reading)

        # The window average includes the current point: c = 0.5 * (30 * 0.8 + c) / 31
        target_ratio = 30 * 0.8 / 61
        raised = alert_engine.evaluate(
            make_reading(
                timestamp=BASE_TIME + timedelta(hours=30),
                power_produced=target_ratio * 300.0,
            )
        )

        assert _categories(raised) == [AlertCategory.PANEL_DEGRADATION]
        assert raised[0].severity == pytest.approx(10.0)

    def test_total_loss_message_and_uncapped_severity(self, alert_engine, hourly_readings, make_reading):
        """Zero output is a 100% loss with severity far above 1."""
        for reading in hourly_readings(30):
            alert_engine.evaluate(reading)

        raised = alert_engine.evaluate(
            make_reading(timestamp=BASE_TIME + timedelta(hours=30), power_produced=0.0)
        )

        alert = raised[0]
        assert alert.message == "Panel degradation detected: 100% performance loss"
        assert alert.severity == pytest.approx(20.0)
        assert alert.display_severity == 1.0
        assert alert.created_at == BASE_TIME

    def test_percentage_is_truncated(self, alert_engine, hourly_readings, make_reading):
        """Message reports the loss as a truncated integer percent."""
        for reading in hourly_readings(30):
            alert_engine.evaluate(reading)

        # ratio 0.6 -> average (24 + 0.6) / 31 -> degradation 0.2439...
        raised = alert_engine.evaluate(
            make_reading(timestamp=BASE_TIME + timedelta(hours=30), power_produced=180.0)
        )

        average = (30 * 0.8 + 0.6) / 31
        degradation = 1 - 0.6 / average
        assert raised[0].message == "Panel degradation detected: 24% performance loss"
        assert raised[0].severity == pytest.approx(degradation / 0.05)

    def test_drop_just_above_threshold_alerts(self, make_reading):
        """A drop slightly over 5% is enough."""
        engine = AlertEngine(config=Settings(degradation_min_history=1))
        engine.history.record(BASE_TIME - timedelta(days=1), 1.0)

        # average (1.0 + 0.9) / 2 = 0.95 -> degradation ~0.0526
        raised = engine.evaluate(make_reading(power_produced=270.0))

        assert _categories(raised) == [AlertCategory.PANEL_DEGRADATION]

    def test_drop_equal_to_threshold_does_not_alert(self, make_reading):
        """Degradation must strictly exceed the threshold."""
        # ratio 0.5 against average 0.75
        threshold = 1.0 - (0.5 / 0.75)
        engine = AlertEngine(
            config=Settings(degradation_min_history=1, degradation_threshold=threshold)
        )
        engine.history.record(BASE_TIME - timedelta(days=1), 1.0)

        assert engine.evaluate(make_reading(power_produced=150.0)) == []

    def test_window_excludes_old_points(self, alert_engine, hourly_readings, make_reading):
        """Points older than 30 days do not count toward the average."""
        old_start = BASE_TIME - timedelta(days=60)
        for reading in hourly_readings(30, start=old_start, power_produced=300.0):
            alert_engine.evaluate(reading)
        for reading in hourly_readings(30):
            alert_engine.evaluate(reading)

        # Only the recent 0.8 points are in the window, so 0.8 is not a drop
        raised = alert_engine.evaluate(make_reading(timestamp=BASE_TIME + timedelta(hours=30)))

        assert raised == []

    def test_zero_average_does_not_alert(self, alert_engine, hourly_readings, make_reading):
        """Night-only history (all zero efficiency) never alerts."""
        for reading in hourly_readings(31, irradiance=0.0, power_produced=0.0):
            assert alert_engine.evaluate(reading) == []


class TestHighTemperature:
    """Tests for the panel temperature rule."""

    def test_threshold_is_exclusive(self, alert_engine, make_reading):
        """Exactly 70.0 degC does not alert."""
        assert alert_engine.evaluate(make_reading(temperature=70.0)) == []

    def test_just_above_threshold(self, alert_engine, make_reading):
        """70.1 degC alerts with severity ~0.01."""
        raised = alert_engine.evaluate(make_reading(temperature=70.1))

        assert _categories(raised) == [AlertCategory.HIGH_TEMPERATURE]
        assert raised[0].severity == pytest.approx(0.01)
        assert raised[0].message == "High panel temperature: 70°C"

    @pytest.mark.parametrize("temperature", [80.0, 85.5, 120.0])
    def test_severity_clamped(self, alert_engine, make_reading, temperature):
        """10 degC or more above threshold is full severity."""
        raised = alert_engine.evaluate(make_reading(temperature=temperature))

        assert raised[0].severity == 1.0

    def test_message_truncates_temperature(self, alert_engine, make_reading):
        """Temperature in the message is truncated to an integer."""
        raised = alert_engine.evaluate(make_reading(temperature=75.9))

        assert raised[0].message == "High panel temperature: 75°C"
        assert raised[0].severity == pytest.approx(0.59)

    def test_sustained_condition_repeats(self, alert_engine, hourly_readings):
        """Each hot reading raises its own alert."""
        for reading in hourly_readings(3, temperature=75.0):
            alert_engine.evaluate(reading)

        assert _categories(alert_engine.active_alerts()) == [AlertCategory.HIGH_TEMPERATURE] * 3


class TestAlertLifecycle:
    """Tests for expiry and read-only queries."""

    def test_alert_kept_through_retention_window(self, alert_engine, clock, make_reading):
        """An alert survives an evaluation exactly 7 days after creation."""
        alert_engine.evaluate(make_reading(temperature=75.0))

        clock.advance(timedelta(seconds=7 * 86400))
        alert_engine.evaluate(make_reading(timestamp=clock.now))

        assert len(alert_engine.active_alerts()) == 1

    def test_alert_expires_after_retention_window(self, alert_engine, clock, make_reading):
        """An alert is removed by the first evaluation after 7 days."""
        alert_engine.evaluate(make_reading(temperature=75.0))

        clock.advance(timedelta(seconds=7 * 86400 + 1))
        alert_engine.evaluate(make_reading(timestamp=clock.now))

        assert alert_engine.active_alerts() == ()

    def test_expiry_uses_clock_not_reading_time(self, alert_engine, clock, make_reading):
        """Old reading timestamps do not expire fresh alerts."""
        alert_engine.evaluate(make_reading(temperature=75.0))
        alert_engine.evaluate(make_reading(timestamp=BASE_TIME + timedelta(days=30)))

        assert len(alert_engine.active_alerts()) == 1

    def test_expiry_runs_before_new_alerts(self, alert_engine, clock, make_reading):
        """An expired alert is replaced by the new one from the same evaluation."""
        alert_engine.evaluate(make_reading(temperature=75.0))
        clock.advance(timedelta(days=8))

        raised = alert_engine.evaluate(make_reading(timestamp=clock.now, temperature=90.0))

        assert alert_engine.active_alerts() == tuple(raised)
        assert alert_engine.active_alerts()[0].created_at == clock.now

    def test_active_alerts_is_idempotent(self, alert_engine, make_reading):
        """Repeated reads return the same alerts and do not mutate state."""
        alert_engine.evaluate(make_reading(temperature=75.0))

        first = alert_engine.active_alerts()
        second = alert_engine.active_alerts()

        assert first == second
        assert isinstance(first, tuple)

    def test_insertion_order(self, alert_engine, clock, make_reading):
        """Alerts are listed in the order they were raised."""
        alert_engine.evaluate(make_reading(temperature=71.0))
        clock.advance(timedelta(minutes=5))
        alert_engine.evaluate(make_reading(temperature=79.0))

        severities = [a.severity for a in alert_engine.active_alerts()]
        assert severities == pytest.approx([0.1, 0.9])


class TestRuleDispatch:
    """Tests for the category dispatch table."""

    def test_every_category_has_a_rule(self):
        """Reserved categories are registered alongside the real rules."""
        assert set(AlertEngine.rules) == set(AlertCategory)
        assert AlertEngine.rules[AlertCategory.INVERTER_ISSUE] == "check_reserved"

    def test_missing_rule_fails_at_construction(self):
        """An engine that leaves a category without a rule cannot be built."""

        class IncompleteEngine(AlertEngine):
            rules = {
                category: name
                for category, name in AlertEngine.rules.items()
                if category != AlertCategory.BATTERY_DEGRADATION
            }

        with pytest.raises(ValueError, match="battery_degradation"):
            IncompleteEngine()

    def test_reserved_categories_never_fire(self, alert_engine, make_reading):
        """Readings that look bad in every respect only trip the two real rules."""
        raised = alert_engine.evaluate(
            make_reading(
                power_produced=0.0,
                battery_soc=0.0,
                panel_voltage=0.0,
                panel_current=0.0,
                temperature=95.0,
            )
        )

        assert _categories(raised) == [AlertCategory.HIGH_TEMPERATURE]
