import pytest

from waybar_battery.snapshot import BatterySnapshot
from waybar_battery.state import (
    DisplayState,
    StatusTracker,
    Urgency,
    build_notification,
    classify,
    css_class,
    next_state,
)


def _discharging(
    percentage: float, hours_left: float | None = 1.0
) -> BatterySnapshot:
    return BatterySnapshot(
        percentage=percentage, discharging=True, hours_left=hours_left
    )


@pytest.mark.parametrize(
    ("percentage", "expected"),
    [
        (0.0, DisplayState.CRITICAL),
        (5.999, DisplayState.CRITICAL),
        (6.0, DisplayState.LOW),
        (15.999, DisplayState.LOW),
        (16.0, DisplayState.NORMAL),
        (100.0, DisplayState.NORMAL),
    ],
)
def test_thresholds(percentage, expected):
    assert classify(_discharging(percentage)) == expected


def test_not_discharging_is_charging_at_any_level():
    assert classify(BatterySnapshot(3.0, False, None)) == DisplayState.CHARGING
    assert classify(BatterySnapshot(100.0, False, None)) == DisplayState.CHARGING


def test_next_state_only_reports_changes():
    first = next_state(DisplayState.UNINITIALIZED, _discharging(50.0))
    assert first == DisplayState.NORMAL
    assert next_state(DisplayState.NORMAL, _discharging(40.0)) is None
    assert next_state(DisplayState.NORMAL, _discharging(10.0)) == DisplayState.LOW


def test_first_snapshot_leaves_uninitialized_and_resets_flag():
    tracker = StatusTracker()

    notification = tracker.update(_discharging(50.0, hours_left=None))

    assert tracker.state == DisplayState.NORMAL
    assert tracker.notified is False
    assert notification is None


def test_notification_waits_for_time_estimate():
    tracker = StatusTracker()
    assert tracker.update(_discharging(12.0, hours_left=None)) is None

    notification = tracker.update(_discharging(11.0, hours_left=0.5))

    assert notification is not None
    assert notification.title == "Battery Low"
    assert notification.urgency == Urgency.CRITICAL
    assert notification.body == "Battery is at 11%. Will be empty in 30 minutes."


def test_notification_sent_once_per_state():
    tracker = StatusTracker()
    assert tracker.update(_discharging(50.0)) is not None
    tracker.mark_notified()

    assert tracker.update(_discharging(49.0)) is None
    assert tracker.update(_discharging(48.0)) is None


def test_unsent_notification_is_offered_again():
    tracker = StatusTracker()
    first = tracker.update(_discharging(50.0))
    second = tracker.update(_discharging(49.0))

    assert first is not None and second is not None
    assert second.body == "Battery is at 49%. Will be empty in 1 hour."


def test_charging_notification():
    snapshot = BatterySnapshot(percentage=80.0, discharging=False, hours_left=1.25)

    notification = build_notification(DisplayState.CHARGING, snapshot, 1.25)

    assert notification.title == "Battery Charging"
    assert notification.urgency == Urgency.NORMAL
    assert notification.body == (
        "Battery is at 80%. Will be fully charged in 1 hour and 15 minutes."
    )


def test_critical_notification():
    notification = build_notification(DisplayState.CRITICAL, _discharging(4.2), 0.1)

    assert notification.title == "Battery Very Low"
    assert notification.urgency == Urgency.CRITICAL
    assert notification.body == "Battery is at 4%. Will be empty in 6 minutes."


def test_uninitialized_has_no_class_or_notification():
    with pytest.raises(ValueError):
        css_class(DisplayState.UNINITIALIZED)
    with pytest.raises(ValueError):
        StatusTracker().css_class
    with pytest.raises(ValueError):
        build_notification(DisplayState.UNINITIALIZED, _discharging(50.0), 1.0)


def test_css_classes():
    assert css_class(DisplayState.CHARGING) == "charging"
    assert css_class(DisplayState.NORMAL) == "normal"
    assert css_class(DisplayState.LOW) == "low"
    assert css_class(DisplayState.CRITICAL) == "critical"
