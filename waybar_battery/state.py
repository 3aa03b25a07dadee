from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .snapshot import BatterySnapshot
from .timestring import format_hours, format_percentage

log = logging.getLogger(__name__)

CRITICAL_BELOW = 6.0
LOW_BELOW = 16.0


class DisplayState(Enum):
    UNINITIALIZED = "uninitialized"
    CHARGING = "charging"
    NORMAL = "normal"
    LOW = "low"
    CRITICAL = "critical"


class Urgency(Enum):
    NORMAL = "normal"
    CRITICAL = "critical"


@dataclass(frozen=True)
class NotificationTemplate:
    title: str
    verb: str
    urgency: Urgency


@dataclass(frozen=True)
class Notification:
    title: str
    body: str
    urgency: Urgency


NOTIFICATIONS = {
    DisplayState.NORMAL: NotificationTemplate(
        "Battery Discharging", "empty", Urgency.NORMAL
    ),
    DisplayState.LOW: NotificationTemplate("Battery Low", "empty", Urgency.CRITICAL),
    DisplayState.CRITICAL: NotificationTemplate(
        "Battery Very Low", "empty", Urgency.CRITICAL
    ),
    DisplayState.CHARGING: NotificationTemplate(
        "Battery Charging", "fully charged", Urgency.NORMAL
    ),
}


def classify(snapshot: BatterySnapshot) -> DisplayState:
    if not snapshot.discharging:
        return DisplayState.CHARGING
    if snapshot.percentage < CRITICAL_BELOW:
        return DisplayState.CRITICAL
    if snapshot.percentage < LOW_BELOW:
        return DisplayState.LOW
    return DisplayState.NORMAL


def next_state(
    current: DisplayState, snapshot: BatterySnapshot
) -> Optional[DisplayState]:
    """Return the new state, or None when the snapshot keeps the current one."""
    target = classify(snapshot)
    return None if target is current else target


def css_class(state: DisplayState) -> str:
    if state is DisplayState.UNINITIALIZED:
        raise ValueError("No battery snapshot has been classified yet")
    return state.value


def build_notification(
    state: DisplayState, snapshot: BatterySnapshot, hours_left: float
) -> Notification:
    template = NOTIFICATIONS.get(state)
    if template is None:
        raise ValueError(f"No notification defined for {state}")
    body = (
        f"Battery is at {format_percentage(snapshot.percentage)}. "
        f"Will be {template.verb} in {format_hours(hours_left)}."
    )
    return Notification(title=template.title, body=body, urgency=template.urgency)


@dataclass
class StatusTracker:
    """Display state plus whether it has been announced yet.

    A transition clears ``notified``; the notification itself waits for the
    first snapshot that carries a time estimate.
    """

    state: DisplayState = DisplayState.UNINITIALIZED
    notified: bool = True

    def update(self, snapshot: BatterySnapshot) -> Optional[Notification]:
        new_state = next_state(self.state, snapshot)
        if new_state is not None:
            log.info("Battery state %s -> %s", self.state.value, new_state.value)
            self.state = new_state
            self.notified = False

        if self.notified or snapshot.hours_left is None:
            return None
        return build_notification(self.state, snapshot, snapshot.hours_left)

    def mark_notified(self) -> None:
        self.notified = True

    @property
    def css_class(self) -> str:
        return css_class(self.state)
