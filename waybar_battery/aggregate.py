from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import UnexpectedOutput


class DeviceState(Enum):
    PENDING_CHARGE = "pending-charge"
    CHARGING = "charging"
    DISCHARGING = "discharging"
    FULLY_CHARGED = "fully-charged"

    @classmethod
    def parse(cls, token: str) -> DeviceState:
        try:
            return cls(token)
        except ValueError:
            raise UnexpectedOutput(f"Unknown battery state: {token!r}") from None


def merge_state(current: DeviceState, other: DeviceState) -> DeviceState:
    """Fold one device's state into the running combined state.

    The fold is order-sensitive: a pending-charge device seen while the
    accumulator is still fully-charged turns the pack into discharging,
    but a fully-charged device never changes the accumulator. Whichever
    device reports charging or discharging last wins.
    """
    if other is DeviceState.PENDING_CHARGE:
        if current is DeviceState.FULLY_CHARGED:
            return DeviceState.DISCHARGING
        return current
    if other is DeviceState.FULLY_CHARGED:
        return current
    return other


def fold_states(states: Iterable[DeviceState]) -> DeviceState:
    combined = DeviceState.FULLY_CHARGED
    for state in states:
        combined = merge_state(combined, state)
    return combined


@dataclass(frozen=True)
class DeviceReading:
    """Fields of interest from one `upower -i` dump, in upower's order."""

    device: str
    states: tuple[DeviceState, ...] = ()
    energy: float = 0.0
    energy_full: float = 0.0
    energy_rate: float = 0.0


@dataclass(frozen=True)
class Totals:
    energy: float
    energy_full: float
    energy_rate: float
    state: DeviceState


def aggregate_readings(readings: Iterable[DeviceReading]) -> Totals:
    group = list(readings)
    if not group:
        raise ValueError("Cannot aggregate an empty reading group")

    return Totals(
        energy=sum(reading.energy for reading in group),
        energy_full=sum(reading.energy_full for reading in group),
        energy_rate=sum(reading.energy_rate for reading in group),
        state=fold_states(state for reading in group for state in reading.states),
    )
