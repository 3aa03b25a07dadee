from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .aggregate import DeviceState, Totals
from .errors import UnexpectedOutput
from .timestring import format_hours, format_percentage


@dataclass(frozen=True)
class BatterySnapshot:
    percentage: float
    discharging: bool
    hours_left: Optional[float] = None

    def tooltip(self) -> str:
        percentage = format_percentage(self.percentage)
        if self.hours_left is None:
            return percentage
        return f"{percentage} ({format_hours(self.hours_left)})"


FULL_SNAPSHOT = BatterySnapshot(percentage=100.0, discharging=False, hours_left=None)


def build_snapshot(totals: Totals) -> BatterySnapshot:
    if totals.state is DeviceState.FULLY_CHARGED:
        return FULL_SNAPSHOT

    if totals.energy_full == 0:
        raise UnexpectedOutput("Batteries report zero full energy capacity")

    percentage = (totals.energy / totals.energy_full) * 100.0
    discharging = totals.state is DeviceState.DISCHARGING

    hours_left: Optional[float] = None
    if totals.energy_rate != 0:
        if discharging:
            hours_left = totals.energy / totals.energy_rate
        else:
            hours_left = (totals.energy_full - totals.energy) / totals.energy_rate

    return BatterySnapshot(
        percentage=percentage, discharging=discharging, hours_left=hours_left
    )
