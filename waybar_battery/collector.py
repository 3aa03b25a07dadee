from __future__ import annotations

import logging
import os
from typing import Optional

from .aggregate import DeviceReading, aggregate_readings
from .snapshot import BatterySnapshot, build_snapshot
from .upower import DEFAULT_UPOWER, find_battery_devices, read_device

log = logging.getLogger(__name__)


def resolve_command(value: Optional[str], env_var: str, default: str) -> str:
    if value:
        return value
    env = os.environ.get(env_var)
    if env:
        return os.path.expanduser(env)
    return default


def collect_readings(upower: str = DEFAULT_UPOWER) -> list[DeviceReading]:
    return [read_device(device, upower) for device in find_battery_devices(upower)]


def collect_snapshot(upower: str = DEFAULT_UPOWER) -> Optional[BatterySnapshot]:
    """Combine every battery into one snapshot; None when there is no battery."""
    readings = collect_readings(upower)
    if not readings:
        log.warning("No battery found")
        return None
    return build_snapshot(aggregate_readings(readings))
