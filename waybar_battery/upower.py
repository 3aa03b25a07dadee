from __future__ import annotations

import logging
import subprocess
from typing import Iterable

from .aggregate import DeviceReading, DeviceState
from .errors import BatteryError, ExecutableNotFound, UnexpectedOutput

log = logging.getLogger(__name__)

DEFAULT_UPOWER = "upower"

INFO_FIELDS = ("state:", "energy:", "energy-full:", "energy-rate:")


def run_upower(upower: str, *args: str) -> str:
    try:
        result = subprocess.run(
            [upower, *args], capture_output=True, text=True, check=True
        )
    except FileNotFoundError:
        raise ExecutableNotFound(f"{upower} executable not found") from None
    except subprocess.CalledProcessError as exc:
        raise BatteryError(
            f"{upower} {' '.join(args)} failed with exit code {exc.returncode}"
        ) from exc
    return result.stdout


def filter_battery_devices(lines: Iterable[str]) -> list[str]:
    # Peripherals such as wireless mice show up as hid batteries.
    return [line for line in lines if "battery" in line and "hid" not in line]


def _parse_number(field: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise UnexpectedOutput(f"Non-numeric value for {field} {raw!r}") from None


def parse_device_info(device: str, text: str) -> DeviceReading:
    states: list[DeviceState] = []
    energy = energy_full = energy_rate = 0.0

    for line in text.splitlines():
        if not any(field in line for field in INFO_FIELDS):
            continue
        words = line.split()
        if len(words) < 2:
            raise UnexpectedOutput(f"Truncated line in {device} info: {line!r}")
        name, value = words[0], words[1]

        if name == "state:":
            states.append(DeviceState.parse(value))
        elif name == "energy:":
            energy += _parse_number(name, value)
        elif name == "energy-full:":
            energy_full += _parse_number(name, value)
        elif name == "energy-rate:":
            energy_rate += _parse_number(name, value)
        else:
            raise UnexpectedOutput(f"Unexpected field in {device} info: {name!r}")

    return DeviceReading(
        device=device,
        states=tuple(states),
        energy=energy,
        energy_full=energy_full,
        energy_rate=energy_rate,
    )


def find_battery_devices(upower: str = DEFAULT_UPOWER) -> list[str]:
    return filter_battery_devices(run_upower(upower, "-e").splitlines())


def read_device(device: str, upower: str = DEFAULT_UPOWER) -> DeviceReading:
    reading = parse_device_info(device, run_upower(upower, "-i", device))
    log.debug(
        "Read %s: energy=%.2f full=%.2f rate=%.2f states=%s",
        device,
        reading.energy,
        reading.energy_full,
        reading.energy_rate,
        ",".join(state.value for state in reading.states),
    )
    return reading
