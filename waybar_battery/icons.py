from __future__ import annotations

import math

# Nerd font glyphs, one per ten-point band from 0 to 100.
DISCHARGING_ICONS = (
    "\U000f008e",
    "\U000f007a",
    "\U000f007b",
    "\U000f007c",
    "\U000f007d",
    "\U000f007e",
    "\U000f007f",
    "\U000f0080",
    "\U000f0081",
    "\U000f0082",
    "\U000f0079",
)

CHARGING_ICONS = (
    "\U000f089f",
    "\U000f089c",
    "\U000f0086",
    "\U000f0087",
    "\U000f0088",
    "\U000f089d",
    "\U000f0089",
    "\U000f089e",
    "\U000f008a",
    "\U000f008b",
    "\U000f0085",
)


def percentage_band(percentage: float) -> int:
    if not 0.0 <= percentage <= 100.0:
        raise ValueError(f"percentage out of range: {percentage!r}")
    return int(math.floor(percentage / 10.0) * 10)


def icon_for(percentage: float, discharging: bool) -> str:
    table = DISCHARGING_ICONS if discharging else CHARGING_ICONS
    return table[percentage_band(percentage) // 10]
