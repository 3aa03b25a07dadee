from __future__ import annotations

import math


def _plural_suffix(value: int, singular: str, plural: str) -> str:
    return singular if value == 1 else plural


def format_hours(hours_left: float) -> str:
    """Render fractional hours as e.g. "1 hour and 59 minutes".

    Minutes are truncated, never rounded, so 1.9999 hours stays below two
    hours. Zero-valued clauses are left out entirely. A negative estimate
    (more energy than the reported full capacity) has its hour clause
    clamped at zero.
    """
    whole_hours = math.floor(hours_left)
    minutes = math.floor((hours_left - whole_hours) * 60)
    hours = max(whole_hours, 0)

    parts = []
    if hours:
        parts.append(f"{hours} {_plural_suffix(hours, 'hour', 'hours')}")
    if minutes:
        parts.append(f"{minutes} {_plural_suffix(minutes, 'minute', 'minutes')}")
    return " and ".join(parts)


def format_percentage(percentage: float) -> str:
    return f"{math.floor(percentage)}%"
