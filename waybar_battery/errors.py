from __future__ import annotations


class BatteryError(RuntimeError):
    """Base class for failures that should stop the widget."""


class ExecutableNotFound(BatteryError):
    pass


class UnexpectedOutput(BatteryError, ValueError):
    """upower printed something this tool was not written against."""


class NotificationError(BatteryError):
    pass


class MonitorExited(BatteryError):
    pass
