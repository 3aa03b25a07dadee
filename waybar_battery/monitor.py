from __future__ import annotations

import json
import logging
import signal
import subprocess
from functools import partial
from typing import Callable, Iterable, Iterator, Optional

from .collector import collect_snapshot
from .errors import ExecutableNotFound, MonitorExited
from .icons import icon_for
from .notify import Notifier
from .snapshot import BatterySnapshot
from .state import StatusTracker
from .upower import DEFAULT_UPOWER

log = logging.getLogger(__name__)


class MonitorProcess:
    """Own a running ``upower --monitor``; leaving the block always kills it."""

    def __init__(self, upower: str = DEFAULT_UPOWER) -> None:
        self.upower = upower
        try:
            self.process = subprocess.Popen(
                [upower, "--monitor"], stdout=subprocess.PIPE, text=True
            )
        except FileNotFoundError:
            raise ExecutableNotFound(f"{upower} executable not found") from None
        log.debug("Started %s --monitor (pid %d)", upower, self.process.pid)

    def __enter__(self) -> MonitorProcess:
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.process.poll() is None:
            self.process.kill()
        self.process.wait()
        if self.process.stdout is not None:
            self.process.stdout.close()
        log.debug("Stopped %s --monitor", self.upower)

    def events(self) -> Iterator[str]:
        if self.process.stdout is None:
            raise MonitorExited(f"{self.upower} --monitor has no output stream")
        yield from self.process.stdout

    def exit_error(self) -> MonitorExited:
        if self.process.wait() == 0:
            return MonitorExited(
                f"{self.upower} --monitor is supposed to run forever, "
                "but it closed successfully."
            )
        return MonitorExited(f"{self.upower} --monitor was closed.")


def _exit_on_signal(signum: int, frame: object) -> None:
    raise SystemExit(128 + signum)


def exit_on_termination_signals() -> None:
    """Turn SIGTERM and SIGHUP into SystemExit so cleanup blocks still run."""
    for signum in (signal.SIGTERM, signal.SIGHUP):
        signal.signal(signum, _exit_on_signal)


def status_line(tracker: StatusTracker, snapshot: BatterySnapshot) -> str:
    return json.dumps(
        {
            "text": icon_for(snapshot.percentage, snapshot.discharging),
            "class": tracker.css_class,
            "tooltip": snapshot.tooltip(),
        },
        ensure_ascii=False,
    )


def emit(line: str) -> None:
    print(line, flush=True)


class BatteryWidget:
    """Turn each monitor event into one waybar status line."""

    def __init__(
        self,
        read_snapshot: Callable[[], Optional[BatterySnapshot]],
        notifier: Notifier,
        write: Callable[[str], None] = emit,
    ) -> None:
        self.read_snapshot = read_snapshot
        self.notifier = notifier
        self.write = write
        self.tracker = StatusTracker()

    def handle_event(self) -> Optional[str]:
        snapshot = self.read_snapshot()
        if snapshot is None:
            return None

        notification = self.tracker.update(snapshot)
        if notification is not None:
            self.notifier.send(notification)
            self.tracker.mark_notified()

        line = status_line(self.tracker, snapshot)
        self.write(line)
        return line

    def run(self, events: Iterable[str]) -> None:
        for _ in events:
            self.handle_event()


def run_monitor(upower: str, notifier: Notifier) -> None:
    """Run until the monitor stops; always raises MonitorExited at the end."""
    widget = BatteryWidget(partial(collect_snapshot, upower), notifier)
    with MonitorProcess(upower) as monitor:
        widget.run(monitor.events())
        raise monitor.exit_error()
