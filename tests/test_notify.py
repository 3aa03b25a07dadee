import subprocess

import pytest

from waybar_battery import notify
from waybar_battery.errors import ExecutableNotFound, NotificationError
from waybar_battery.state import Notification, Urgency

LOW = Notification(
    title="Battery Low",
    body="Battery is at 12%. Will be empty in 40 minutes.",
    urgency=Urgency.CRITICAL,
)


def test_send_invokes_notify_send(monkeypatch):
    calls = []

    def fake_run(args, **kwargs):
        calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    notify.Notifier(command="my-notify-send").send(LOW)

    args, kwargs = calls[0]
    assert args == [
        "my-notify-send",
        "--app-name",
        "waybar-multi-battery",
        "--urgency",
        "critical",
        "Battery Low",
        "Battery is at 12%. Will be empty in 40 minutes.",
    ]
    assert kwargs["check"] is True


def test_disabled_notifier_does_nothing(monkeypatch):
    def fake_run(args, **kwargs):
        raise AssertionError("notify-send should not run")

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    notify.Notifier(enabled=False).send(LOW)


def test_failed_delivery_propagates(monkeypatch):
    def fake_run(args, **kwargs):
        raise subprocess.CalledProcessError(1, args)

    monkeypatch.setattr(notify.subprocess, "run", fake_run)

    with pytest.raises(NotificationError):
        notify.Notifier().send(LOW)


def test_missing_notify_send(tmp_path):
    with pytest.raises(ExecutableNotFound):
        notify.Notifier(command=str(tmp_path / "missing")).send(LOW)
