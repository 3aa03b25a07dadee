from __future__ import annotations

import logging
import subprocess

from .errors import ExecutableNotFound, NotificationError
from .state import Notification

log = logging.getLogger(__name__)

DEFAULT_NOTIFY_SEND = "notify-send"
DEFAULT_APP_NAME = "waybar-multi-battery"


class Notifier:
    """Deliver notifications through notify-send."""

    def __init__(
        self,
        command: str = DEFAULT_NOTIFY_SEND,
        app_name: str = DEFAULT_APP_NAME,
        enabled: bool = True,
    ) -> None:
        self.command = command
        self.app_name = app_name
        self.enabled = enabled

    def build_args(self, notification: Notification) -> list[str]:
        return [
            self.command,
            "--app-name",
            self.app_name,
            "--urgency",
            notification.urgency.value,
            notification.title,
            notification.body,
        ]

    def send(self, notification: Notification) -> None:
        if not self.enabled:
            log.debug("Notifications disabled; skipping %r", notification.title)
            return
        try:
            subprocess.run(
                self.build_args(notification), capture_output=True, check=True
            )
        except FileNotFoundError:
            raise ExecutableNotFound(f"{self.command} executable not found") from None
        except subprocess.CalledProcessError as exc:
            raise NotificationError(
                f"Sending notification {notification.title!r} failed "
                f"with exit code {exc.returncode}"
            ) from exc
        log.debug("Sent notification %r: %s", notification.title, notification.body)
