"""Infrastructure: signal the running Waybar to refresh the module.

Waybar custom modules declare ``"signal": N`` and re-run their ``exec``
command when they receive ``SIGRTMIN+N``.  This module finds the Waybar
process with :mod:`psutil` and delivers that signal.

Rules
-----
* The signal offset is range-checked before the process table is read.
* Among several matching processes the lowest pid wins.
* ``kill(2)`` failures are classified, never swallowed.
"""

from __future__ import annotations

import logging
import os
import signal

import psutil

from wg_waybar.exceptions import (
    ProcessNotFoundError,
    SignalDeliveryError,
    SignalOutOfRangeError,
    SignalPermissionError,
    SignalTargetGoneError,
)

logger = logging.getLogger(__name__)

TARGET_PROCESS_NAME = "waybar"


def realtime_signal_range() -> tuple[int, int]:
    """Return ``(SIGRTMIN, SIGRTMAX)`` for the running platform."""
    sigrtmin = getattr(signal, "SIGRTMIN", None)
    sigrtmax = getattr(signal, "SIGRTMAX", None)
    if sigrtmin is None or sigrtmax is None:
        raise SignalDeliveryError("real-time signals are not supported on this platform")
    return int(sigrtmin), int(sigrtmax)


class WaybarNotifier:
    """Concrete :class:`~wg_waybar.core.protocols.Notifier` for Waybar."""

    def __init__(self, process_name: str = TARGET_PROCESS_NAME) -> None:
        self._process_name = process_name

    def find_target_process(self) -> int | None:
        matches = [
            proc.info["pid"]
            for proc in psutil.process_iter(["pid", "name"])
            if self._process_name in (proc.info.get("name") or "")
        ]
        return min(matches) if matches else None

    def notify(self, signal_number: int) -> None:
        sigrtmin, sigrtmax = realtime_signal_range()
        if not 0 <= signal_number <= sigrtmax - sigrtmin:
            raise SignalOutOfRangeError(
                "Invalid signal number: must be between 0 and SIGRTMAX - SIGRTMIN",
            )

        pid = self.find_target_process()
        if pid is None:
            raise ProcessNotFoundError("Could not find Waybar process")

        self.send_signal(pid, sigrtmin + signal_number)
        logger.debug("Sent SIGRTMIN+%d to Waybar (PID: %d)", signal_number, pid)

    @staticmethod
    def send_signal(pid: int, signum: int) -> None:
        """Deliver *signum* to *pid*, classifying ``kill(2)`` errors."""
        try:
            os.kill(pid, signum)
        except ProcessLookupError as exc:
            raise SignalTargetGoneError("Process does not exist") from exc
        except PermissionError as exc:
            raise SignalPermissionError("Permission denied") from exc
        except OSError as exc:
            raise SignalDeliveryError(f"other error: {exc}") from exc
