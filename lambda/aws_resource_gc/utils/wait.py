"""Bounded polling for asynchronous AWS state transitions."""

from __future__ import annotations
import threading
import time
from typing import Callable

from ..exceptions import CleanupCancelled, WaitTimeoutError


def wait_until(
    timeout: float,
    interval: float,
    check: Callable[[], bool],
    cancel_event: threading.Event | None = None,
) -> None:
    """
    Poll ``check`` until it returns True.

    Each round first compares against the deadline, then evaluates ``check``.
    Exceptions from ``check`` are not retried; they propagate unchanged.
    Between rounds the wait sleeps ``interval`` seconds or until
    ``cancel_event`` is set, whichever comes first.

    Raises:
        WaitTimeoutError: the deadline passed before ``check`` returned True
        CleanupCancelled: ``cancel_event`` was set while sleeping
    """
    if cancel_event is None:
        cancel_event = threading.Event()

    deadline = time.monotonic() + timeout
    while True:
        if time.monotonic() > deadline:
            raise WaitTimeoutError(f"timeout of {timeout}s exceeded")

        if check():
            return

        if cancel_event.wait(interval):
            raise CleanupCancelled("cancelled while waiting")
