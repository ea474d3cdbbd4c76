"""Transient notification banner with a single auto-dismiss timer."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)

TASK_ADDED = "Task added"
TASK_EDITED = "Task edited"
TASK_DELETED = "Task deleted"

DISMISS_JOB_ID = "dismiss_notification"
DEFAULT_DURATION = 3.0


class Notifier:
    """
    Holds the current banner message and its visibility.

    With a scheduler, each show() schedules a dismiss job under one fixed id,
    so a new message replaces the pending timer of the previous one. Without
    a scheduler the banner stays until dismissed.

    Dismiss jobs run on the scheduler thread. Each job carries the sequence
    number of the show() that scheduled it and only hides that display.
    """

    def __init__(
        self,
        scheduler: BaseScheduler | None = None,
        duration: float = DEFAULT_DURATION,
        on_change: Callable[[], None] | None = None,
    ):
        self.scheduler = scheduler
        self.duration = duration
        self.on_change = on_change
        self.message = ""
        self.visible = False
        self._shown = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> str | None:
        """The message if the banner is showing."""
        with self._lock:
            return self.message if self.visible else None

    def show(self, message: str) -> None:
        """Display message and (re)start the dismiss timer."""
        with self._lock:
            self._shown += 1
            shown = self._shown
            self.message = message
            self.visible = True
        logger.debug(f"Notification: {message}")
        if self.scheduler is not None:
            self.scheduler.add_job(
                self._expire,
                DateTrigger(run_date=datetime.now() + timedelta(seconds=self.duration)),
                args=[shown],
                id=DISMISS_JOB_ID,
                replace_existing=True,
            )
        self._changed()

    def dismiss(self) -> None:
        """Hide the banner and cancel any pending timer."""
        if self.scheduler is not None:
            try:
                self.scheduler.remove_job(DISMISS_JOB_ID)
            except JobLookupError:
                pass
        with self._lock:
            hidden = self._hide()
        if hidden:
            self._changed()

    def _expire(self, shown: int) -> None:
        """Timer callback. Ignored if a newer message has been shown since."""
        with self._lock:
            hidden = shown == self._shown and self._hide()
        if hidden:
            self._changed()

    def _hide(self) -> bool:
        # Caller holds the lock
        if not self.visible:
            return False
        self.visible = False
        return True

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
