"""Single-slot debounce timer for search input."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

logger = logging.getLogger(__name__)

JOB_ID = "search"
_UNSET = object()


class SearchDebouncer:
    """
    Coalesce rapid search input into a single evaluation.

    Each submit() replaces the pending job, so only the most recent value
    fires once `delay` seconds pass without another submit.
    """

    def __init__(
        self,
        callback: Callable[[str], None],
        delay: float = 0.3,
        scheduler: BackgroundScheduler | None = None,
    ):
        self.callback = callback
        self.delay = delay
        self._scheduler = scheduler or BackgroundScheduler(timezone=timezone.utc)
        self._lock = threading.Lock()
        self._pending: object = _UNSET

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not _UNSET

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()

    def submit(self, value: str) -> None:
        """Schedule evaluation of `value`, superseding any pending one."""
        self.start()
        with self._lock:
            self._pending = value
            self._scheduler.add_job(
                self._fire,
                "date",
                run_date=datetime.now(timezone.utc) + timedelta(seconds=self.delay),
                id=JOB_ID,
                replace_existing=True,
            )
        logger.debug(f"Search scheduled in {self.delay}s: {value!r}")

    def flush(self) -> None:
        """Run the pending evaluation now, if there is one."""
        self._remove_job()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending evaluation without running it."""
        self._remove_job()
        with self._lock:
            self._pending = _UNSET

    def shutdown(self) -> None:
        self.cancel()
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def _remove_job(self) -> None:
        try:
            self._scheduler.remove_job(JOB_ID)
        except JobLookupError:
            pass

    def _fire(self) -> None:
        with self._lock:
            value, self._pending = self._pending, _UNSET
        if value is _UNSET:
            return
        self.callback(value)
