"""A running work session: live counter in the foreground, backups behind it."""

import os
import signal
import sys
import threading
import time
from datetime import date, timedelta

from report_store import ReportStore
from timesheet import Timesheet
from utils import format_duration

BACKUP_INTERVAL = 3.0  # seconds
REDRAW_INTERVAL = 0.5  # seconds
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


def elapsed_since(started_at: float) -> timedelta:
    """Whole seconds since a time.monotonic() reading."""
    return timedelta(seconds=int(time.monotonic() - started_at))


class BackupWriter(threading.Thread):
    """Periodically writes the report plus this session's time to the backup.

    Every tick reloads the primary report, so the time added is always
    the whole session so far, never an increment.
    """

    def __init__(
        self,
        store: ReportStore,
        today: date,
        started_at: float,
        interval: float = BACKUP_INTERVAL,
    ):
        super().__init__(name="backup-writer", daemon=True)
        self.store = store
        self.today = today
        self.started_at = started_at
        self.interval = interval
        self.error: Exception | None = None
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    def write_backup(self) -> None:
        timesheet = Timesheet.parse(self.store.load())
        timesheet.add_hours(self.today, elapsed_since(self.started_at))
        self.store.save_backup(timesheet.serialize())

    def run(self) -> None:
        try:
            while not self._cancelled.wait(self.interval):
                self.write_backup()
            # Account for the time since the last tick
            self.write_backup()
        except Exception as e:
            self.error = e


class InterruptHandler:
    """Turns Ctrl+C into a stop request.

    A second Ctrl+C while stopping exits at once, without the final
    backup write or sync.
    """

    def __init__(self, stop: threading.Event):
        self.stop = stop
        self._previous = None

    def __call__(self, signum, frame) -> None:
        if self.stop.is_set():
            sys.stdout.write(SHOW_CURSOR + "\n")
            sys.stdout.flush()
            os._exit(1)
        self.stop.set()

    def __enter__(self) -> "InterruptHandler":
        self._previous = signal.signal(signal.SIGINT, self)
        return self

    def __exit__(self, *exc) -> None:
        signal.signal(signal.SIGINT, self._previous)


def draw_duration(duration: timedelta) -> None:
    print(f"\r{format_duration(duration)}", end="", flush=True)


def run_session(
    store: ReportStore,
    today: date | None = None,
    interval: float = BACKUP_INTERVAL,
    stop: threading.Event | None = None,
) -> timedelta:
    """Count up until stopped, backing up the report as time passes.

    Without an explicit stop event, Ctrl+C ends the session, and a second
    Ctrl+C while the last backup is written exits at once. Callers that
    pass their own stop event install the InterruptHandler themselves.

    Returns:
        Time worked during this session.
    """
    if stop is None:
        stop = threading.Event()
        with InterruptHandler(stop):
            return run_session(store, today, interval, stop)

    today = today or date.today()
    started_at = time.monotonic()
    worked_before = Timesheet.parse(store.load()).get_hours(today)

    writer = BackupWriter(store, today, started_at, interval)
    writer.start()

    _count_up(worked_before, started_at, stop)

    writer.cancel()
    writer.join()
    if writer.error is not None:
        raise writer.error
    return elapsed_since(started_at)


def _count_up(worked_before: timedelta, started_at: float, stop: threading.Event) -> None:
    print(HIDE_CURSOR, end="", flush=True)
    try:
        while not stop.is_set():
            draw_duration(worked_before + elapsed_since(started_at))
            stop.wait(REDRAW_INTERVAL)
    finally:
        print(SHOW_CURSOR)
