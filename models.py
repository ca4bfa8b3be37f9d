"""Data models for the hours tracker."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path


@dataclass
class Entry:
    """Time worked on a single calendar day."""

    date: date
    worked: timedelta


@dataclass
class RemoteReport:
    """A report as fetched from the remote copy."""

    report: str
    last_updated: datetime  # timezone-aware


@dataclass
class Settings:
    """Configuration threaded into the store, the client and the session."""

    report_dir: Path
    api_token: str | None = None
    gist_id: str | None = None
    gist_file: str = "hours"
    monthly_quota: timedelta | None = None
    backup_interval_s: float = 3.0

    @property
    def can_sync(self) -> bool:
        return bool(self.api_token and self.gist_id)
