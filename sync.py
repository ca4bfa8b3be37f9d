"""Reconcile the local report with the remote copy.

Last writer wins, judged by modification time. If both sides changed
since the previous sync, the older side's edits are lost; the winning
content is printed so the loss can be noticed and repaired by hand.
"""

from datetime import datetime
from enum import Enum
from typing import Protocol

from models import RemoteReport
from report_store import ReportStore


class RemoteStore(Protocol):
    def get(self) -> RemoteReport: ...

    def put(self, report: str) -> None: ...


class SyncDirection(Enum):
    REMOTE_WINS = "remote"
    LOCAL_WINS = "local"


class SyncOutcome(Enum):
    UNCHANGED = "unchanged"
    LOCAL_UPDATED = "local updated"
    REMOTE_UPDATED = "remote updated"


def reports_equal(a: str, b: str) -> bool:
    return a.strip() == b.strip()


def decide_direction(local_modified: datetime | None, remote_modified: datetime) -> SyncDirection:
    """Pick the side whose content should be kept."""
    if local_modified is None:
        return SyncDirection.REMOTE_WINS
    if local_modified < remote_modified:
        return SyncDirection.REMOTE_WINS
    return SyncDirection.LOCAL_WINS


def sync_report(store: ReportStore, remote: RemoteStore) -> SyncOutcome:
    """Make the local and remote reports equal.

    Nothing is written if fetching the remote report fails.
    """
    report = store.load()
    local_modified = store.last_modified()
    res = remote.get()

    if reports_equal(report, res.report):
        return SyncOutcome.UNCHANGED

    if decide_direction(local_modified, res.last_updated) is SyncDirection.REMOTE_WINS:
        print(f"[*] Updating local file from gist. New content:\n{res.report.strip()}")
        store.save(res.report)
        return SyncOutcome.LOCAL_UPDATED

    print(f"[*] Updating gist from local file. New content:\n{report.strip()}")
    remote.put(report)
    return SyncOutcome.REMOTE_UPDATED
