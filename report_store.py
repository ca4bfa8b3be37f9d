"""Primary report file and its crash-recovery backup."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from errors import StorageError
from utils import BACKUP_FILE, REPORT_FILE


class ReportStore:
    """Reads and writes the report and its backup.

    The backup is written periodically during a session. On the next
    commit it replaces the primary if it is newer, so a crashed session
    loses at most one backup interval.
    """

    def __init__(self, report_path: Path, backup_path: Path):
        self.report_path = Path(report_path)
        self.backup_path = Path(backup_path)

    @classmethod
    def in_directory(cls, directory: Path) -> "ReportStore":
        directory = Path(directory)
        return cls(directory / REPORT_FILE, directory / BACKUP_FILE)

    def load(self) -> str:
        """Read the primary report, empty if it does not exist yet."""
        try:
            return self.report_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ""
        except OSError as e:
            raise StorageError(f"Cannot read {self.report_path}: {e}") from e

    def save(self, report: str) -> None:
        _write_atomic(self.report_path, report)

    def save_backup(self, report: str) -> None:
        _write_atomic(self.backup_path, report)

    def should_commit_backup(self) -> bool:
        backup_mtime = _mtime(self.backup_path)
        if backup_mtime is None:
            return False
        report_mtime = _mtime(self.report_path)
        return report_mtime is None or backup_mtime > report_mtime

    def commit_backup(self) -> bool:
        """Move the backup over the primary if the backup is newer.

        Returns:
            True if the backup was committed.
        """
        if not self.should_commit_backup():
            return False
        print(f'[*] Moving backup file "{self.backup_path}" to "{self.report_path}".')
        try:
            os.replace(self.backup_path, self.report_path)
        except OSError as e:
            raise StorageError(f"Cannot move {self.backup_path} to {self.report_path}: {e}") from e
        return True

    def last_modified(self) -> datetime | None:
        """Modification time of the primary report (UTC), None if missing."""
        mtime = _mtime(self.report_path)
        if mtime is None:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)


def _mtime(path: Path) -> float | None:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageError(f"Cannot stat {path}: {e}") from e


def _write_atomic(path: Path, content: str) -> None:
    """Write to a temp file next to path, then rename it into place.

    The temp file is removed on any failure, including an interrupt.
    """
    try:
        fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as e:
        _discard(tmp)
        raise StorageError(f"Cannot write {path}: {e}") from e
    except BaseException:
        _discard(tmp)
        raise


def _discard(tmp: str) -> None:
    try:
        os.unlink(tmp)
    except FileNotFoundError:
        pass
