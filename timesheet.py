"""Per-day worked time, parsed from and serialized to the report format."""

from bisect import bisect_left
from datetime import date, timedelta

from errors import FormatError, ParseError
from models import Entry
from patterns import Patterns
from utils import format_date, format_duration, parse_date, parse_duration

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class Timesheet:
    """Entries in strictly ascending date order, at most one per date."""

    def __init__(self, entries: list[Entry] | None = None):
        self.entries: list[Entry] = entries or []

    @classmethod
    def parse(cls, report: str) -> "Timesheet":
        """Parse report text.

        Subtotal lines are skipped; they are regenerated on serialize.
        Entries must already be in ascending date order.

        Raises:
            ParseError: on a malformed, duplicated or out-of-order line.
        """
        entries: list[Entry] = []
        for line_number, line in enumerate(report.split("\n"), start=1):
            line = line.strip()
            if not line or Patterns.TOTAL_LINE.match(line):
                continue

            pieces = line.split(" ")
            if len(pieces) != 2:
                raise ParseError(
                    f"Line {line_number}: expected '<date> <duration>', got '{line}'",
                    line_number, line,
                )
            try:
                entry = Entry(parse_date(pieces[0]), parse_duration(pieces[1]))
            except FormatError as e:
                raise ParseError(f"Line {line_number} '{line}': {e}", line_number, line) from e

            if entries and entry.date <= entries[-1].date:
                raise ParseError(
                    f"Line {line_number} '{line}': date is not after {format_date(entries[-1].date)}",
                    line_number, line,
                )
            entries.append(entry)
        return cls(entries)

    def serialize(self) -> str:
        """Render entries with a subtotal after each month."""
        blocks = []
        lines: list[str] = []
        total = timedelta(0)
        for i, entry in enumerate(self.entries):
            total += entry.worked
            lines.append(f"{format_date(entry.date)} {format_duration(entry.worked)}")

            following = self.entries[i + 1] if i + 1 < len(self.entries) else None
            if following is None or not _same_month(entry.date, following.date):
                month = MONTH_NAMES[entry.date.month - 1]
                lines.append(f"Total for {month} {entry.date.year} {format_duration(total)}")
                blocks.append("\n".join(lines))
                lines = []
                total = timedelta(0)

        if not blocks:
            return ""
        return "\n\n".join(blocks) + "\n"

    def _index(self, day: date) -> int:
        return bisect_left(self.entries, day, key=lambda e: e.date)

    def add_hours(self, day: date, delta: timedelta) -> None:
        """Add time to a day, inserting the day in order if it is new."""
        i = self._index(day)
        if i < len(self.entries) and self.entries[i].date == day:
            worked = self.entries[i].worked + delta
            if worked < timedelta(0):
                raise ValueError(f"Worked time for {format_date(day)} would be negative")
            self.entries[i].worked = worked
            return

        if delta < timedelta(0):
            raise ValueError(f"Worked time for {format_date(day)} would be negative")
        self.entries.insert(i, Entry(day, delta))

    def get_hours(self, day: date) -> timedelta:
        """Worked time for a day, zero if there is no entry."""
        i = self._index(day)
        if i < len(self.entries) and self.entries[i].date == day:
            return self.entries[i].worked
        return timedelta(0)

    def latest_entry(self) -> Entry | None:
        return self.entries[-1] if self.entries else None

    def entries_between(self, start: date, end: date) -> list[Entry]:
        """Entries from start to end, both inclusive."""
        lo = self._index(start)
        hi = bisect_left(self.entries, end + timedelta(days=1), key=lambda e: e.date)
        return self.entries[lo:hi]

    def month_total(self, year: int, month: int) -> timedelta:
        first = date(year, month, 1)
        following = date(year + month // 12, month % 12 + 1, 1)
        entries = self.entries_between(first, following - timedelta(days=1))
        return sum((e.worked for e in entries), timedelta(0))


def _same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)
