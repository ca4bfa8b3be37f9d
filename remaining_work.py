"""How much of the monthly quota is left, and the pace needed to meet it."""

from dataclasses import dataclass
from datetime import date, timedelta

from errors import DivisionError
from timesheet import Timesheet


@dataclass
class RemainingWork:
    date: date
    remaining_time: timedelta

    def __post_init__(self):
        if self.remaining_time < timedelta(0):
            self.remaining_time = timedelta(0)

    @classmethod
    def compute(cls, timesheet: Timesheet, monthly_quota: timedelta) -> "RemainingWork":
        """Remaining work for the month of the latest entry.

        Raises:
            ValueError: if the timesheet has no entries.
        """
        latest = timesheet.latest_entry()
        if latest is None:
            raise ValueError("Cannot compute remaining work for an empty timesheet")

        worked = timedelta(0)
        for entry in reversed(timesheet.entries):
            if (entry.date.year, entry.date.month) != (latest.date.year, latest.date.month):
                break
            worked += entry.worked
        return cls(latest.date, monthly_quota - worked)

    def num_working_days(self, include_today: bool) -> int:
        """Weekdays left in the month, starting today or tomorrow."""
        day = self.date if include_today else self.date + timedelta(days=1)
        remaining_days = 0
        while day.month == self.date.month:
            if is_working_day(day):
                remaining_days += 1
            day += timedelta(days=1)
        return remaining_days

    def time_per_day(self, include_today: bool) -> timedelta:
        days = self.num_working_days(include_today)
        if days == 0:
            raise DivisionError(f"No working days left after {self.date.isoformat()}")
        return self.remaining_time / days


def is_working_day(day: date) -> bool:
    # No holiday calendar, just weekends
    return day.weekday() < 5
