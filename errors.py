"""Error types for the hours tracker."""


class HoursError(Exception):
    """Base class for errors reported to the user."""


class FormatError(HoursError):
    """A duration or date does not match the expected grammar."""


class ParseError(HoursError):
    """A report line does not split into a date and a duration."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class StorageError(HoursError):
    """Reading or writing a report file failed."""


class TransportError(HoursError):
    """User-friendly remote API error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DivisionError(HoursError):
    """No working days are left to spread the remaining time over."""
