"""Centralized regex patterns for the hours report format."""

import re


class Patterns:
    """Regex patterns used when reading and writing reports."""

    # Report date: 01.02.2021 (day and month may be a single digit), fullmatch only
    DATE = re.compile(r"([0-9]{1,2})\.([0-9]{1,2})\.([0-9]{4})")

    # Single duration field: hours, minutes or seconds (ASCII digits only)
    DURATION_FIELD = re.compile(r"[0-9]+")

    # Monthly subtotal: "Total for February 2021 16:17:24" (any case)
    TOTAL_LINE = re.compile(r"^total", re.IGNORECASE)

    # Gist timestamp with a trailing Z: 2021-02-03T10:11:12Z
    UTC_SUFFIX = re.compile(r"Z$")
