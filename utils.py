"""Utility functions for the hours tracker.

The config file is JSON at ~/.config/hours.json. Older setups kept
api_key and gist_id in ~/.config/hours.yaml; move them to
{"gist": {"api_token": <api_key>, "gist_id": <gist_id>}}.
"""

import json
import os
from datetime import date, timedelta
from pathlib import Path

from errors import FormatError
from models import Settings
from patterns import Patterns

# File paths
CONFIG_FILE = "~/.config/hours.json"
REPORT_FILE = "hours.txt"
BACKUP_FILE = "hours.bak.txt"


def format_duration(duration: timedelta) -> str:
    """Render a duration as HH:MM:SS, dropping fractions of a second."""
    secs = int(duration.total_seconds())
    if secs < 0:
        raise ValueError(f"Cannot format negative duration {duration}")
    mins, secs = divmod(secs, 60)
    hours, mins = divmod(mins, 60)
    return f"{hours:02}:{mins:02}:{secs:02}"


def parse_duration(s: str) -> timedelta:
    """Parse HH:MM:SS into a duration.

    The fields are summed as-is, so "00:90:00" is an hour and a half.

    Raises:
        FormatError: if the text is not three colon-separated numbers.
    """
    pieces = s.split(":")
    if len(pieces) != 3:
        raise FormatError(f"Invalid duration '{s}', expected HH:MM:SS")
    for piece in pieces:
        if not Patterns.DURATION_FIELD.fullmatch(piece):
            raise FormatError(f"Invalid duration '{s}', expected HH:MM:SS")
    hours, mins, secs = (int(p) for p in pieces)
    return timedelta(hours=hours, minutes=mins, seconds=secs)


def parse_date(s: str) -> date:
    """Parse DD.MM.YYYY into a date."""
    m = Patterns.DATE.fullmatch(s)
    if not m:
        raise FormatError(f"Invalid date '{s}', expected DD.MM.YYYY")
    day, month, year = (int(g) for g in m.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise FormatError(f"Invalid date '{s}': {e}") from e


def format_date(d: date) -> str:
    return f"{d.day:02}.{d.month:02}.{d.year}"


def load_config(path: str = CONFIG_FILE) -> dict:
    """Load the JSON config file."""
    with open(os.path.expanduser(path)) as f:
        return json.load(f)


def validate_config(config: dict, offline: bool = False) -> list[str]:
    """Validate config structure and return list of error messages.

    The gist section is only required when syncing.

    Returns:
        Empty list if valid, otherwise list of error messages.
    """
    errors = []

    for section in ["gist", "report"]:
        if section in config and not isinstance(config[section], dict):
            errors.append(f"Section '{section}' must be an object")

    if not offline:
        if "gist" not in config:
            errors.append("Missing section 'gist' in config")
        elif isinstance(config["gist"], dict):
            for key in ["api_token", "gist_id"]:
                if not config["gist"].get(key):
                    errors.append(f"Missing gist.{key}")

    report = config.get("report")
    if isinstance(report, dict) and not isinstance(report.get("directory", ""), str):
        errors.append("report.directory must be a string")

    for key in ["monthly_quota_hours", "backup_interval_s"]:
        value = config.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
            errors.append(f"{key} must be a number")

    interval = config.get("backup_interval_s")
    if isinstance(interval, (int, float)) and not isinstance(interval, bool) and interval <= 0:
        errors.append("backup_interval_s must be greater than 0")

    return errors


def load_config_safe(path: str = CONFIG_FILE, offline: bool = False) -> dict | None:
    """Load config with user-friendly error messages.

    A missing file is fine offline: the defaults are used.

    Returns:
        Config dict if valid, None if errors occurred.
    """
    if not os.path.exists(os.path.expanduser(path)):
        if offline:
            return {}
        print(f"[!] ERROR: {path} not found!")
        print()
        print("    Create it with your gist credentials:")
        print('    {"gist": {"api_token": "...", "gist_id": "..."}}')
        print()
        print("    Or run with --offline to skip syncing.")
        print("    Coming from ~/.config/hours.yaml? Its api_key becomes gist.api_token.")
        return None

    try:
        config = load_config(path)
    except json.JSONDecodeError as e:
        print(f"[!] ERROR: {path} is not valid JSON!")
        print(f"    Line {e.lineno}, column {e.colno}: {e.msg}")
        print()
        print("    Check for missing commas, quotes, or brackets.")
        return None

    if not isinstance(config, dict):
        print(f"[!] ERROR: {path} must contain a JSON object.")
        return None

    errors = validate_config(config, offline=offline)
    if errors:
        print(f"[!] ERROR: {path} is incomplete:")
        for err in errors:
            print(f"    - {err}")
        return None

    return config


def settings_from_config(config: dict) -> Settings:
    """Build Settings from a validated config dict."""
    gist = config.get("gist", {})
    report_dir = config.get("report", {}).get("directory") or "~"
    quota = config.get("monthly_quota_hours")
    return Settings(
        report_dir=Path(os.path.expanduser(report_dir)),
        api_token=gist.get("api_token"),
        gist_id=gist.get("gist_id"),
        gist_file=gist.get("file_name") or "hours",
        monthly_quota=timedelta(hours=quota) if quota is not None else None,
        backup_interval_s=float(config.get("backup_interval_s", 3)),
    )
