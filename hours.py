"""
Track today's working hours in ~/hours.txt, synced with a GitHub gist.

Usage:
    # Start a session (Ctrl+C to stop)
    hours

    # Without touching the gist
    hours --offline

    # Only show what is left of this month's quota
    hours --stats --quota 160
"""

import argparse
import threading
from datetime import timedelta

from clients import GistClient
from errors import DivisionError, HoursError
from models import Settings
from remaining_work import RemainingWork
from report_store import ReportStore
from session import InterruptHandler, run_session
from sync import sync_report
from timesheet import Timesheet
from utils import CONFIG_FILE, format_duration, load_config_safe, settings_from_config


def sync_gist(store: ReportStore, settings: Settings) -> None:
    client = GistClient(settings.api_token, settings.gist_id, settings.gist_file)
    sync_report(store, client)


def prepare(store: ReportStore, settings: Settings, offline: bool) -> None:
    """Commit a leftover backup, then bring the local report up to date."""
    store.commit_backup()
    if not offline:
        sync_gist(store, settings)


def print_remaining_work(store: ReportStore, quota: timedelta) -> None:
    timesheet = Timesheet.parse(store.load())
    if timesheet.latest_entry() is None:
        print("[*] No hours recorded yet.")
        return

    remaining = RemainingWork.compute(timesheet, quota)
    print()
    print(f"[*] Remaining this month: {format_duration(remaining.remaining_time)}")
    for include_today, label in [(True, "including today"), (False, "excluding today")]:
        days = remaining.num_working_days(include_today)
        try:
            per_day = format_duration(remaining.time_per_day(include_today))
        except DivisionError:
            print(f"    {label}: no working days left")
            continue
        print(f"    {label}: {days} working days, {per_day} per day")


def run(args: argparse.Namespace) -> int:
    config = load_config_safe(args.config, offline=args.offline)
    if config is None:
        return 1
    settings = settings_from_config(config)
    if args.quota is not None:
        settings.monthly_quota = timedelta(hours=args.quota)

    store = ReportStore.in_directory(settings.report_dir)
    prepare(store, settings, args.offline)

    if args.stats:
        if settings.monthly_quota is None:
            print("[!] ERROR: No monthly quota. Set monthly_quota_hours or pass --quota.")
            return 1
        print_remaining_work(store, settings.monthly_quota)
        return 0

    # A second Ctrl+C during the final commit or sync exits at once
    stop = threading.Event()
    with InterruptHandler(stop):
        worked = run_session(store, interval=settings.backup_interval_s, stop=stop)
        print(f"[+] Session: {format_duration(worked)}")

        prepare(store, settings, args.offline)

    if settings.monthly_quota is not None:
        print_remaining_work(store, settings.monthly_quota)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Track working hours per day",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Start a session, synced with the gist
    hours

    # Work without the gist
    hours --offline

    # Remaining hours for a 160h month
    hours --stats --quota 160
        """,
    )

    parser.add_argument("--config", default=CONFIG_FILE, help=f"Config file (default: {CONFIG_FILE})")
    parser.add_argument("--offline", action="store_true", help="Do not sync with the gist")
    parser.add_argument(
        "--stats", action="store_true", help="Show remaining work for this month and exit"
    )
    parser.add_argument("--quota", type=float, help="Monthly quota in hours (overrides config)")

    args = parser.parse_args()

    try:
        return run(args)
    except HoursError as e:
        print()
        print(f"[!] ERROR: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
