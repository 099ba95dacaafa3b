from __future__ import annotations

import argparse
import json
from datetime import date
from pathlib import Path

import uvicorn

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import init_db, session_scope
from app.domains.reporting.service import REPORTS, ReportParams, run_report
from app.domains.time_entries.service import export_rows
from app.seed.seed_data import delete_mock_data, seed_mock_data, seed_users
from timerecording.analytics import parse_order_filter
from timerecording.calendars import load_calendar, parse_day
from timerecording.classifier import classify_range
from timerecording.errors import TimeRecordingError
from timerecording.exporter import default_export_name, export_report, write_entries_xlsx


def require_dev(command: str) -> None:
    if not settings.is_dev:
        raise TimeRecordingError(f"{command} is only available in the dev environment.")


def cmd_init_db(_: argparse.Namespace) -> None:
    init_db()
    print(f"Schema ready at {settings.resolved_database_url()}")


def cmd_seed_users(_: argparse.Namespace) -> None:
    with session_scope() as db:
        created = seed_users(db)
    print(f"Seeded {created} users" if created else "Users already present, nothing seeded")


def cmd_seed_mock(_: argparse.Namespace) -> None:
    require_dev("seed-mock")
    with session_scope() as db:
        created = seed_mock_data(db, calendar=load_calendar(settings.calendar_dir))
    print(f"Seeded {created} mock entries")


def cmd_delete_mock(_: argparse.Namespace) -> None:
    require_dev("delete-mock")
    with session_scope() as db:
        deleted = delete_mock_data(db)
    print(f"Deleted {deleted} mock entries")


def cmd_classify(args: argparse.Namespace) -> None:
    start = parse_day(args.date)
    end = parse_day(args.to) if args.to else start
    for day, info in classify_range(start, end, load_calendar(settings.calendar_dir)):
        print(f"{day.isoformat()}  {info.describe()}")


def cmd_export(args: argparse.Namespace) -> None:
    output = Path(args.output) if args.output else Path(default_export_name(args.manager, date.today()))
    with session_scope() as db:
        count = write_entries_xlsx(export_rows(db, args.manager), output)
    print(f"Exported {count} entries to {output}")


def cmd_report(args: argparse.Namespace) -> None:
    params = ReportParams(
        start=parse_day(args.start),
        end=parse_day(args.end),
        exclude=parse_order_filter(args.exclude),
        manager=args.manager,
        order=args.order,
    )
    with session_scope() as db:
        result = run_report(db, args.report, params)
    if args.output:
        rows = [result] if isinstance(result, dict) else result
        output_path = export_report(rows, Path(args.output), title=args.report)
        print(f"Report exported to {output_path}")
    else:
        print(json.dumps(result, default=str, indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
    uvicorn.run("app.main:app", host=args.host, port=args.port, log_level=settings.log_level.lower())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Time recording administration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database schema").set_defaults(func=cmd_init_db)
    subparsers.add_parser("seed-users", help="Create roster accounts in an empty users table").set_defaults(
        func=cmd_seed_users
    )
    subparsers.add_parser("seed-mock", help="Insert random entries (dev only)").set_defaults(func=cmd_seed_mock)
    subparsers.add_parser("delete-mock", help="Remove random entries (dev only)").set_defaults(func=cmd_delete_mock)

    classify_cmd = subparsers.add_parser("classify", help="Show the day type of a date or range")
    classify_cmd.add_argument("date")
    classify_cmd.add_argument("--to", help="Inclusive end date")
    classify_cmd.set_defaults(func=cmd_classify)

    export_cmd = subparsers.add_parser("export", help="Export entries to an xlsx workbook")
    export_cmd.add_argument("output", nargs="?")
    export_cmd.add_argument("--manager", help="Only this project manager (default: everybody)")
    export_cmd.set_defaults(func=cmd_export)

    report_cmd = subparsers.add_parser("report", help="Run an analytics report")
    report_cmd.add_argument("report", choices=list(REPORTS))
    report_cmd.add_argument("--start", required=True)
    report_cmd.add_argument("--end", required=True)
    report_cmd.add_argument("--exclude", action="append", help="Order numbers to leave out, comma separated")
    report_cmd.add_argument("--manager")
    report_cmd.add_argument("--order")
    report_cmd.add_argument("--output", help="Output file (csv, xlsx or pdf)")
    report_cmd.set_defaults(func=cmd_report)

    serve_cmd = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    serve_cmd.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except TimeRecordingError as exc:
        parser.exit(2, f"error: {exc}\n")


if __name__ == "__main__":
    main()
