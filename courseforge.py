#!/usr/bin/env python3
"""CourseForge timetable command-line tool.

Projects the recurring lecture schedule stored in Firestore onto upcoming
dates (optionally exporting an iCalendar .ics file) and computes student
levels from index numbers.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional

from timetable import calculate_student_level, project
from timetable.config import get_horizon_days, get_timezone
from timetable.firestore_source import FirestoreSource
from transformer import ICalTransformer


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def non_negative_int(value: str) -> int:
    try:
        days = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number of days: '{value}'.")
    if days < 0:
        raise argparse.ArgumentTypeError("Number of days must not be negative.")
    return days


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="courseforge",
        description="CourseForge timetable utilities.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  courseforge upcoming --days 14
  courseforge upcoming --lecturer <UID> --output my_lectures.ics
  courseforge level PS/ITC/21/0001 --date 2024-09-01
        """
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--timezone",
        default=None,
        help="Timezone for lecture times (default: COURSEFORGE_TIMEZONE or Africa/Accra)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    upcoming_parser = subparsers.add_parser(
        "upcoming",
        help="List upcoming lecture occurrences"
    )
    upcoming_parser.add_argument(
        "--lecturer",
        default=None,
        help="Only include lectures taught by this lecturer id"
    )
    upcoming_parser.add_argument(
        "--days",
        type=non_negative_int,
        default=None,
        help="Number of days to look ahead (default: COURSEFORGE_HORIZON_DAYS or 7)"
    )
    upcoming_parser.add_argument(
        "-o", "--output",
        default=None,
        help="Also write the occurrences to this .ics file"
    )

    level_parser = subparsers.add_parser(
        "level",
        help="Calculate a student's level from their index number"
    )
    level_parser.add_argument(
        "index_number",
        help="Student index number, e.g. PS/ITC/21/0001"
    )
    level_parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Reference date (format: YYYY-MM-DD). Default: today"
    )

    return parser


def run_upcoming(args: argparse.Namespace, source: Optional[FirestoreSource] = None) -> None:
    """Fetch schedules, project them and print or export the occurrences."""
    tz = get_timezone(args.timezone)
    days = args.days if args.days is not None else get_horizon_days()

    output_path: Optional[str] = args.output
    if output_path and not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    source = source or FirestoreSource()
    schedules = source.fetch_schedules(lecturer_id=args.lecturer)
    print(f"Found {len(schedules)} recurring lectures.")

    now = datetime.now(tz)
    occurrences = project(schedules, now, days, now=now)

    if not occurrences:
        print(f"No lectures in the next {days} days.")
    for occurrence in occurrences:
        location = f" ({occurrence.location})" if occurrence.location else ""
        print(
            f"{occurrence.start_at:%a %Y-%m-%d %H:%M}-{occurrence.end_at:%H:%M}  "
            f"{occurrence.label}{location}"
        )

    if output_path:
        transformer = ICalTransformer(timezone=tz)
        transformer.transform(occurrences)
        transformer.save(output_path)
        print(f"Schedule saved to: {output_path}")


def run_level(args: argparse.Namespace) -> None:
    today = args.date or datetime.now(get_timezone(args.timezone)).date()
    print(calculate_student_level(args.index_number, today))


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the command-line tool."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        if args.command == "upcoming":
            run_upcoming(args)
        else:
            run_level(args)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logging.getLogger(__name__).debug("Unexpected error", exc_info=True)
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
