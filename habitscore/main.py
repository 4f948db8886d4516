"""habitscore — command-line entry point.

Acts as OWNER_USER_ID from config. Examples:

  python -m habitscore.main init
  python -m habitscore.main templates "Journal" "Read 20 pages"
  python -m habitscore.main check 3 --day 2025-03-05
  python -m habitscore.main today
  python -m habitscore.main charts --mode week
"""

import argparse
import logging
import sys

from habitscore.config import LOG_LEVEL, OWNER_USER_ID
from habitscore.dates import local_today, to_day_stamp
from habitscore.db import init_db
from habitscore.series import MODES
from habitscore.templates import HABIT_TEMPLATES
from habitscore.validation import ValidationError, parse_day_stamp
import habitscore.tracker as tracker

log = logging.getLogger("habitscore")


def _report(result: tracker.ActionResult, ok_text: str) -> int:
    if result.ok:
        print(ok_text)
        return 0
    print(f"Error: {result.message}", file=sys.stderr)
    return 1


def cmd_init(args) -> int:
    tracker.ensure_user_settings(args.user)
    print("Ready.")
    return 0


def cmd_add(args) -> int:
    return _report(tracker.create_habit(args.user, args.name), f"Added: {args.name.strip()}")


def cmd_templates(args) -> int:
    if not args.names:
        for name in HABIT_TEMPLATES:
            print(f"- {name}")
        return 0
    return _report(tracker.apply_template(args.user, args.names), "Templates applied.")


def cmd_check(args) -> int:
    day = args.day or to_day_stamp(local_today())
    result = tracker.set_habit_completion(args.user, args.habit_id, day, not args.undo)
    return _report(result, f"Habit #{args.habit_id} {'unchecked' if args.undo else 'checked'} on {day}.")


def cmd_today(args) -> int:
    view = tracker.day_view(args.user, args.day)
    print(view.heading)
    if not view.habits:
        print("No habits yet. Add one with `add` or `templates`.")
    for h in view.habits:
        print(f"  {'[x]' if h['completed'] else '[ ]'} #{h['id']} {h['name']}")
    print(f"{view.summary} (pass at {view.pass_percentage}%)")
    return 0


def cmd_charts(args) -> int:
    today = None
    if args.today:
        try:
            today = parse_day_stamp(args.today, field="today")
        except ValidationError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
    charts = tracker.charts_view(args.user, today)
    print(f"This week: {charts.active_days_this_week}/7 days with progress")
    print(f"This month: {charts.active_days_this_month} days with progress")
    series = charts.series(args.mode)
    if not series:
        print("No data yet.")
    for p in series:
        print(f"  {p.label:>9}  {p.score:>4}  {p.percent:>3}%")
    return 0


def cmd_threshold(args) -> int:
    return _report(tracker.set_pass_percentage(args.user, args.value), f"Pass percentage set to {args.value}%.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="habitscore", description="Daily habit scoring")
    parser.add_argument("--user", type=int, default=OWNER_USER_ID, help="user id to act as")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="create the database and default settings")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("add", help="add a habit")
    p.add_argument("name")
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("templates", help="list starter habits, or add the given ones")
    p.add_argument("names", nargs="*")
    p.set_defaults(func=cmd_templates)

    p = sub.add_parser("check", help="mark a habit done for a day")
    p.add_argument("habit_id")
    p.add_argument("--day", help="YYYY-MM-DD, defaults to today")
    p.add_argument("--undo", action="store_true", help="uncheck instead")
    p.set_defaults(func=cmd_check)

    p = sub.add_parser("today", help="show a day's habits and score")
    p.add_argument("--day", help="YYYY-MM-DD, defaults to today")
    p.set_defaults(func=cmd_today)

    p = sub.add_parser("charts", help="show progress series")
    p.add_argument("--mode", choices=MODES, default="day")
    p.add_argument("--today", help="YYYY-MM-DD to treat as today")
    p.set_defaults(func=cmd_charts)

    p = sub.add_parser("threshold", help="set the pass percentage (0-100)")
    p.add_argument("value")
    p.set_defaults(func=cmd_threshold)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)-5s %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )
    args = build_parser().parse_args(argv)
    init_db()
    log.debug("Running %s as user %s", args.command, args.user)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
