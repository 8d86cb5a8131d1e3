"""
Main Execution Script for the PREP/GO Planner.
Loads a CSV of activities, applies one operation, and writes the result back.

Examples:
    python run_planner.py activities.csv check
    python run_planner.py activities.csv add --name "Launch" --go 10/03/2025
    python run_planner.py activities.csv delete 2
    python run_planner.py activities.csv shift 3 --days 7
    python run_planner.py activities.csv ics --out plan.ics
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from adapters import CSVImportError, generate_ics, parse_csv, to_csv
from models import Activity, SchedulingPolicy
from scheduler import ActivityPlanner, EngineConfig, MutationResult, summarize

logger = logging.getLogger("Main")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def load_activities(path: Path) -> List[Activity]:
    if not path.exists():
        logger.info(f"{path} not found, starting with an empty plan")
        return []
    return parse_csv(path.read_text(encoding="utf-8"))


def save_activities(path: Path, activities: List[Activity]) -> None:
    path.write_text(to_csv(activities), encoding="utf-8")
    logger.info(f"💾 Saved {len(activities)} activities to {path}")


def print_report(activities: List[Activity]) -> bool:
    report = summarize(activities)
    stats = report.get_statistics()

    print("\n" + "=" * 50)
    print("📊 PLAN HEALTH REPORT")
    print("=" * 50)
    for key, value in stats.items():
        print(f"{key:>16}: {value}")

    for row in report.flagged:
        print(f"⚠️  [{row.activity_id}] {row.activity_name}")
        for issue in row.issues:
            print(f"     {issue}")
    return report.is_healthy


def explain(result: MutationResult) -> None:
    if result.prep_adjustment and result.prep_adjustment.adjusted:
        print(f"ℹ️  {result.prep_adjustment.message}")
    if result.needs_confirmation:
        print(f"⚠️  {result.violation.reason}")
        print("   Re-run with --force to add it anyway.")
    elif not result.applied:
        print(f"❌ {result.violation.reason}")
    elif result.activity:
        a = result.activity
        print(f"✅ {a.activity_id}: {a.activity_name} PREP {a.prep_date} GO {a.go_date}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Schedule paired PREP/GO activity dates.")
    parser.add_argument("csv", type=Path, help="Activity CSV file (read and rewritten)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--max-backward-steps", type=int, default=None,
                        help="Days to walk back when resolving a PREP date")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Print weekend/holiday/clash report")

    add = sub.add_parser("add", help="Add an activity from its GO date")
    add.add_argument("--name", required=True)
    add.add_argument("--go", required=True, help="GO date, DD/MM/YYYY")
    add.add_argument("--prep", default=None, help="Explicit PREP date (otherwise GO minus 3 days)")
    add.add_argument("--id", default="", help="Activity id (default: next id for --prefix)")
    add.add_argument("--prefix", default=None)
    add.add_argument("--description", default="")
    add.add_argument("--strategy", default="")
    add.add_argument("--allow-weekends", action="store_true")
    add.add_argument("--allow-holidays", action="store_true")
    add.add_argument("--jurisdiction", default="ALL")
    add.add_argument("--force", action="store_true", help="Proceed despite date clashes")

    delete = sub.add_parser("delete", help="Delete the row at a position (0-based)")
    delete.add_argument("index", type=int)

    shift = sub.add_parser("shift", help="Move rows from a position forward in time")
    shift.add_argument("index", type=int)
    shift.add_argument("--days", type=int, default=None)

    ics = sub.add_parser("ics", help="Write an iCalendar file")
    ics.add_argument("--out", type=Path, required=True)
    ics.add_argument("--name", default="Activities")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    config = EngineConfig()
    if args.max_backward_steps is not None:
        config = config.model_copy(update={"max_backward_steps": args.max_backward_steps})
    planner = ActivityPlanner(config=config)

    try:
        activities = load_activities(args.csv)
    except CSVImportError as e:
        logger.error(f"❌ {e}")
        return 1

    if args.command == "check":
        return 0 if print_report(activities) else 2

    if args.command == "ics":
        args.out.write_text(generate_ics(activities, args.name), encoding="utf-8")
        logger.info(f"📅 Wrote {args.out}")
        return 0

    if args.command == "add":
        policy = SchedulingPolicy(
            allow_weekends=args.allow_weekends,
            allow_holidays=args.allow_holidays,
            jurisdiction=args.jurisdiction
        )
        draft = Activity(
            activity_id=args.id,
            activity_name=args.name,
            description=args.description,
            strategy=args.strategy,
        )
        if args.prep:
            draft = draft.model_copy(update={"prep_date": args.prep, "go_date": args.go})
            result = planner.insert(activities, draft, policy, args.prefix, confirm=args.force)
        else:
            result = planner.schedule_from_go(activities, draft, args.go, policy, args.prefix, confirm=args.force)
    else:
        try:
            if args.command == "delete":
                result = planner.delete(activities, args.index)
            else:
                result = planner.move_forward(activities, args.index, args.days)
        except IndexError as e:
            logger.error(f"❌ {e}")
            return 1

    explain(result)
    if not result.applied:
        return 2

    save_activities(args.csv, result.activities)
    if result.has_conflicts:
        print("⚠️  The plan now has date clashes or PREP/GO ordering problems. Run 'check'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
