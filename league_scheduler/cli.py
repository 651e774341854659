"""
Command-line interface for the league scheduler.
"""

import argparse
import sys
import yaml
import pydantic
from pathlib import Path
from .config import load_config
from .ingest import load_unavailability, apply_unavailability
from .availability import check_availability
from .engine import validate_schedule
from .runner import ScheduleJob
from .formatter import format_week_lines
from .export import write_csv, write_excel


EXIT_INFEASIBLE = 2
EXIT_CANCELLED = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="League Scheduler - round-robin schedules under team unavailability"
    )

    parser.add_argument(
        "--config",
        required=True,
        help="Path to YAML league configuration file"
    )

    parser.add_argument(
        "--constraints",
        help="Path to CSV/Excel file with team unavailability (optional)"
    )

    parser.add_argument(
        "--out",
        help="Path to output file (.csv or .xlsx)"
    )

    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only check availability without searching"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        help="Cancel the search after this many seconds"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        # Load configuration
        print("Loading configuration...")
        config = load_config(args.config)

        if args.constraints:
            print("Loading team unavailability...")
            config = apply_unavailability(config, load_unavailability(args.constraints))

        if args.verbose:
            config = config.model_copy(update={'verbose': True})

        print(f"{config.n_teams} teams, {config.games_per_team} games each, "
              f"up to {config.games_per_week} games per week")
        print(f"There will be {config.weeks} weeks, and {config.byes_per_team} byes for each team")

        # Availability pre-check
        report = check_availability(config)
        print(f"Total games needed: {report.total_games_needed}")
        print(f"Total possible games: {report.total_possible_games}")

        if report.warnings:
            print("WARNINGS found in availability:")
            for warning in report.warnings:
                print(f"  - {warning}")

        if report.errors:
            print("ERRORS found in availability:")
            for error in report.errors:
                print(f"  - {error}")

        if args.check_only:
            print("Availability check complete. Exiting.")
            sys.exit(0 if report.is_feasible_upfront else EXIT_INFEASIBLE)

        # Run the search
        print("Starting search for schedule...")
        job = ScheduleJob(config, timeout_seconds=args.timeout).start()
        try:
            result = job.result()
        except KeyboardInterrupt:
            job.cancel()
            result = job.result()

        if result.cancelled:
            print(f"CANCELLED: {result.message}")
            sys.exit(EXIT_CANCELLED)

        if not result.success:
            print(f"FAILED: {result.message}")
            if args.verbose:
                print(f"Search stats: {result.stats.to_dict()}")
            sys.exit(EXIT_INFEASIBLE)

        print("\n" + "=" * 50)
        print("GENERATED SCHEDULE")
        print("=" * 50)
        for line in format_week_lines(result.schedule):
            print(line)

        violations = validate_schedule(result.schedule, config)
        if violations['errors']:
            print("ERRORS found in schedule:")
            for error in violations['errors']:
                print(f"  - {error}")
        else:
            print("\nNo errors found in schedule!")

        if violations['warnings']:
            print("WARNINGS found in schedule:")
            for warning in violations['warnings']:
                print(f"  - {warning}")

        if args.out:
            if Path(args.out).suffix.lower() == '.xlsx':
                write_excel(result, config, args.out)
            else:
                write_csv(result, config, args.out)

        stats = result.schedule.get_summary_stats()
        print(f"Total games scheduled: {stats.get('total_games', 0)}")
        print(f"Games per week: {stats.get('games_per_week', [])}")

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Invalid YAML configuration: {e}")
        sys.exit(1)
    except pydantic.ValidationError as e:
        print(f"ERROR: Invalid league configuration: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"ERROR: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
