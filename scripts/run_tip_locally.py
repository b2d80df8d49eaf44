#!/usr/bin/env python3
"""
Run the tip pipeline locally

Usage:
    python scripts/run_tip_locally.py [--category NAME] [--seed N] [--dry-run]

Examples:
    python scripts/run_tip_locally.py --list-categories
    python scripts/run_tip_locally.py --dry-run          # generate only, no email/SMS
    python scripts/run_tip_locally.py --category htmlcss --seed 7
    python scripts/run_tip_locally.py                    # full run, sends email and SMS
"""

import argparse
import dataclasses
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tips.lib.app_config import get_config
from tips.lib.logging_config import setup_logging
from tips.models import DispatchReport, DeliveryResult
from tips.services.catalog_service import WORKBOOK_ERRORS, list_categories
from tips.services.completion_service import SystemRandomSource
from tips.tip_dispatcher import dispatch_tip
from tips.tip_scheduler import STATUS_DISPATCHED, run_tip_of_the_day


def print_only_dispatcher(tip, config):
    """Stand-in dispatcher for --dry-run: prints instead of sending"""
    print("=" * 80)
    print(f"Topic: {tip.topic}")
    print("=" * 80)
    print(tip.body)
    print("=" * 80)
    skipped = DeliveryResult(channel='none', ok=False, error='dry run')
    return DispatchReport(email=skipped, sms=skipped)


def main(argv=None):
    """Main function to run the pipeline"""
    parser = argparse.ArgumentParser(
        description="Run the tip of the day pipeline locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--category", help="Workbook sheet to draw prompts from (default: TIP_CATEGORY)")
    parser.add_argument("--seed", type=int, help="Seed for prompt selection")
    parser.add_argument("--dry-run", action="store_true", help="Generate the tip and print it without sending")
    parser.add_argument("--list-categories", action="store_true", help="List workbook sheets and exit")
    args = parser.parse_args(argv)

    setup_logging()
    config = get_config()
    if args.category:
        config = dataclasses.replace(config, category=args.category)

    if args.list_categories:
        try:
            categories = list_categories(config.workbook_path)
        except WORKBOOK_ERRORS as e:
            print(f"Could not open prompt workbook {config.workbook_path}: {e}", file=sys.stderr)
            sys.exit(1)
        for name in categories:
            print(name)
        return

    print("=" * 80)
    print("Tip of the Day local run")
    print("=" * 80)
    print(f"Workbook: {config.workbook_path}")
    print(f"Category: {config.category}")
    print(f"Mode:     {'dry run' if args.dry_run else 'send email and SMS'}")
    print("=" * 80)

    status = run_tip_of_the_day(
        config=config,
        random_source=SystemRandomSource(args.seed),
        dispatcher=print_only_dispatcher if args.dry_run else dispatch_tip
    )

    print(status)
    if status != STATUS_DISPATCHED:
        sys.exit(1)


if __name__ == "__main__":
    main()
