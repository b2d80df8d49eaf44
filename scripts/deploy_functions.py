#!/usr/bin/env python3
"""
Deploy the daily tip Cloud Function and its Cloud Scheduler trigger

The function is deployed from the project root (root main.py re-exports the
entry points). Runtime secrets come from .env.yaml, which is not committed.

The function only accepts authenticated calls, so the scheduler job needs a
service account with the Cloud Functions invoker role.

Usage:
    python scripts/deploy_functions.py --project PROJECT_ID --service-account SA_EMAIL [--region REGION] [--dry-run]

Examples:
    python scripts/deploy_functions.py --project my-project --service-account tips@my-project.iam.gserviceaccount.com --dry-run
    python scripts/deploy_functions.py --project my-project --service-account tips@my-project.iam.gserviceaccount.com
"""

import argparse
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).parent.parent

FUNCTION_NAME = 'scheduled-tip'
ENTRY_POINT = 'scheduled_tip'
RUNTIME = 'python312'
JOB_NAME = 'daily-tip-of-the-day'
# Every day at 9am Pacific
SCHEDULE = '0 9 * * *'
TIME_ZONE = 'America/Los_Angeles'


def function_url(project: str, region: str, name: str = FUNCTION_NAME) -> str:
    return f"https://{region}-{project}.cloudfunctions.net/{name}"


def build_function_command(project: str, region: str, env_file: str) -> List[str]:
    """Deploys from the project root regardless of the current directory"""
    env_path = Path(env_file)
    if not env_path.is_absolute():
        env_path = PROJECT_ROOT / env_path
    return [
        'gcloud', 'functions', 'deploy', FUNCTION_NAME,
        '--gen2',
        f'--project={project}',
        f'--region={region}',
        f'--runtime={RUNTIME}',
        f'--source={PROJECT_ROOT}',
        f'--entry-point={ENTRY_POINT}',
        '--trigger-http',
        '--no-allow-unauthenticated',
        f'--env-vars-file={env_path}',
    ]


def build_scheduler_command(project: str, region: str, service_account: str) -> List[str]:
    """
    The job authenticates with an OIDC token for service_account; without
    one every call to the function is rejected with 403.
    """
    if not service_account:
        raise ValueError("A service account is required for the scheduler job to invoke the function")
    return [
        'gcloud', 'scheduler', 'jobs', 'create', 'http', JOB_NAME,
        f'--project={project}',
        f'--location={region}',
        f'--schedule={SCHEDULE}',
        f'--time-zone={TIME_ZONE}',
        f'--uri={function_url(project, region)}',
        '--http-method=POST',
        f'--oidc-service-account-email={service_account}',
    ]


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Deploy the daily tip function and scheduler job",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--project", required=True, help="GCP project ID")
    parser.add_argument("--region", default="us-central1", help="Region for the function and job (default: us-central1)")
    parser.add_argument("--env-file", default=".env.yaml", help="Runtime environment file, relative to the project root (default: .env.yaml)")
    parser.add_argument("--service-account", required=True, help="Service account the scheduler uses to invoke the function")
    parser.add_argument("--dry-run", action="store_true", help="Print the gcloud commands without running them")
    args = parser.parse_args(argv)

    commands = [
        build_function_command(args.project, args.region, args.env_file),
        build_scheduler_command(args.project, args.region, args.service_account),
    ]

    for command in commands:
        print(shlex.join(command))
        if not args.dry_run:
            result = subprocess.run(command)
            if result.returncode != 0:
                print(f"Command failed with exit code {result.returncode}", file=sys.stderr)
                return result.returncode

    return 0


if __name__ == "__main__":
    sys.exit(main())
