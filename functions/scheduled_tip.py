"""
Cloud Function for the daily tip
Triggered by Cloud Scheduler
"""

import sys
from pathlib import Path

# Deployed from the project root; make the tips package importable
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from functions_framework import http

from tips.lib.logging_config import setup_logging
from tips.tip_scheduler import STATUS_DISPATCHED, run_tip_of_the_day

setup_logging()


@http
def scheduled_tip(request):
    """Cloud Function triggered by Cloud Scheduler; the request body is ignored"""
    status = run_tip_of_the_day()
    if status == STATUS_DISPATCHED:
        return {'status': 'success', 'message': status}, 200
    return {'status': 'error', 'message': status}, 500
