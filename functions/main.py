"""
Cloud Functions entry point for the tip service
Uses functions-framework to run the Flask app (health check and
scheduled routes) as a Cloud Function
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tips.app import app

# functions-framework detects the Flask app and serves it on $PORT
tips_service = app
