"""
Cloud Functions source root. gcloud loads main.py from the deployed
directory; the entry points live under functions/.
"""

from functions.main import tips_service
from functions.scheduled_tip import scheduled_tip

__all__ = ['scheduled_tip', 'tips_service']
