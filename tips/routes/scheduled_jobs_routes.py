#!/usr/bin/env python3
"""
Scheduled jobs routes for Cloud Scheduler
"""

import logging

from flask import Blueprint, jsonify

from ..tip_scheduler import STATUS_DISPATCHED, run_tip_of_the_day

# Create logger for this module
logger = logging.getLogger(__name__)

bp = Blueprint('scheduled_jobs', __name__)


@bp.route('/scheduled/tip-of-the-day', methods=['GET', 'POST'])
def scheduled_tip_of_the_day():
    """
    Generate and deliver the daily tip.
    Called by Cloud Scheduler every day at 9:00 AM Pacific.
    """
    logger.info("[Tips] /scheduled/tip-of-the-day endpoint called")
    status = run_tip_of_the_day()

    if status == STATUS_DISPATCHED:
        return jsonify({'status': 'success', 'message': status}), 200
    return jsonify({'status': 'error', 'message': status}), 500
