#!/usr/bin/env python3
"""
Flask app exposing the scheduled tip job and a health check
"""

from datetime import datetime, timezone

from flask import Flask, jsonify

from .lib.app_config import get_config
from .lib.logging_config import setup_logging
from .routes.scheduled_jobs_routes import bp as scheduled_jobs_bp
from .services.catalog_service import load_prompts
from .services.completion_service import check_completion_health
from .services.email_service import check_smtp_health

setup_logging()

app = Flask(__name__)
app.register_blueprint(scheduled_jobs_bp)


@app.route('/health', methods=['GET'])
def health_check():
    """
    Reports status of the prompt workbook, completion API and SMTP.
    Returns 200 unless the prompt workbook is unusable, 503 otherwise.
    """
    config = get_config()
    services = {}

    catalog = load_prompts(config.category, config.workbook_path)
    services['catalog'] = {
        'status': "healthy" if catalog.ok and catalog.entries else "unhealthy",
        'category': config.category,
        'prompts': len(catalog.entries),
        'error': catalog.error
    }
    services['completion'] = check_completion_health(config.completion)
    services['smtp'] = check_smtp_health(config.smtp)

    if services['catalog']['status'] == "unhealthy":
        overall_status = "unhealthy"
        http_status = 503
    elif any(s['status'] == "degraded" for s in services.values()):
        # Still 200 for degraded: the job can run and report its own failures
        overall_status = "degraded"
        http_status = 200
    else:
        overall_status = "healthy"
        http_status = 200

    return jsonify({
        'status': overall_status,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'services': services
    }), http_status
