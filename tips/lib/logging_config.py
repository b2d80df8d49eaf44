#!/usr/bin/env python3
"""
Centralized logging configuration for the tip pipeline.
Every module logs through logging.getLogger(__name__); this module wires
the root logger once per process.
"""

import logging
import os
import sys
from typing import Mapping, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL,
}


def get_log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """
    Resolve the LOG_LEVEL variable to a logging constant.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        int: Logging level constant (defaults to logging.INFO)
    """
    environ = os.environ if environ is None else environ
    raw_value = environ.get('LOG_LEVEL', 'INFO')
    log_level = LEVEL_MAP.get(raw_value.upper())

    if log_level is None:
        logging.getLogger(__name__).warning(
            f"Invalid LOG_LEVEL value '{raw_value}'. "
            f"Valid values are: {', '.join(LEVEL_MAP)}. Defaulting to INFO."
        )
        return logging.INFO

    return log_level


def setup_logging(force: bool = False, environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Configure the root logger for Cloud Functions and local runs.

    Args:
        force: If True, drop existing handlers and reconfigure.
               Defaults to False (idempotent behavior).
        environ: Mapping holding LOG_LEVEL (defaults to os.environ)
    """
    root_logger = logging.getLogger()
    log_level = get_log_level_from_env(environ)

    if root_logger.handlers and not force:
        # Already configured (functions-framework or a previous call)
        root_logger.setLevel(log_level)
        return

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # twilio logs full request/response bodies at INFO
    logging.getLogger('twilio.http_client').setLevel(max(log_level, logging.WARNING))

    logging.debug(f"Logging configured with level: {logging.getLevelName(log_level)}")
