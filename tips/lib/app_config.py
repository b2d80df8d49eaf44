#!/usr/bin/env python3
"""
Configuration for the tip pipeline.

Secrets and endpoints come from the process environment (a project-level
.env file is loaded first when present). Non-secret defaults may also live
in app_config.json under the "tips" section; environment values win.

The result is an immutable AppConfig built once per process and passed
explicitly into each component.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

# Create logger for this module
logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_ROOT = PACKAGE_DIR.parent
APP_CONFIG_PATH = PROJECT_ROOT / 'app_config.json'
DEFAULT_WORKBOOK_PATH = PACKAGE_DIR / 'data' / 'prompts.xlsx'

DEFAULT_API_URL = 'https://api.openai.com/v1/chat/completions'
DEFAULT_MODEL = 'gpt-4o-mini'
DEFAULT_CATEGORY = 'htmlcss'

# Cache for the process-wide config
_config_cache = None


@dataclass(frozen=True)
class SmtpConfig:
    host: Optional[str] = None
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0


@dataclass(frozen=True)
class CompletionConfig:
    api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    timeout: float = 60.0


@dataclass(frozen=True)
class TwilioConfig:
    account_sid: Optional[str] = None
    auth_token: Optional[str] = None
    from_number: Optional[str] = None


@dataclass(frozen=True)
class AppConfig:
    smtp: SmtpConfig = field(default_factory=SmtpConfig)
    completion: CompletionConfig = field(default_factory=CompletionConfig)
    twilio: TwilioConfig = field(default_factory=TwilioConfig)
    recipient_email: Optional[str] = None
    recipient_phone: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    workbook_path: Path = DEFAULT_WORKBOOK_PATH


def load_json_config(path: Path = APP_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load app_config.json

    Args:
        path: Location of the JSON file

    Returns:
        dict: Configuration dictionary, empty dict if file doesn't exist or can't be parsed
    """
    if not path.exists():
        logger.debug(f"No app config found at {path}")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {path.name}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Ignoring {path.name}: top level must be an object")
        return {}

    logger.debug(f"Loaded app config from {path}")
    return data


def _to_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_float(value, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def load_app_config(
    environ: Optional[Mapping[str, str]] = None,
    json_config: Optional[Dict[str, Any]] = None
) -> AppConfig:
    """
    Build an AppConfig from an environment mapping.

    Nothing is validated here: a missing credential surfaces as a failure
    of the component that needs it.

    Args:
        environ: Variables to read (defaults to os.environ)
        json_config: Parsed app_config.json contents (defaults to reading the file)

    Returns:
        AppConfig instance
    """
    environ = os.environ if environ is None else environ
    if json_config is None:
        json_config = load_json_config()
    defaults = json_config.get('tips', {}) or {}

    def get(key: str, default=None):
        value = environ.get(key)
        if value is None or value == '':
            return defaults.get(key.lower(), default)
        return value

    smtp = SmtpConfig(
        host=get('EMAIL_HOST'),
        port=_to_int(get('EMAIL_PORT'), 587),
        user=get('EMAIL_USER'),
        password=get('EMAIL_PASSWORD'),
        timeout=_to_float(get('SMTP_TIMEOUT'), 30.0),
    )
    completion = CompletionConfig(
        api_key=get('OPENAI_API_KEY'),
        api_url=get('OPENAI_API_URL', DEFAULT_API_URL),
        model=get('OPENAI_MODEL', DEFAULT_MODEL),
        timeout=_to_float(get('COMPLETION_TIMEOUT'), 60.0),
    )
    twilio = TwilioConfig(
        account_sid=get('TWILIO_ACCOUNT_SID'),
        auth_token=get('TWILIO_AUTH_TOKEN'),
        from_number=get('TWILIO_PHONE_NUMBER'),
    )

    workbook = get('PROMPTS_WORKBOOK')
    return AppConfig(
        smtp=smtp,
        completion=completion,
        twilio=twilio,
        recipient_email=get('EMAIL_ADDRESS'),
        recipient_phone=get('PHONE_NUMBER'),
        category=get('TIP_CATEGORY', DEFAULT_CATEGORY),
        workbook_path=Path(workbook) if workbook else DEFAULT_WORKBOOK_PATH,
    )


def get_config(reload: bool = False) -> AppConfig:
    """
    Return the process-wide AppConfig, loading .env and the environment once.

    Args:
        reload: If True, rebuild from the current environment

    Returns:
        AppConfig instance
    """
    global _config_cache

    if _config_cache is None or reload:
        load_dotenv(PROJECT_ROOT / '.env')
        _config_cache = load_app_config()
        logger.debug(f"Configuration loaded (category={_config_cache.category})")

    return _config_cache
