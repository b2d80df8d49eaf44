"""
Tests for configuration and logging setup
"""
import json
import logging
from pathlib import Path

from tips.lib import app_config as app_config_module
from tips.lib.app_config import (
    DEFAULT_API_URL, DEFAULT_WORKBOOK_PATH, get_config, load_app_config, load_json_config
)
from tips.lib.logging_config import get_log_level_from_env, setup_logging


class TestLoadAppConfig:

    def test_defaults_when_environment_is_empty(self):
        config = load_app_config({}, json_config={})

        assert config.category == 'htmlcss'
        assert config.workbook_path == DEFAULT_WORKBOOK_PATH
        assert config.completion.api_url == DEFAULT_API_URL
        assert config.completion.model == 'gpt-4o-mini'
        assert config.completion.api_key is None
        assert config.smtp.port == 587
        assert config.recipient_email is None
        assert config.twilio.account_sid is None

    def test_reads_environment(self, app_config):
        assert app_config.smtp.host == 'smtp.example.com'
        assert app_config.smtp.user == 'tips@example.com'
        assert app_config.recipient_email == 'reader@example.com'
        assert app_config.recipient_phone == '+15550000002'
        assert app_config.twilio.from_number == '+15550000001'
        assert app_config.completion.api_key == 'sk-test'

    def test_numeric_values(self):
        config = load_app_config({'EMAIL_PORT': '2525', 'SMTP_TIMEOUT': '5', 'COMPLETION_TIMEOUT': 'soon'},
                                 json_config={})

        assert config.smtp.port == 2525
        assert config.smtp.timeout == 5.0
        assert config.completion.timeout == 60.0

    def test_json_defaults_are_overridden_by_environment(self):
        json_config = {'tips': {'tip_category': 'prompts', 'openai_model': 'gpt-4o'}}

        config = load_app_config({'OPENAI_MODEL': 'gpt-4.1-mini'}, json_config=json_config)

        assert config.category == 'prompts'
        assert config.completion.model == 'gpt-4.1-mini'

    def test_workbook_override(self, tmp_path):
        config = load_app_config({'PROMPTS_WORKBOOK': str(tmp_path / 'custom.xlsx')}, json_config={})

        assert config.workbook_path == Path(tmp_path / 'custom.xlsx')

    def test_get_config_is_cached(self, monkeypatch):
        monkeypatch.setattr(app_config_module, '_config_cache', None)
        monkeypatch.setenv('TIP_CATEGORY', 'prompts')

        first = get_config()
        monkeypatch.setenv('TIP_CATEGORY', 'htmlcss')

        assert get_config() is first
        assert get_config(reload=True).category == 'htmlcss'


class TestJsonConfig:

    def test_missing_file(self, tmp_path):
        assert load_json_config(tmp_path / 'app_config.json') == {}

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'app_config.json'
        path.write_text('{not json')

        assert load_json_config(path) == {}

    def test_valid_file(self, tmp_path):
        path = tmp_path / 'app_config.json'
        path.write_text(json.dumps({'tips': {'tip_category': 'prompts'}}))

        assert load_json_config(path) == {'tips': {'tip_category': 'prompts'}}


class TestLogging:

    def test_level_from_env(self):
        assert get_log_level_from_env({'LOG_LEVEL': 'debug'}) == logging.DEBUG
        assert get_log_level_from_env({}) == logging.INFO

    def test_invalid_level_defaults_to_info(self):
        assert get_log_level_from_env({'LOG_LEVEL': 'chatty'}) == logging.INFO

    def test_setup_logging_force_replaces_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(force=True, environ={'LOG_LEVEL': 'WARNING'})

            assert len(root.handlers) == 1
            assert root.level == logging.WARNING
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
