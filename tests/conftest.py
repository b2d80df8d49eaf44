"""
Pytest configuration and fixtures
"""
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from openpyxl import Workbook

# Project root holds the functions/ and scripts/ entry points
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tips.lib.app_config import load_app_config
from tips.models import GeneratedTip, PromptEntry


TEST_ENV = {
    'EMAIL_HOST': 'smtp.example.com',
    'EMAIL_PORT': '587',
    'EMAIL_USER': 'tips@example.com',
    'EMAIL_PASSWORD': 'secret',
    'EMAIL_ADDRESS': 'reader@example.com',
    'OPENAI_API_KEY': 'sk-test',
    'TWILIO_ACCOUNT_SID': 'AC123',
    'TWILIO_AUTH_TOKEN': 'token',
    'TWILIO_PHONE_NUMBER': '+15550000001',
    'PHONE_NUMBER': '+15550000002',
}


@pytest.fixture
def app_config():
    """AppConfig with every value set, independent of the real environment"""
    return load_app_config(TEST_ENV, json_config={})


@pytest.fixture
def entries():
    return [
        PromptEntry('Flexbox', 'Explain flexbox'),
        PromptEntry('Grid', 'Explain CSS grid'),
    ]


@pytest.fixture
def tip():
    return GeneratedTip(topic='Flexbox', body='Flexbox lets you...')


@pytest.fixture
def make_workbook(tmp_path):
    """Write an .xlsx with one sheet per key and return its path"""
    def _make(sheets, name='prompts.xlsx'):
        workbook = Workbook()
        workbook.remove(workbook.active)
        for title, rows in sheets.items():
            sheet = workbook.create_sheet(title)
            for row in rows:
                sheet.append(list(row))
        path = tmp_path / name
        workbook.save(path)
        return path
    return _make


def completion_response(data=None, status_code=200, text=None, json_error=None):
    """Build a mock requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text if text is not None else str(data)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = data
    return response


def choices_payload(content):
    return {'choices': [{'index': 0, 'message': {'role': 'assistant', 'content': content}}]}
