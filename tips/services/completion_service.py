#!/usr/bin/env python3
"""
Completion API service: turns a catalog prompt into a generated tip.
"""

import logging
import random
from typing import Any, Dict, List, Optional, Protocol, Tuple
from urllib.parse import urlparse

import requests

from ..lib.app_config import CompletionConfig
from ..models import FailureReason, GeneratedTip, GenerationResult, PromptEntry

# Create logger for this module
logger = logging.getLogger(__name__)

LENGTH_INSTRUCTION = "Return the answer with 75 - 100 words, and after that, include an example."


class RandomSource(Protocol):
    def pick_index(self, size: int) -> int:
        """Return an index in range(size)"""
        ...


class SystemRandomSource:
    """Uniform selection backed by random.Random"""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def pick_index(self, size: int) -> int:
        return self._random.randrange(size)


class FixedRandomSource:
    """Always picks the same index (wrapped to the catalog size)"""

    def __init__(self, index: int):
        self.index = index

    def pick_index(self, size: int) -> int:
        return self.index % size


def build_prompt(entry: PromptEntry) -> str:
    return f"{entry.prompt_text} {LENGTH_INSTRUCTION}"


def build_payload(prompt: str, model: str) -> Dict[str, Any]:
    return {
        'model': model,
        'store': True,
        'messages': [{'role': 'user', 'content': prompt}]
    }


def extract_content(data: Any) -> str:
    """
    Pull the first choice's message content out of a completion response.

    A response without choices, or with the expected fields missing, yields
    an empty string rather than an error.

    Args:
        data: Parsed JSON response

    Returns:
        Generated text, or '' if not present
    """
    if not isinstance(data, dict):
        return ''

    choices = data.get('choices')
    if not isinstance(choices, list) or not choices:
        return ''

    first = choices[0]
    message = first.get('message') if isinstance(first, dict) else None
    if not isinstance(message, dict):
        return ''

    content = message.get('content')
    return '' if content is None else str(content)


def call_completion_api(prompt: str, config: CompletionConfig) -> Tuple[Optional[str], Optional[FailureReason], Optional[str]]:
    """
    Make one call to the completion API

    Args:
        prompt: User prompt
        config: Endpoint, model, key and timeout

    Returns:
        (content, None, None) on success, or (None, reason, error message)
    """
    if not config.api_key:
        logger.error("[Completion] OPENAI_API_KEY not set, cannot generate tip")
        return None, FailureReason.NOT_CONFIGURED, 'Completion API key not configured'

    headers = {
        'Authorization': f'Bearer {config.api_key}',
        'Content-Type': 'application/json'
    }
    payload = build_payload(prompt, config.model)

    logger.info(f"[Completion] Request payload: {payload}")
    logger.info(f"[Completion] Waiting for response from {config.api_url}...")

    try:
        response = requests.post(config.api_url, headers=headers, json=payload, timeout=config.timeout)
    except requests.exceptions.RequestException as e:
        logger.error(f"[Completion] Error calling completion API: {e}", exc_info=True)
        return None, FailureReason.NETWORK_ERROR, str(e)

    logger.debug(f"[Completion] Response status: {response.status_code}")
    if not response.ok:
        error_text = response.text[:500] if response.text else "No response body"
        logger.error(f"[Completion] HTTP Error {response.status_code}: {error_text}")
        logger.error(f"[Completion] URL: {config.api_url}, Model: {config.model}")
        return None, FailureReason.HTTP_ERROR, f"HTTP {response.status_code}"

    logger.debug(f"[Completion] Response body: {response.text}")
    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"[Completion] Response is not valid JSON: {e}", exc_info=True)
        return None, FailureReason.INVALID_RESPONSE, 'Response is not valid JSON'

    return extract_content(data), None, None


def select_entry(entries: List[PromptEntry], random_source: RandomSource) -> PromptEntry:
    return entries[random_source.pick_index(len(entries))]


def generate_tip(
    entries: List[PromptEntry],
    config: CompletionConfig,
    random_source: Optional[RandomSource] = None
) -> GenerationResult:
    """
    Pick one prompt at random and ask the completion API to expand it.

    Exactly one request is made; there is no retry or fallback prompt.

    Args:
        entries: Catalog to choose from
        config: Completion API settings
        random_source: Selection source (defaults to an unseeded SystemRandomSource)

    Returns:
        GenerationResult holding the tip, or the failure reason
    """
    if not entries:
        logger.error("[Completion] No prompts available, cannot generate tip")
        return GenerationResult.failure(FailureReason.EMPTY_CATALOG, 'Prompt catalog is empty')

    random_source = random_source or SystemRandomSource()
    selected = select_entry(entries, random_source)
    logger.info(f"[Completion] Selected topic: {selected.topic}")

    content, reason, error = call_completion_api(build_prompt(selected), config)
    if reason is not None:
        return GenerationResult.failure(reason, error)

    if not content:
        logger.warning(f"[Completion] Response for topic '{selected.topic}' contained no content")
    logger.info(f"[Completion] Received and processed response for topic: {selected.topic}")

    return GenerationResult(tip=GeneratedTip(topic=selected.topic, body=content))


def check_completion_health(config: CompletionConfig) -> Dict[str, Any]:
    """
    Check completion API health status

    Returns:
        Dictionary with status, api_key_configured, reachable, and error fields
    """
    status = "healthy"
    reachable = False
    error = None

    if not config.api_key:
        return {
            'status': "degraded",
            'api_key_configured': False,
            'reachable': False,
            'error': "OPENAI_API_KEY not configured"
        }

    parsed_url = urlparse(config.api_url)
    base_url = f"{parsed_url.scheme}://{parsed_url.netloc}"
    try:
        # Any response (even 404/403) means the host is up
        requests.head(base_url, timeout=2, allow_redirects=True)
        reachable = True
    except requests.exceptions.Timeout:
        error = "Connection timeout"
        status = "degraded"
    except requests.exceptions.RequestException as e:
        error = f"Connection error - API unreachable: {e}"
        status = "degraded"

    return {
        'status': status,
        'api_key_configured': True,
        'reachable': reachable,
        'error': error
    }
