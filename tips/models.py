#!/usr/bin/env python3
"""
Value types passed between the pipeline stages.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FailureReason(Enum):
    EMPTY_CATALOG = 'empty_catalog'
    NETWORK_ERROR = 'network_error'
    HTTP_ERROR = 'http_error'
    INVALID_RESPONSE = 'invalid_response'
    NOT_CONFIGURED = 'not_configured'


@dataclass(frozen=True)
class PromptEntry:
    """One selectable tip topic from the prompt workbook"""
    topic: str
    prompt_text: str


@dataclass(frozen=True)
class GeneratedTip:
    """The text produced for one invocation"""
    topic: str
    body: str


@dataclass(frozen=True)
class CatalogResult:
    entries: List[PromptEntry] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a generation attempt.

    A failed result (no tip) means nothing must be delivered. A successful
    result may still carry an empty body when the service answered without
    content.
    """
    tip: Optional[GeneratedTip] = None
    reason: Optional[FailureReason] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.tip is not None

    @classmethod
    def failure(cls, reason: FailureReason, error: str) -> 'GenerationResult':
        return cls(reason=reason, error=error)


@dataclass(frozen=True)
class DeliveryResult:
    channel: str
    ok: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class DispatchReport:
    email: DeliveryResult
    sms: DeliveryResult

    @property
    def delivered_channels(self) -> List[str]:
        return [r.channel for r in (self.email, self.sms) if r.ok]
