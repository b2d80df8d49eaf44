#!/usr/bin/env python3
"""
Delivers a generated tip over email and SMS.
The two channels are independent: a failure on one never stops the other.
"""

import logging
from typing import Callable

from .lib.app_config import AppConfig
from .models import DeliveryResult, DispatchReport, GeneratedTip
from .services.email_service import send_tip_email
from .services.sms_service import send_tip_sms

# Create logger for this module
logger = logging.getLogger(__name__)

ChannelSender = Callable[[GeneratedTip, AppConfig], DeliveryResult]


def email_channel(tip: GeneratedTip, config: AppConfig) -> DeliveryResult:
    return send_tip_email(tip, config.recipient_email, config.smtp)


def sms_channel(tip: GeneratedTip, config: AppConfig) -> DeliveryResult:
    return send_tip_sms(tip, config.recipient_phone, config.twilio)


def _attempt(channel: str, sender: ChannelSender, tip: GeneratedTip, config: AppConfig) -> DeliveryResult:
    try:
        result = sender(tip, config)
    except Exception as e:
        logger.error(f"[Tips] Unexpected error on {channel} channel: {e}", exc_info=True)
        return DeliveryResult(channel=channel, ok=False, error=str(e))

    if not result.ok:
        logger.warning(f"[Tips] {channel} delivery failed: {result.error}")
    return result


def dispatch_tip(
    tip: GeneratedTip,
    config: AppConfig,
    email_sender: ChannelSender = email_channel,
    sms_sender: ChannelSender = sms_channel
) -> DispatchReport:
    """
    Send the tip by email, then by SMS

    Args:
        tip: Generated tip
        config: Recipients and transport settings
        email_sender: Email channel implementation
        sms_sender: SMS channel implementation

    Returns:
        DispatchReport with one result per channel
    """
    logger.info(f"[Tips] Dispatching tip '{tip.topic}' via email and text")

    email_result = _attempt('email', email_sender, tip, config)
    sms_result = _attempt('sms', sms_sender, tip, config)

    report = DispatchReport(email=email_result, sms=sms_result)
    logger.info(f"[Tips] Dispatch finished, delivered via: {report.delivered_channels or 'none'}")
    return report
