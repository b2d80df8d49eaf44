#!/usr/bin/env python3
"""
Email delivery over authenticated SMTP (STARTTLS)
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Optional

from ..lib.app_config import SmtpConfig
from ..models import DeliveryResult, GeneratedTip

# Create logger for this module
logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "Tip of the Day"


def build_email(tip: GeneratedTip, to_email: str, from_email: Optional[str], subject: str = EMAIL_SUBJECT) -> EmailMessage:
    """Plain-text message whose body is the tip text verbatim"""
    message = EmailMessage()
    message['Subject'] = subject
    message['From'] = from_email or ''
    message['To'] = to_email
    message.set_content(tip.body)
    return message


def send_tip_email(tip: GeneratedTip, to_email: Optional[str], smtp_config: SmtpConfig) -> DeliveryResult:
    """
    Send the tip to one recipient

    Args:
        tip: Generated tip
        to_email: Recipient address
        smtp_config: SMTP host, port and credentials

    Returns:
        DeliveryResult for the email channel
    """
    if not smtp_config.host or not to_email:
        logger.error("[Email] EMAIL_HOST or EMAIL_ADDRESS not configured, skipping email")
        return DeliveryResult(channel='email', ok=False, error='Email not configured')

    try:
        message = build_email(tip, to_email, smtp_config.user)
        logger.info(f"[Email] Sending email with subject '{message['Subject']}' to {to_email}")

        with smtplib.SMTP(smtp_config.host, smtp_config.port, timeout=smtp_config.timeout) as server:
            server.starttls()
            server.login(smtp_config.user or '', smtp_config.password or '')
            server.send_message(message)
    except smtplib.SMTPAuthenticationError as e:
        logger.error(f"[Email] SMTP authentication failed. Verify EMAIL_USER and EMAIL_PASSWORD: {e}", exc_info=True)
        return DeliveryResult(channel='email', ok=False, error=f"SMTP authentication failed: {e}")
    except (smtplib.SMTPException, OSError, ValueError) as e:
        logger.error(f"[Email] Error sending email: {e}", exc_info=True)
        return DeliveryResult(channel='email', ok=False, error=str(e))

    logger.info(f"[Email] Email successfully sent to {to_email}")
    return DeliveryResult(channel='email', ok=True)


def check_smtp_health(smtp_config: SmtpConfig) -> Dict[str, Any]:
    """
    Lightweight SMTP connectivity check (connect and quit, no login)

    Returns:
        Dictionary with status, configured, reachable, and error fields
    """
    if not (smtp_config.host and smtp_config.user and smtp_config.password):
        return {
            'status': "degraded",
            'configured': False,
            'reachable': False,
            'error': "SMTP credentials not fully configured (missing EMAIL_HOST, EMAIL_USER, or EMAIL_PASSWORD)"
        }

    try:
        server = smtplib.SMTP(timeout=2)
        server.connect(smtp_config.host, smtp_config.port)
        server.quit()
    except (smtplib.SMTPException, OSError) as e:
        return {
            'status': "degraded",
            'configured': True,
            'reachable': False,
            'error': f"SMTP connection error: {e}"
        }

    return {'status': "healthy", 'configured': True, 'reachable': True, 'error': None}
