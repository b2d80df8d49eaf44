#!/usr/bin/env python3
"""
SMS delivery through Twilio
"""

import logging
from typing import Optional

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from ..lib.app_config import TwilioConfig
from ..models import DeliveryResult, GeneratedTip

# Create logger for this module
logger = logging.getLogger(__name__)

SMS_HEADER = "Tip of the day!"


def build_sms_body(tip: GeneratedTip) -> str:
    return f"{SMS_HEADER}\n\n{tip.body}"


def send_tip_sms(
    tip: GeneratedTip,
    to_number: Optional[str],
    twilio_config: TwilioConfig,
    client: Optional[Client] = None
) -> DeliveryResult:
    """
    Send the tip as a text message

    Args:
        tip: Generated tip
        to_number: Recipient phone number (E.164)
        twilio_config: Account SID, auth token and sender number
        client: Pre-built Twilio client (built from twilio_config if omitted)

    Returns:
        DeliveryResult for the sms channel, with the Twilio message SID on success
    """
    if not to_number or not twilio_config.from_number:
        logger.error("[SMS] PHONE_NUMBER or TWILIO_PHONE_NUMBER not configured, skipping text message")
        return DeliveryResult(channel='sms', ok=False, error='SMS not configured')

    try:
        if client is None:
            client = Client(twilio_config.account_sid, twilio_config.auth_token)

        logger.info(f"[SMS] Sending text message to phone number: {to_number}")
        message = client.messages.create(
            to=to_number,
            from_=twilio_config.from_number,
            body=build_sms_body(tip)
        )
    except TwilioException as e:
        logger.error(f"[SMS] Twilio error sending text message: {e}", exc_info=True)
        return DeliveryResult(channel='sms', ok=False, error=str(e))
    except Exception as e:
        # transport errors from the underlying HTTP client
        logger.error(f"[SMS] Error sending text message: {e}", exc_info=True)
        return DeliveryResult(channel='sms', ok=False, error=str(e))

    logger.info(f"[SMS] Text message sent successfully with SID: {message.sid}")
    return DeliveryResult(channel='sms', ok=True, message_id=message.sid)
