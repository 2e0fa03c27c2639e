"""
WhatsApp Service - Twilio messaging used as the notification channel
"""
import logging
from twilio.rest import Client

from mycore.core.config import settings
from mycore.core.exceptions import ExternalServiceError, NotConfiguredError

logger = logging.getLogger(__name__)

_twilio_client = None


def is_twilio_configured() -> bool:
    return bool(settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN
                and settings.NOTIFICATION_RECIPIENT)


def get_twilio_client() -> Client:
    """
    Get the Twilio client, created on first use

    Raises:
        NotConfiguredError: If Twilio credentials are missing
    """
    global _twilio_client
    if _twilio_client is None:
        if not (settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN):
            raise NotConfiguredError("Twilio credentials not found")
        _twilio_client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        logger.info("[TWILIO] Client initialized")
    return _twilio_client


def send_whatsapp_message(to_number: str, message: str) -> str:
    """
    Send a WhatsApp message via Twilio

    Args:
        to_number: Recipient WhatsApp number (e.g., "whatsapp:+13128856151")
        message: Message text to send

    Returns:
        Message SID from Twilio

    Raises:
        NotConfiguredError: If Twilio is not configured
        ExternalServiceError: If the send fails
    """
    client = get_twilio_client()
    logger.info(f"[TWILIO] Sending message to {to_number}")

    try:
        twilio_message = client.messages.create(
            from_=settings.TWILIO_WHATSAPP_NUMBER or "whatsapp:+14155238886",
            body=message,
            to=to_number
        )
        logger.info(f"[TWILIO] Message sent with SID: {twilio_message.sid}")
        return twilio_message.sid
    except Exception as e:
        logger.error(f"[TWILIO] Send failed: {e}")
        raise ExternalServiceError(f"Failed to send WhatsApp message: {e}")


def send_notification_message(message: str) -> bool:
    """
    Deliver a notification to the configured recipient

    Returns:
        True if sent, False otherwise
    """
    try:
        send_whatsapp_message(settings.NOTIFICATION_RECIPIENT, message)
        return True
    except (NotConfiguredError, ExternalServiceError) as e:
        logger.warning(f"[TWILIO] Notification not delivered: {e}")
        return False
