"""
Outbound message delivery for "you're next" notifications.

Uses the Twilio API to send WhatsApp messages. When no Twilio credentials are
configured the service runs with delivery disabled: sends are skipped and
logged, nothing fails.
"""

import asyncio
import logging
from typing import Protocol

import requests
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from officehours.config import Settings
from officehours.errors import ConfigurationAbsent, DeliveryFailure

logger = logging.getLogger(__name__)

WHATSAPP_PREFIX = "whatsapp:"


def mask_contact(contact: str) -> str:
    """Mask a phone number for logging: +15551230000 -> +155****0000"""
    if contact.startswith(WHATSAPP_PREFIX):
        contact = contact[len(WHATSAPP_PREFIX):]
    if len(contact) <= 4:
        return "****"
    return contact[:4] + "****" + contact[-4:]


def to_whatsapp_address(number: str) -> str:
    number = number.strip()
    if number.startswith(WHATSAPP_PREFIX):
        return number
    return f"{WHATSAPP_PREFIX}{number}"


class DeliveryChannel(Protocol):
    """Anything that can send a text message to a contact."""

    enabled: bool

    async def send(self, destination: str, body: str) -> None:
        """Deliver `body`, raising DeliveryFailure if the provider rejects it."""
        ...


class DisabledChannel:
    """Stand-in used when delivery is not configured. Drops every message."""

    enabled = False

    async def send(self, destination: str, body: str) -> None:
        logger.debug(f"WhatsApp skipped (delivery disabled) to {mask_contact(destination)}")


class TwilioWhatsAppChannel:
    """WhatsApp messages through the Twilio REST API."""

    enabled = True

    def __init__(self, account_sid: str | None, auth_token: str | None, from_number: str):
        if not account_sid or not auth_token:
            raise ConfigurationAbsent("TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN are required")
        self._client = Client(account_sid, auth_token)
        self._from = to_whatsapp_address(from_number)

    async def send(self, destination: str, body: str) -> None:
        masked = mask_contact(destination)
        try:
            # The Twilio client is blocking; keep it off the event loop.
            message = await asyncio.to_thread(
                self._client.messages.create,
                body=body,
                from_=self._from,
                to=to_whatsapp_address(destination),
            )
        except (TwilioException, requests.RequestException) as e:
            raise DeliveryFailure(f"WhatsApp send to {masked} failed: {e}") from e
        logger.info(f"WhatsApp sent to {masked}: sid={message.sid}")


def build_delivery_channel(settings: Settings) -> DeliveryChannel:
    """Create the configured channel, falling back to a disabled one."""
    if not settings.delivery_configured:
        logger.info("WhatsApp disabled: missing Twilio credentials")
        return DisabledChannel()

    channel = TwilioWhatsAppChannel(
        settings.twilio_account_sid,
        settings.twilio_auth_token,
        settings.twilio_whatsapp_number,
    )
    logger.info("WhatsApp delivery enabled")
    return channel
