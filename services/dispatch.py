"""
Message dispatchers.

The cadence core only knows the MessageDispatcher protocol:

    send(channel, destination, message) -> OutreachStatus (SENT or FAILED)

Implementations:
- LoggingDispatcher: no-op transport that logs and reports SENT. Used for local
  runs and whenever no gateway is configured.
- GatewayDispatcher: WhatsApp through an HTTP messaging gateway (httpx) and
  email through SMTP (smtplib).

Dispatchers may raise; the outreach router downgrades any exception to FAILED.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import List, Optional, Protocol, Tuple

import httpx

from config.settings import Settings
from domain.lead import Channel
from domain.outreach import OutreachStatus

logger = logging.getLogger(__name__)


class DispatchError(Exception):
    """Raised when a transport rejects or cannot deliver a message."""


@dataclass(frozen=True, slots=True)
class ComposedMessage:
    subject: str
    content: str


class MessageDispatcher(Protocol):
    def send(self, channel: Channel, destination: Optional[str], message: ComposedMessage) -> OutreachStatus:
        ...


class LoggingDispatcher:
    """Dispatcher that records sends in the log instead of delivering them."""

    def __init__(self) -> None:
        self.sent: List[Tuple[Channel, Optional[str], ComposedMessage]] = []

    def send(self, channel: Channel, destination: Optional[str], message: ComposedMessage) -> OutreachStatus:
        logger.info(
            f"Simulated {channel.value} message to {destination}: {message.subject}",
            extra={"channel": channel.value, "destination": destination},
        )
        self.sent.append((channel, destination, message))
        return OutreachStatus.SENT


class GatewayDispatcher:
    """
    Real transport.

    - WhatsApp: POST {"to", "body"} as JSON to WHATSAPP_GATEWAY_URL with an
      optional bearer token. Any non-2xx response is a failure.
    - Email: plain-text message over SMTP (STARTTLS unless disabled).
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None) -> None:
        self._settings = settings
        self._http = http_client or httpx.Client(timeout=settings.dispatch_timeout_seconds)

    def send(self, channel: Channel, destination: Optional[str], message: ComposedMessage) -> OutreachStatus:
        if not destination:
            raise DispatchError(f"Lead has no destination for channel {channel.value}")

        if channel == Channel.EMAIL:
            self._send_email(destination, message)
        else:
            self._send_whatsapp(destination, message)
        return OutreachStatus.SENT

    def _send_whatsapp(self, phone: str, message: ComposedMessage) -> None:
        url = self._settings.whatsapp_gateway_url
        if not url:
            raise DispatchError("WHATSAPP_GATEWAY_URL is not configured")

        headers = {"Content-Type": "application/json"}
        if self._settings.whatsapp_gateway_token:
            headers["Authorization"] = f"Bearer {self._settings.whatsapp_gateway_token}"

        try:
            response = self._http.post(
                url,
                json={"to": f"whatsapp:{phone}", "body": message.content},
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DispatchError(f"WhatsApp gateway error: {exc}") from exc

    def _send_email(self, address: str, message: ComposedMessage) -> None:
        settings = self._settings
        if not settings.smtp_host or not settings.smtp_from_email:
            raise DispatchError("SMTP_HOST and SMTP_FROM_EMAIL must be configured")

        mime = MIMEText(message.content, "plain", "utf-8")
        mime["Subject"] = message.subject
        mime["From"] = settings.smtp_from_email
        mime["To"] = address

        try:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.dispatch_timeout_seconds) as server:
                if settings.smtp_use_tls:
                    server.starttls(context=ssl.create_default_context())
                if settings.smtp_user and settings.smtp_password:
                    server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from_email, [address], mime.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise DispatchError(f"SMTP error: {exc}") from exc

    def close(self) -> None:
        self._http.close()


def build_dispatcher(settings: Settings) -> MessageDispatcher:
    if settings.gateway_configured:
        return GatewayDispatcher(settings)
    logger.warning("No messaging gateway configured; outreach will only be logged")
    return LoggingDispatcher()


__all__ = [
    "ComposedMessage",
    "DispatchError",
    "MessageDispatcher",
    "LoggingDispatcher",
    "GatewayDispatcher",
    "build_dispatcher",
]
