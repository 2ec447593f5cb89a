"""Transactional Mailer — sends OTP emails through the Brevo HTTP API.

Invariants:
    - Non-2xx responses and transport failures map to MailDeliveryError
    - Without an API key nothing is sent; the skip is logged at WARNING
    - The OTP code never appears in log output

Design Decisions:
    - httpx.AsyncClient per send: mail volume is one message per register/resend
    - transport is injectable so tests use httpx.MockTransport
"""

import logging

import httpx

from supportdesk.config import Settings, get_settings
from supportdesk.core.errors import MailDeliveryError

logger = logging.getLogger(__name__)


class BrevoMailer:
    """Async client for Brevo's /v3/smtp/email endpoint."""

    def __init__(
        self,
        api_key: str | None,
        api_url: str,
        from_email: str,
        from_name: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.from_email = from_email
        self.from_name = from_name
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrevoMailer":
        return cls(
            api_key=settings.brevo_api_key,
            api_url=settings.brevo_api_url,
            from_email=settings.mail_from_email,
            from_name=settings.mail_from_name,
            timeout_seconds=settings.mail_timeout_seconds,
        )

    async def send(self, to_email: str, subject: str, html_content: str) -> bool:
        """Send one email. Returns False when delivery is disabled."""
        if not self.api_key:
            logger.warning(f"Mail delivery disabled, skipping '{subject}' to {to_email}")
            return False

        payload = {
            "sender": {"email": self.from_email, "name": self.from_name},
            "to": [{"email": to_email}],
            "subject": subject,
            "htmlContent": html_content,
        }
        headers = {"api-key": self.api_key, "accept": "application/json"}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(
                    self.api_url, json=payload, headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"Mail transport error to {to_email}: {e}")
            raise MailDeliveryError("provider unreachable")

        if response.status_code >= 400:
            logger.error(
                f"Mail provider rejected message to {to_email}: "
                f"{response.status_code} {response.text[:200]}",
            )
            raise MailDeliveryError(f"provider returned {response.status_code}")

        logger.info(f"Mail '{subject}' sent to {to_email}")
        return True

    async def send_verification_code(self, to_email: str, otp: str) -> bool:
        subject = "Your verification code"
        html_content = (
            "<p>Use the code below to verify your account.</p>"
            f"<p style=\"font-size:24px;letter-spacing:4px\"><strong>{otp}</strong></p>"
            "<p>If you did not request this, ignore this email.</p>"
        )
        return await self.send(to_email, subject, html_content)


def get_mailer() -> BrevoMailer:
    """FastAPI dependency — overridden in tests."""
    return BrevoMailer.from_settings(get_settings())
