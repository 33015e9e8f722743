"""Email providers."""

import asyncio
from typing import Any, Dict

import aiohttp
import structlog

from eventdesk.exceptions import IntegrationError
from eventdesk.integrations.base import EmailProvider


logger = structlog.get_logger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class LoggingEmailProvider(EmailProvider):
    """Stand-in that logs the message instead of sending it."""

    name = "log_email"

    def __init__(self):
        self.logger = logger.bind(component="log_email_provider")

    async def send(self, to: str, from_address: str, subject: str, body: str) -> bool:
        self.logger.info(
            "Email notification (not sent)",
            to=to,
            from_address=from_address,
            subject=subject,
            body=body,
        )
        return True


class SendGridEmailProvider(EmailProvider):
    """Delivers email through the SendGrid v3 mail/send API."""

    name = "sendgrid"

    def __init__(self, api_key: str, timeout: float = 10.0, url: str = SENDGRID_SEND_URL):
        """Initialize the provider.

        Args:
            api_key: SendGrid API key
            timeout: Total request timeout in seconds
            url: Endpoint to post messages to
        """
        self.url = url
        self.timeout = timeout
        self.headers = {
            'Authorization': f'Bearer {api_key}',
            'Content-Type': 'application/json'
        }
        self.logger = logger.bind(component="sendgrid_provider")

    @staticmethod
    def build_payload(to: str, from_address: str, subject: str, body: str) -> Dict[str, Any]:
        """Build the mail/send request body."""
        return {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": from_address},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
        }

    async def send(self, to: str, from_address: str, subject: str, body: str) -> bool:
        payload = self.build_payload(to, from_address, subject, body)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.url, json=payload, headers=self.headers) as response:
                    if 200 <= response.status < 300:
                        self.logger.info("Email sent", to=to, subject=subject, status_code=response.status)
                        return True

                    detail = await response.text()
                    raise IntegrationError(
                        f"SendGrid rejected the message with status {response.status}: {detail}",
                        provider=self.name,
                    )
        except aiohttp.ClientError as e:
            raise IntegrationError(f"SendGrid request failed: {e}", provider=self.name) from e
        except asyncio.TimeoutError as e:
            raise IntegrationError(
                f"SendGrid request timed out after {self.timeout}s", provider=self.name
            ) from e
