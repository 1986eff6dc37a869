"""Email sender implementations.

The real sender posts to the Resend HTTP API.
"""

import httpx
import logfire
from pydantic import BaseModel

from anemi.adapter.error import EmailDeliveryError
from anemi.config import EmailSettings
from anemi.domain.service.notification_service import EmailSender, EmailTemplate

from .templates import render


class ResendEmailSender(EmailSender):
    """Email sender backed by the Resend API."""

    def __init__(
        self,
        settings: EmailSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Resend sender.

        Args:
            settings: Email settings
            transport: Optional httpx transport (tests)
        """
        self.settings = settings
        self.transport = transport

    async def send(self, to: str, template: EmailTemplate, data: dict) -> None:
        """Render and deliver one email.

        Without an API key the email is logged and skipped.

        Raises:
            EmailDeliveryError: If Resend rejects the message or is unreachable
        """
        subject, html = render(template, data)

        if not self.settings.resend_api_key:
            logfire.info(
                "Email not sent (no RESEND_API_KEY)",
                template=template.value,
                subject=subject,
            )
            return

        payload = {
            "from": self.settings.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.settings.api_url,
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self.settings.resend_api_key}"
                    },
                    timeout=self.settings.timeout_seconds,
                )

                if response.status_code not in (200, 201, 202):
                    logfire.error(
                        "Resend rejected email",
                        template=template.value,
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise EmailDeliveryError(
                        f"Email delivery failed: {response.status_code}"
                    )

                logfire.info(
                    "Email sent",
                    template=template.value,
                    email_id=response.json().get("id"),
                )

        except httpx.HTTPError as e:
            logfire.error("Resend HTTP error", template=template.value, error=str(e))
            raise EmailDeliveryError(f"HTTP error during email delivery: {e}")


class SentEmail(BaseModel):
    """An email captured by the mock sender."""

    to: str
    template: EmailTemplate
    subject: str
    data: dict


class MockEmailSender(EmailSender):
    """Mock email sender for testing.

    Records rendered emails instead of delivering them. Set ``fail`` to
    simulate an outage.
    """

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[SentEmail] = []

    async def send(self, to: str, template: EmailTemplate, data: dict) -> None:
        if self.fail:
            raise EmailDeliveryError("Mock email outage")
        subject, _ = render(template, data)
        self.sent.append(SentEmail(to=to, template=template, subject=subject, data=data))

    def sent_to(self, to: str) -> list[SentEmail]:
        return [email for email in self.sent if email.to == to]
