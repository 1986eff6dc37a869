"""Email infrastructure providers."""

from dishka import Scope, provide

from anemi.adapter.email import ResendEmailSender
from anemi.config import EmailSettings
from anemi.domain.service import EmailSender
from anemi.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider (Resend)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, email_settings: EmailSettings) -> EmailSender:
        """Provide email sender.

        Without a Resend API key the sender logs and skips every email.
        """
        return ResendEmailSender(settings=email_settings)
