"""Email infrastructure providers."""

from dishka import Scope, provide

from forum.adapter.email import SmtpEmailSender
from forum.config import EmailSettings
from forum.domain.service import EmailSender
from forum.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider (SMTP relay)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, email_settings: EmailSettings) -> EmailSender:
        """Provide SMTP email sender.

        With no SMTP host configured the sender logs and skips every message.
        """
        return SmtpEmailSender(settings=email_settings)
