"""Email infrastructure providers."""

from dishka import Scope, provide

from aeobro.adapter.email import ResendEmailSender
from aeobro.config import Settings
from aeobro.domain.service import EmailSender
from aeobro.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider using Resend."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: Settings) -> EmailSender:
        """Provide email sender.

        Without RESEND_API_KEY the sender logs and skips every message.
        """
        return ResendEmailSender(
            api_key=settings.email.resend_api_key,
            from_address=settings.email.from_address,
        )
