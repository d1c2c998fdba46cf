"""Mock email providers for testing."""

from dishka import Scope, provide

from aeobro.adapter.email import MockEmailSender
from aeobro.domain.service import EmailSender
from aeobro.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Mock email provider recording messages in an outbox."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_email_sender(self) -> EmailSender:
        """Provide mock email sender."""
        return MockEmailSender()
