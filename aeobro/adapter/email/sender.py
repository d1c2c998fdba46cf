"""Outbound email through Resend."""

import asyncio

import logfire
import resend

from aeobro.domain.service.domain_verification_service import EmailSender


class ResendEmailSender(EmailSender):
    """Sends transactional email with the Resend SDK."""

    def __init__(self, api_key: str | None, from_address: str) -> None:
        """Initialize sender.

        Args:
            api_key: Resend API key; when unset every send is skipped
            from_address: Sender address
        """
        self.api_key = api_key
        self.from_address = from_address
        if api_key:
            resend.api_key = api_key

    async def send(self, to: str, subject: str, html: str, text: str) -> bool:
        """Send one email.

        Returns:
            True if Resend accepted the message, False if skipped or rejected
        """
        if not self.api_key:
            logfire.warn("Email skipped, no Resend API key configured", subject=subject)
            return False

        params = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html,
            "text": text,
        }
        try:
            # The SDK is synchronous
            await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logfire.error("Email send failed", subject=subject, error=str(e))
            return False

        logfire.info("Email sent", subject=subject)
        return True


class MockEmailSender(EmailSender):
    """Records messages instead of sending them."""

    def __init__(self) -> None:
        """Initialize with an empty outbox."""
        self.outbox: list[dict[str, str]] = []
        self.fail = False

    async def send(self, to: str, subject: str, html: str, text: str) -> bool:
        """Record the message; returns False when `fail` is set."""
        if self.fail:
            return False
        self.outbox.append({"to": to, "subject": subject, "html": html, "text": text})
        return True
