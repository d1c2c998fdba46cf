"""Email adapter."""

from .sender import MockEmailSender, ResendEmailSender

__all__ = ["MockEmailSender", "ResendEmailSender"]
