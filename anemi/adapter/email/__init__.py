"""Email delivery adapter."""

from .client import MockEmailSender, ResendEmailSender, SentEmail

__all__ = ["MockEmailSender", "ResendEmailSender", "SentEmail"]
