"""Outgoing email adapter."""

from .sender import MockEmailSender, SmtpEmailSender

__all__ = ["MockEmailSender", "SmtpEmailSender"]
