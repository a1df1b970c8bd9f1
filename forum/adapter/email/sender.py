"""SMTP email delivery.

smtplib is blocking, so each message is sent from a worker thread.
"""

import asyncio
import smtplib
from email.message import EmailMessage

import logfire

from forum.adapter.error import EmailDeliveryError
from forum.config import EmailSettings
from forum.domain.service.email import EmailSender
from forum.domain.value import OutgoingEmail


def build_message(email: OutgoingEmail, sender: str) -> EmailMessage:
    """Build a MIME message, multipart when an HTML body is present.

    Args:
        email: Rendered email
        sender: From header

    Returns:
        Message ready for smtplib
    """
    message = EmailMessage()
    message["Subject"] = email.subject
    message["From"] = sender
    message["To"] = email.to
    message.set_content(email.text)
    if email.html:
        message.add_alternative(email.html, subtype="html")
    return message


class SmtpEmailSender(EmailSender):
    """Email sender backed by an SMTP relay."""

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize SMTP sender.

        Args:
            settings: Email configuration
        """
        self.settings = settings

    async def send(self, email: OutgoingEmail) -> bool:
        """Send an email through the configured relay.

        Returns:
            False if no SMTP host is configured, True once the relay accepted
            the message

        Raises:
            EmailDeliveryError: If the relay rejected the message or could
                not be reached
        """
        if not self.settings.smtp_host:
            logfire.warn("Email not sent: SMTP host not configured", to=email.to)
            return False

        with logfire.span(
            "smtp_email_sender.send",
            host=self.settings.smtp_host,
            subject=email.subject,
        ):
            message = build_message(email, self.settings.sender)
            try:
                await asyncio.to_thread(self._deliver, message)
            except (smtplib.SMTPException, OSError) as e:
                logfire.error("SMTP delivery failed", to=email.to, error=str(e))
                raise EmailDeliveryError(f"Failed to send email: {e}") from e
            logfire.info("Email sent", to=email.to)
            return True

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.smtp_host,
            self.settings.smtp_port,
            timeout=self.settings.timeout_seconds,
        ) as smtp:
            if self.settings.use_tls:
                smtp.starttls()
            if self.settings.smtp_username and self.settings.smtp_password:
                smtp.login(self.settings.smtp_username, self.settings.smtp_password)
            smtp.send_message(message)


class MockEmailSender(EmailSender):
    """Email sender that records messages instead of sending them.

    Addresses listed in ``fail_for`` raise EmailDeliveryError, to exercise
    failure handling.
    """

    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.sent: list[OutgoingEmail] = []
        self.fail_for = fail_for or set()

    async def send(self, email: OutgoingEmail) -> bool:
        """Record the email."""
        if email.to in self.fail_for:
            raise EmailDeliveryError(f"Mock delivery failure for {email.to}")
        self.sent.append(email)
        logfire.info("Mock email sent", to=email.to, subject=email.subject)
        return True
