"""Email delivery port."""

from forum.domain.value import OutgoingEmail


class EmailSender:
    """Outgoing email interface implemented by the email adapter."""

    async def send(self, email: OutgoingEmail) -> bool:
        """Deliver an email.

        Args:
            email: Rendered message

        Returns:
            True if the message was handed to the mail relay, False if
            delivery is disabled

        Raises:
            EmailDeliveryError: If the relay rejected the message
        """
        raise NotImplementedError
