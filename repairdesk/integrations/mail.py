"""
SMTP Email Dispatcher
"""
from email.message import EmailMessage
import smtplib
import logging

from repairdesk.core.errors import DispatchError
from .base import NotificationDispatcher

logger = logging.getLogger(__name__)


class EmailDispatcher(NotificationDispatcher):
    """Sends plain text mail over SMTP with STARTTLS"""
    CHANNEL_NAME = "email"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    def build_message(self, destination: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = destination
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, destination: str, subject: str, body: str) -> None:
        message = self.build_message(destination, subject, body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {destination}: {e}")
            raise DispatchError("Failed to send email verification. Please check your email address or try again later.") from e
        logger.info(f"Email sent to {destination}")
