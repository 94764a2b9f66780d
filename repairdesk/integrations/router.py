"""
Dispatcher selection by contact type and dispatch mode
"""
from repairdesk.core.config import Settings
from .base import NotificationDispatcher, NoopDispatcher
from .mail import EmailDispatcher
from .sms import SmsDispatcher


class ContactRouterDispatcher(NotificationDispatcher):
    """Routes email addresses to the mail channel and everything else to SMS"""
    CHANNEL_NAME = "router"

    def __init__(self, email: NotificationDispatcher, sms: NotificationDispatcher):
        self.email = email
        self.sms = sms

    def send(self, destination: str, subject: str, body: str) -> None:
        channel = self.email if "@" in destination else self.sms
        channel.send(destination, subject, body)


def build_dispatcher(settings: Settings) -> NotificationDispatcher:
    """Build the dispatcher for the configured DISPATCH_MODE (real or noop)"""
    mode = settings.DISPATCH_MODE.lower()
    if mode == "noop":
        return NoopDispatcher()
    if mode != "real":
        raise ValueError(f"Unknown DISPATCH_MODE: {settings.DISPATCH_MODE}")
    
    return ContactRouterDispatcher(
        email=EmailDispatcher(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            sender=settings.MAIL_FROM,
        ),
        sms=SmsDispatcher(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            from_number=settings.TWILIO_FROM_NUMBER,
        ),
    )
