# Notification Dispatchers Package
from .base import NotificationDispatcher, NoopDispatcher, OutboundMessage
from .mail import EmailDispatcher
from .sms import SmsDispatcher
from .router import ContactRouterDispatcher, build_dispatcher

__all__ = [
    "NotificationDispatcher",
    "NoopDispatcher",
    "OutboundMessage",
    "EmailDispatcher",
    "SmsDispatcher",
    "ContactRouterDispatcher",
    "build_dispatcher",
]
