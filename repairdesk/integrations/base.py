"""
Base Notification Dispatcher - Abstract base class for outbound channels
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List
import logging

logger = logging.getLogger(__name__)


@dataclass
class OutboundMessage:
    """Message handed to a dispatcher"""
    destination: str
    subject: str
    body: str


class NotificationDispatcher(ABC):
    """
    Sends a message to an email address or phone number.
    Implementations raise DispatchError when the channel fails.
    """
    CHANNEL_NAME: str = "base"

    @abstractmethod
    def send(self, destination: str, subject: str, body: str) -> None:
        pass


class NoopDispatcher(NotificationDispatcher):
    """Development dispatcher: logs the message, never fails"""
    CHANNEL_NAME = "noop"

    def __init__(self):
        self.sent: List[OutboundMessage] = []

    def send(self, destination: str, subject: str, body: str) -> None:
        self.sent.append(OutboundMessage(destination, subject, body))
        logger.info(f"[noop] {subject} -> {destination}: {body}")
