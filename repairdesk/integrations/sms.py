"""
Twilio SMS Dispatcher
API Documentation: https://www.twilio.com/docs/messaging/api/message-resource
"""
import httpx
import logging

from repairdesk.core.errors import DispatchError
from .base import NotificationDispatcher

logger = logging.getLogger(__name__)


class SmsDispatcher(NotificationDispatcher):
    """Sends SMS through the Twilio Messages REST API"""
    CHANNEL_NAME = "sms"
    
    BASE_URL = "https://api.twilio.com/2010-04-01"

    def __init__(self, account_sid: str, auth_token: str, from_number: str, timeout: float = 30.0):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout

    def _messages_url(self) -> str:
        return f"{self.BASE_URL}/Accounts/{self.account_sid}/Messages.json"

    def send(self, destination: str, subject: str, body: str) -> None:
        # SMS has no subject line
        data = {"To": destination, "From": self.from_number, "Body": body}
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self._messages_url(),
                    data=data,
                    auth=(self.account_sid, self.auth_token),
                )
                response.raise_for_status()
                sid = response.json().get("sid")
        except httpx.HTTPError as e:
            logger.error(f"Failed to send SMS to {destination}: {e}")
            raise DispatchError("Failed to send SMS. Please try email verification instead.") from e
        logger.info(f"SMS sent with SID: {sid}")
