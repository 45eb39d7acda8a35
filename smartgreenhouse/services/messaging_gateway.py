"""Messaging gateway - outbound WhatsApp messages through the Twilio REST API"""

import logging
from typing import Optional

import httpx

from .. import config

logger = logging.getLogger(__name__)


class MessagingGatewayError(Exception):
    """Twilio rejected or never received the outbound message"""


class TwilioGateway:
    """Send one message per call via the Messages resource"""
    
    def __init__(
        self,
        account_sid: str = None,
        auth_token: str = None,
        sender: str = None,
        api_url: str = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.account_sid = account_sid or config.TWILIO_ACCOUNT_SID
        self.auth_token = auth_token or config.TWILIO_AUTH_TOKEN
        self.sender = sender or config.TWILIO_WHATSAPP_NUMBER
        self.api_url = (api_url or config.TWILIO_API_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=15.0)
        logger.info(f"Twilio gateway initialized (sender: {self.sender})")
    
    @property
    def messages_url(self) -> str:
        return f"{self.api_url}/Accounts/{self.account_sid}/Messages.json"
    
    async def send(self, to: str, body: str) -> str:
        """Send ``body`` to ``to``; returns the Twilio message SID"""
        try:
            response = await self._client.post(
                self.messages_url,
                data={"From": self.sender, "To": to, "Body": body},
                auth=(self.account_sid, self.auth_token),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise MessagingGatewayError(
                f"Twilio returned {e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise MessagingGatewayError(f"Twilio request failed: {e}") from e
        
        try:
            data = response.json()
        except ValueError:
            data = {}
        sid = data.get("sid", "") if isinstance(data, dict) else ""
        logger.info(f"📤 Reply sent to {to} (sid: {sid or 'unknown'})")
        return sid
    
    async def close(self):
        await self._client.aclose()
