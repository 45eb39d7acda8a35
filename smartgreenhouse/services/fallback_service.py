"""Conversational fallback - chat completion for messages that match no command"""

import logging
from typing import Optional

import httpx

from .. import config

logger = logging.getLogger(__name__)

QUOTA_STATUS_CODES = (402,)


class FallbackServiceError(Exception):
    """The completion request failed"""


class FallbackQuotaExceeded(FallbackServiceError):
    """The provider refused the request for lack of credit"""


class FallbackService:
    """OpenRouter-compatible chat completions client"""
    
    def __init__(
        self,
        api_url: str = None,
        api_key: str = None,
        model: str = None,
        max_tokens: int = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_url = api_url or config.FALLBACK_API_URL
        self.api_key = api_key if api_key is not None else config.FALLBACK_API_KEY
        self.model = model or config.FALLBACK_MODEL
        self.max_tokens = max_tokens or config.FALLBACK_MAX_TOKENS
        self._client = client or httpx.AsyncClient(
            timeout=timeout or config.FALLBACK_TIMEOUT_SECONDS
        )
        logger.info(f"Fallback service initialized (model: {self.model})")
    
    async def complete(self, text: str) -> Optional[str]:
        """Return the completion for ``text``, or None when the response has none.

        Raises FallbackQuotaExceeded on payment/quota refusals and
        FallbackServiceError on every other failure.
        """
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": text}],
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        
        try:
            response = await self._client.post(self.api_url, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in QUOTA_STATUS_CODES:
                raise FallbackQuotaExceeded(f"Fallback provider returned {status}") from e
            raise FallbackServiceError(f"Fallback provider returned {status}") from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise FallbackServiceError(f"Fallback request failed: {e}") from e
        
        return _extract_content(data)
    
    async def close(self):
        await self._client.aclose()


def _extract_content(data) -> Optional[str]:
    """choices[0].message.content, tolerating any missing level"""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None
