import logging
from typing import Any, Dict, List, Optional

import httpx

from innovaport.config import settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the e-mail API rejects or fails a send"""


class EmailClient:
    """Thin async client for the Resend HTTP API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        from_email: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.api_url = api_url or settings.resend_api_url
        self.from_email = from_email or settings.resend_from_email
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(
        self,
        to: List[str],
        subject: str,
        html: str,
        reply_to: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """Send one e-mail. Returns the API response body, or None when e-mail is not configured."""
        if not self.is_configured:
            logger.info(f"RESEND_API_KEY not configured, skipping e-mail '{subject}' to {to}")
            return None

        payload: Dict[str, Any] = {
            "from": self.from_email,
            "to": to,
            "subject": subject,
            "html": html,
        }
        if reply_to:
            payload["reply_to"] = reply_to

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"E-mail API request failed: {e}") from e

        if response.status_code >= 400:
            raise EmailDeliveryError(
                f"E-mail API returned {response.status_code}: {response.text}"
            )
        return response.json()


_email_client: Optional[EmailClient] = None


def get_email_client() -> EmailClient:
    global _email_client
    if _email_client is None:
        _email_client = EmailClient()
    return _email_client
