import asyncio
import logging
from typing import List, Optional

from fastapi import Depends

from innovaport.config import settings
from innovaport.modules.notifications.email_client import EmailClient, get_email_client
from innovaport.modules.notifications.schemas import EmailMessage

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, email_client: EmailClient):
        self.email_client = email_client

    async def send(self, message: EmailMessage) -> Optional[dict]:
        """Send one message; delivery errors propagate to the caller"""
        return await self.email_client.send(
            to=message.to,
            subject=message.subject,
            html=message.html,
            reply_to=message.reply_to,
        )

    async def send_best_effort(self, *messages: EmailMessage) -> List[bool]:
        """Send concurrently; failures are logged (outside production) and never raised.

        Returns one success flag per message, in order.
        """
        results = await asyncio.gather(
            *(self.send(message) for message in messages),
            return_exceptions=True,
        )
        outcomes = []
        for message, result in zip(messages, results):
            if isinstance(result, Exception):
                if not settings.is_production:
                    logger.warning(f"E-mail '{message.subject}' to {message.to} failed: {result}")
                outcomes.append(False)
            else:
                outcomes.append(True)
        return outcomes


def get_notification_service(email_client: EmailClient = Depends(get_email_client)) -> NotificationService:
    return NotificationService(email_client)
