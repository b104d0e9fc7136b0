"""
Quote Reminder Script
Sends follow-up reminders for pending quote requests.
Meant to run once a day from a scheduler when calling the HTTP endpoint is not an option.
"""

import asyncio
import logging

from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.notifications.email_client import get_email_client
from innovaport.modules.notifications.service import NotificationService
from innovaport.modules.quotes.service import QuoteService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def run() -> int:
    service = QuoteService(get_supabase_admin(), NotificationService(get_email_client()))
    result = await service.send_reminders()
    logger.info(f"{result.message}: {result.reminders_sent} sent")
    for error in result.errors:
        logger.warning(error)
    return 1 if result.errors else 0


def main():
    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()
