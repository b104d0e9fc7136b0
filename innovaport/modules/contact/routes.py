from fastapi import APIRouter, Depends, Query, Request, Response
from innovaport.config import settings
from innovaport.core.rate_limit import limiter
from innovaport.core.dependencies import require_admin
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.contact.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactSubmitResponse,
    MessageStatus,
    NewsletterSubscribe,
    NewsletterResponse,
    AdminReplyRequest,
    AdminReplyResponse,
)
from innovaport.modules.contact.service import ContactService
from innovaport.modules.notifications.service import NotificationService, get_notification_service
from supabase import Client
from typing import List, Optional

router = APIRouter(tags=["contact"])


def get_contact_service(
    supabase: Client = Depends(get_supabase_admin),
    notifications: NotificationService = Depends(get_notification_service)
) -> ContactService:
    return ContactService(supabase, notifications)


@router.post("/contact", response_model=ContactSubmitResponse, status_code=201)
@limiter.limit(settings.contact_rate_limit)
async def submit_contact_message(
    request: Request,
    message_data: ContactMessageCreate,
    service: ContactService = Depends(get_contact_service)
):
    """Public contact form"""
    return await service.submit_message(message_data)


@router.post("/newsletter", response_model=NewsletterResponse)
@limiter.limit(settings.newsletter_rate_limit)
async def subscribe_newsletter(
    request: Request,
    response: Response,
    subscription: NewsletterSubscribe,
    service: ContactService = Depends(get_contact_service)
):
    result, created = service.subscribe_newsletter(subscription)
    response.status_code = 201 if created else 200
    return result


@router.get("/admin/messages", response_model=List[ContactMessageResponse])
async def list_messages(
    status: Optional[MessageStatus] = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    admin: dict = Depends(require_admin),
    service: ContactService = Depends(get_contact_service)
):
    return service.list_messages(status=status, limit=limit, offset=offset)


@router.post("/admin/messages/{message_id}/reply", response_model=AdminReplyResponse)
async def reply_to_message(
    message_id: str,
    reply: AdminReplyRequest,
    admin: dict = Depends(require_admin),
    service: ContactService = Depends(get_contact_service)
):
    return await service.reply_to_message(message_id, reply.reply_message, admin["profile"])
