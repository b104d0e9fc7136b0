from fastapi import APIRouter, Depends, Query, Response
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.quotes.schemas import (
    QuoteCreate,
    QuoteSubmitResponse,
    QuoteResponse,
    QuoteStatus,
    QuoteStatusUpdate,
    QuoteNotesUpdate,
    QuoteRespondRequest,
    QuoteActionResponse,
    ReminderSettings,
    ReminderSettingsResponse,
    ReminderRunResponse,
)
from innovaport.modules.quotes.service import QuoteService
from innovaport.modules.notifications.service import NotificationService, get_notification_service
from innovaport.core.dependencies import get_current_profile, require_cron_secret
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/quotes", tags=["quotes"])


def get_quote_service(
    supabase: Client = Depends(get_supabase_admin),
    notifications: NotificationService = Depends(get_notification_service)
) -> QuoteService:
    return QuoteService(supabase, notifications)


@router.post("", response_model=QuoteSubmitResponse, status_code=201)
async def submit_quote(
    quote_data: QuoteCreate,
    service: QuoteService = Depends(get_quote_service)
):
    """Public quote request from a portfolio contact form"""
    return await service.submit_quote(quote_data)


@router.get("", response_model=List[QuoteResponse])
async def list_quotes(
    status: Optional[QuoteStatus] = None,
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return service.list_quotes(profile["id"], status=status, limit=limit, offset=offset)


# Fixed paths are declared before /{quote_id}

@router.get("/reminder-settings", response_model=ReminderSettingsResponse)
async def get_reminder_settings(
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return service.get_reminder_settings(profile["id"])


@router.put("/reminder-settings", response_model=ReminderSettingsResponse)
async def update_reminder_settings(
    settings_data: ReminderSettings,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return service.update_reminder_settings(profile["id"], settings_data)


@router.post("/reminders", response_model=ReminderRunResponse, dependencies=[Depends(require_cron_secret)])
async def send_reminders(service: QuoteService = Depends(get_quote_service)):
    """Daily follow-up reminders (called by the scheduler)"""
    return await service.send_reminders()


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(
    quote_id: str,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return service.get_quote(quote_id, profile["id"])


@router.delete("/{quote_id}", status_code=204)
async def delete_quote(
    quote_id: str,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    service.delete_quote(quote_id, profile["id"])
    return None


@router.patch("/{quote_id}/status", response_model=QuoteActionResponse)
async def update_quote_status(
    quote_id: str,
    status_data: QuoteStatusUpdate,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return await service.update_status(quote_id, status_data.status, profile)


@router.patch("/{quote_id}/notes", response_model=QuoteResponse)
async def update_quote_notes(
    quote_id: str,
    notes_data: QuoteNotesUpdate,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return service.update_notes(quote_id, notes_data.internal_notes, profile["id"])


@router.post("/{quote_id}/respond", response_model=QuoteActionResponse)
async def respond_to_quote(
    quote_id: str,
    respond_data: QuoteRespondRequest,
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    return await service.respond(quote_id, respond_data, profile)


@router.get("/{quote_id}/export")
async def export_quote(
    quote_id: str,
    format: str = "pdf",
    profile: Dict = Depends(get_current_profile),
    service: QuoteService = Depends(get_quote_service)
):
    content, media_type, filename = service.export_quote(quote_id, format.lower(), profile)
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
