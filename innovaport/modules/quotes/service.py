from supabase import Client
from innovaport.modules.quotes.schemas import (
    QuoteCreate,
    QuoteSubmitResponse,
    QuoteResponse,
    QuoteRespondRequest,
    QuoteActionResponse,
    ReminderSettings,
    ReminderSettingsResponse,
    ReminderRunResponse,
    PENDING_STATUSES,
    DEFAULT_REMINDER_DAYS,
)
from innovaport.modules.quotes import exporter
from innovaport.modules.auto_responses.service import AutoResponseService
from innovaport.modules.auto_responses.matching import build_context, render_template
from innovaport.modules.notifications import templates
from innovaport.modules.notifications.email_client import EmailDeliveryError
from innovaport.modules.notifications.service import NotificationService
from innovaport.config.plans_config import can_receive_quote, get_plan_limits, has_feature, normalize_tier
from innovaport.database.supabase_client import first_row, utc_now_iso
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Iterable, Tuple
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400

EXPORT_FORMATS = {
    "pdf": "export_pdf",
    "html": "export_pdf",
    "csv": "export_excel",
    "excel": "export_excel",
}


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a Supabase timestamp; naive values are taken as UTC"""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def month_start(now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def count_quotes_this_month(supabase: Client, user_id: str, now: Optional[datetime] = None) -> int:
    """Quotes received since the first day of the current UTC month"""
    result = supabase.table("quotes")\
        .select("id", count="exact")\
        .eq("user_id", user_id)\
        .gte("created_at", month_start(now).isoformat())\
        .execute()
    return result.count or 0


def whole_days_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // SECONDS_PER_DAY)


def should_send_reminder(
    created_at: datetime,
    last_reminder_at: Optional[datetime],
    reminder_days: Iterable[int],
    now: datetime,
) -> Tuple[bool, int]:
    """Returns (due, days since the quote was created).

    A reminder is due on each configured day count, at most once per day.
    """
    days_since_quote = whole_days_between(created_at, now)
    if days_since_quote not in set(reminder_days):
        return False, days_since_quote
    if last_reminder_at is None:
        return True, days_since_quote
    return whole_days_between(last_reminder_at, now) >= 1, days_since_quote


class QuoteService:
    def __init__(
        self,
        supabase: Client,
        notifications: NotificationService,
        auto_responses: Optional[AutoResponseService] = None
    ):
        self.supabase = supabase
        self.notifications = notifications
        self.auto_responses = auto_responses or AutoResponseService(supabase)

    # Public submission

    def _get_profile_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select("id, username, full_name, email, subscription_tier")\
            .eq("username", username)\
            .limit(1)\
            .execute()
        return first_row(result)

    def _client_message(self, quote: Dict[str, Any], profile: Dict[str, Any]):
        """Auto-response when a template matches, otherwise the generic confirmation"""
        developer_name = profile.get("full_name") or profile.get("username")
        template = self.auto_responses.find_matching_template(profile["id"], quote)
        if template:
            subject, body_html = render_template(
                template, build_context(quote, developer_name, profile.get("email"))
            )
            logger.info(f"Auto-response '{template.get('name')}' selected for quote {quote.get('id')}")
            return templates.auto_response(
                to=quote["email"],
                subject=subject,
                rendered_body_html=body_html,
                developer_name=developer_name,
                developer_email=profile.get("email"),
            )
        return templates.quote_confirmation(to=quote["email"], client_name=quote["name"])

    async def submit_quote(self, quote_data: QuoteCreate) -> QuoteSubmitResponse:
        """Store a public quote request and notify both parties"""
        try:
            profile = self._get_profile_by_username(quote_data.username)
            if not profile:
                raise HTTPException(status_code=404, detail="Portfolio not found")

            tier = normalize_tier(profile.get("subscription_tier"))
            if not can_receive_quote(tier, count_quotes_this_month(self.supabase, profile["id"])):
                max_quotes = get_plan_limits(tier)["max_quotes_per_month"]
                logger.info(f"Quote rejected for {profile['id']}: monthly limit of {max_quotes} reached")
                raise HTTPException(
                    status_code=403,
                    detail="This developer has reached their monthly quote limit. Please try again later."
                )

            result = self.supabase.table("quotes").insert({
                "user_id": profile["id"],
                "name": quote_data.name,
                "email": quote_data.email,
                "phone": quote_data.phone or None,
                "company": quote_data.company or None,
                "location": quote_data.location or None,
                "project_type": quote_data.project_type,
                "platforms": quote_data.platforms.model_dump(exclude_none=True) if quote_data.platforms else {},
                "budget": quote_data.budget,
                "deadline": quote_data.deadline or None,
                "features": quote_data.features,
                "design_pref": quote_data.design_pref or None,
                "description": quote_data.description,
                "has_vague_idea": quote_data.has_vague_idea,
                "contact_pref": quote_data.contact_pref or "Email",
                "consent_contact": quote_data.consent_contact,
                "consent_privacy": quote_data.consent_privacy,
                "status": "new",
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save quote request")
            quote = result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        developer_email = profile.get("email") or quote["email"]
        await self.notifications.send_best_effort(
            templates.quote_notification(
                to=developer_email,
                developer_name=profile.get("full_name") or profile["username"],
                quote=quote,
            ),
            self._client_message(quote, profile),
        )

        return QuoteSubmitResponse(
            success=True,
            message="Quote request saved successfully",
            quote_id=quote["id"],
        )

    # Owner management

    def list_quotes(
        self,
        user_id: str,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[QuoteResponse]:
        try:
            query = self.supabase.table("quotes")\
                .select("*")\
                .eq("user_id", user_id)
            if status:
                query = query.eq("status", status)
            result = query\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [QuoteResponse(**q) for q in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _get_owned_quote(self, quote_id: str, user_id: str) -> Dict[str, Any]:
        """404 when missing, 403 when the quote belongs to someone else"""
        result = self.supabase.table("quotes")\
            .select("*")\
            .eq("id", quote_id)\
            .limit(1)\
            .execute()
        quote = first_row(result)
        if not quote:
            raise HTTPException(status_code=404, detail="Quote not found")
        if quote.get("user_id") != user_id:
            logger.warning(f"User {user_id} attempted to access quote {quote_id}")
            raise HTTPException(status_code=403, detail="Access to this quote is not allowed")
        return quote

    def get_quote(self, quote_id: str, user_id: str) -> QuoteResponse:
        try:
            result = self.supabase.table("quotes")\
                .select("*")\
                .eq("id", quote_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            quote = first_row(result)
            if not quote:
                raise HTTPException(status_code=404, detail="Quote not found")
            return QuoteResponse(**quote)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_quote(self, quote_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("quotes")\
                .delete()\
                .eq("id", quote_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Quote not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def update_status(self, quote_id: str, new_status: str, profile: Dict[str, Any]) -> QuoteActionResponse:
        """Change a quote's status and tell the client when they agreed to be contacted"""
        try:
            quote = self._get_owned_quote(quote_id, profile["id"])
            old_status = quote.get("status")

            result = self.supabase.table("quotes")\
                .update({"status": new_status, "updated_at": utc_now_iso()})\
                .eq("id", quote_id)\
                .eq("user_id", profile["id"])\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Quote not found")
            updated = result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        email_sent = None
        if old_status != new_status and quote.get("consent_contact"):
            settings_row = self._get_reminder_settings_row(profile["id"])
            if not settings_row or settings_row.get("notify_on_status_change") is not False:
                outcome = await self.notifications.send_best_effort(
                    templates.status_update(
                        to=quote["email"],
                        client_name=quote["name"],
                        developer_name=profile.get("full_name") or profile.get("username"),
                        developer_email=profile.get("email"),
                        quote=updated,
                        old_status=old_status,
                        new_status=new_status,
                    )
                )
                email_sent = outcome[0]

        return QuoteActionResponse(
            success=True,
            message="Status updated",
            quote=QuoteResponse(**updated),
            email_sent=email_sent,
        )

    def update_notes(self, quote_id: str, internal_notes: Optional[str], user_id: str) -> QuoteResponse:
        try:
            result = self.supabase.table("quotes")\
                .update({"internal_notes": internal_notes, "updated_at": utc_now_iso()})\
                .eq("id", quote_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Quote not found")
            return QuoteResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def respond(self, quote_id: str, respond_data: QuoteRespondRequest, profile: Dict[str, Any]) -> QuoteActionResponse:
        """E-mail the developer's reply to the client; a new quote moves to discussing"""
        try:
            quote = self._get_owned_quote(quote_id, profile["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        try:
            await self.notifications.send(
                templates.developer_response(
                    to=quote["email"],
                    client_name=quote["name"],
                    developer_name=profile.get("full_name") or profile.get("username") or "Developer",
                    developer_email=respond_data.developer_email or profile.get("email"),
                    response_text=respond_data.response,
                    quote=quote,
                )
            )
        except EmailDeliveryError as e:
            logger.error(f"Failed to send response for quote {quote_id}: {e}")
            raise HTTPException(status_code=502, detail="Failed to send the response e-mail")

        if quote.get("status") == "new":
            try:
                result = self.supabase.table("quotes")\
                    .update({"status": "discussing", "updated_at": utc_now_iso()})\
                    .eq("id", quote_id)\
                    .execute()
                if result.data:
                    quote = result.data[0]
            except Exception as e:
                raise HTTPException(status_code=500, detail=str(e))

        return QuoteActionResponse(
            success=True,
            message="Response sent successfully",
            quote=QuoteResponse(**quote),
            email_sent=True,
        )

    def export_quote(self, quote_id: str, export_format: str, profile: Dict[str, Any]) -> Tuple[str, str, str]:
        """Returns (content, media type, filename)"""
        feature = EXPORT_FORMATS.get(export_format)
        if feature is None:
            raise HTTPException(status_code=400, detail="Unsupported export format")
        if not has_feature(profile.get("subscription_tier"), feature):
            raise HTTPException(
                status_code=403,
                detail="Quote export is available on the Pro and Premium plans"
            )

        try:
            quote = self._get_owned_quote(quote_id, profile["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if export_format in ("pdf", "html"):
            return exporter.export_html(quote, profile), "text/html; charset=utf-8", f"quote-{quote_id}.html"
        return exporter.export_csv(quote), "text/csv; charset=utf-8", f"quote-{quote_id}.csv"

    # Reminders

    def _get_reminder_settings_row(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("quote_reminder_settings")\
                .select("*")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            return first_row(result)
        except Exception as e:
            logger.error(f"Error loading reminder settings for {user_id}: {e}")
            return None

    def get_reminder_settings(self, user_id: str) -> ReminderSettingsResponse:
        """Stored settings, or the defaults when the user never saved any"""
        row = self._get_reminder_settings_row(user_id)
        if not row:
            return ReminderSettingsResponse(user_id=user_id)
        return ReminderSettingsResponse(
            user_id=user_id,
            enabled=row.get("enabled", True),
            reminder_days=row.get("reminder_days") or list(DEFAULT_REMINDER_DAYS),
            notify_on_status_change=row.get("notify_on_status_change", True),
        )

    def update_reminder_settings(self, user_id: str, settings_data: ReminderSettings) -> ReminderSettingsResponse:
        try:
            result = self.supabase.table("quote_reminder_settings").upsert({
                "user_id": user_id,
                **settings_data.model_dump(),
                "updated_at": utc_now_iso(),
            }, on_conflict="user_id").execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save reminder settings")

            return ReminderSettingsResponse(user_id=user_id, **settings_data.model_dump())
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def send_reminders(self, now: Optional[datetime] = None) -> ReminderRunResponse:
        """Follow-up reminders for pending quotes; run daily by the scheduler"""
        now = now or datetime.now(timezone.utc)
        try:
            settings_rows = self.supabase.table("quote_reminder_settings")\
                .select("*")\
                .eq("enabled", True)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not settings_rows.data:
            return ReminderRunResponse(success=True, message="No reminder settings enabled", reminders_sent=0)

        sent: List[str] = []
        errors: List[str] = []

        for setting in settings_rows.data:
            user_id = setting["user_id"]
            reminder_days = setting.get("reminder_days") or DEFAULT_REMINDER_DAYS

            try:
                profile = first_row(
                    self.supabase.table("profiles")
                    .select("id, username, full_name, email")
                    .eq("id", user_id)
                    .limit(1)
                    .execute()
                )
                quotes = self.supabase.table("quotes")\
                    .select("*")\
                    .eq("user_id", user_id)\
                    .in_("status", list(PENDING_STATUSES))\
                    .execute()
            except Exception as e:
                logger.error(f"Error loading pending quotes for {user_id}: {e}")
                continue

            if not profile or not profile.get("email"):
                continue

            for quote in quotes.data or []:
                created_at = parse_timestamp(quote.get("created_at"))
                if created_at is None:
                    continue
                due, days_since_quote = should_send_reminder(
                    created_at,
                    parse_timestamp(quote.get("last_reminder_sent_at")),
                    reminder_days,
                    now,
                )
                if not due:
                    continue

                try:
                    await self.notifications.send(
                        templates.follow_up_reminder(
                            to=profile["email"],
                            developer_name=profile.get("full_name") or profile.get("username"),
                            quote=quote,
                            days_since_quote=days_since_quote,
                        )
                    )
                    self.supabase.table("quotes")\
                        .update({
                            "last_reminder_sent_at": now.isoformat(),
                            "reminders_count": (quote.get("reminders_count") or 0) + 1,
                        })\
                        .eq("id", quote["id"])\
                        .execute()
                    sent.append(quote["id"])
                except Exception as e:
                    logger.error(f"Error sending reminder for quote {quote['id']}: {e}")
                    errors.append(f"Quote {quote['id']}: {e}")

        logger.info(f"Quote reminders: {len(sent)} sent, {len(errors)} failed")
        return ReminderRunResponse(
            success=True,
            message="Reminders processed",
            reminders_sent=len(sent),
            errors=errors,
        )
