from supabase import Client
from innovaport.modules.contact.schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactSubmitResponse,
    NewsletterSubscribe,
    NewsletterResponse,
    AdminReplyResponse,
)
from innovaport.modules.notifications import templates
from innovaport.modules.notifications.email_client import EmailDeliveryError
from innovaport.modules.notifications.service import NotificationService
from innovaport.database.supabase_client import first_row, utc_now_iso
from typing import List, Optional, Dict, Any, Tuple
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, supabase: Client, notifications: NotificationService):
        self.supabase = supabase
        self.notifications = notifications

    async def submit_message(self, message_data: ContactMessageCreate) -> ContactSubmitResponse:
        try:
            result = self.supabase.table("contact_messages").insert({
                "name": message_data.name,
                "email": message_data.email,
                "subject": message_data.subject or None,
                "message": message_data.message,
                "status": "new",
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save message")
            saved = result.data[0]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        await self.notifications.send_best_effort(
            templates.contact_confirmation(to=message_data.email, name=message_data.name)
        )
        return ContactSubmitResponse(success=True, message="Message sent successfully", id=saved["id"])

    def subscribe_newsletter(self, subscription: NewsletterSubscribe) -> Tuple[NewsletterResponse, bool]:
        """Returns (response, created); unsubscribed addresses are reactivated"""
        try:
            existing = first_row(
                self.supabase.table("newsletter_subscriptions")
                .select("id, status")
                .eq("email", subscription.email)
                .limit(1)
                .execute()
            )
            if existing:
                if existing.get("status") == "active":
                    return NewsletterResponse(success=True, message="You are already subscribed"), False
                self.supabase.table("newsletter_subscriptions")\
                    .update({
                        "status": "active",
                        "source": subscription.source,
                        "subscribed_at": utc_now_iso(),
                        "unsubscribed_at": None,
                    })\
                    .eq("id", existing["id"])\
                    .execute()
                logger.info(f"Newsletter subscription {existing['id']} reactivated")
                return NewsletterResponse(success=True, message="Your subscription has been reactivated", id=existing["id"]), False

            result = self.supabase.table("newsletter_subscriptions").insert({
                "email": subscription.email,
                "source": subscription.source,
                "status": "active",
            }).execute()
            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to subscribe")
            return NewsletterResponse(success=True, message="Subscription successful", id=result.data[0]["id"]), True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_messages(self, status: Optional[str] = None, limit: int = 100, offset: int = 0) -> List[ContactMessageResponse]:
        try:
            query = self.supabase.table("contact_messages").select("*")
            if status:
                query = query.eq("status", status)
            result = query\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [ContactMessageResponse(**m) for m in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    async def reply_to_message(self, message_id: str, reply_message: str, admin_profile: Dict[str, Any]) -> AdminReplyResponse:
        try:
            message = first_row(
                self.supabase.table("contact_messages")
                .select("*")
                .eq("id", message_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not message:
            raise HTTPException(status_code=404, detail="Message not found")

        try:
            await self.notifications.send(
                templates.admin_reply(
                    to=message["email"],
                    client_name=message["name"],
                    original_subject=message.get("subject"),
                    original_message=message["message"],
                    reply_message=reply_message,
                    admin_name=admin_profile.get("full_name") or f"The {templates.APP_NAME} team",
                    admin_email=admin_profile.get("email"),
                )
            )
        except EmailDeliveryError as e:
            logger.error(f"Failed to send reply to contact message {message_id}: {e}")
            raise HTTPException(status_code=502, detail="Failed to send the reply e-mail")

        try:
            self.supabase.table("contact_messages")\
                .update({"status": "replied", "replied_at": utc_now_iso()})\
                .eq("id", message_id)\
                .execute()
        except Exception as e:
            logger.error(f"Reply sent but message {message_id} could not be marked replied: {e}")

        logger.info(f"Admin {admin_profile.get('id')} replied to contact message {message_id}")
        return AdminReplyResponse(success=True, message="Reply sent successfully")
