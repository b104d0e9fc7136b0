"""
Mirroring Stripe subscriptions into the subscriptions table and profiles.subscription_tier.
Shared by the webhook handler, checkout upgrades and the admin re-sync.
"""

from supabase import Client
from innovaport.config import settings
from innovaport.database.supabase_client import first_row, utc_now_iso
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

MIRRORED_STATUSES = ("active", "trialing", "past_due")
FREE_TIER_STATUSES = ("canceled", "unpaid")


def epoch_to_iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat()


def _first_item(subscription: Dict[str, Any]) -> Dict[str, Any]:
    items = (subscription.get("items") or {}).get("data") or []
    return items[0] if items else {}


def period_bounds(subscription: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Current period as ISO-8601 UTC; newer API versions only carry it on the items"""
    start = subscription.get("current_period_start")
    end = subscription.get("current_period_end")
    if start is None or end is None:
        item = _first_item(subscription)
        start = start if start is not None else item.get("current_period_start")
        end = end if end is not None else item.get("current_period_end")
    return epoch_to_iso(start), epoch_to_iso(end)


def first_price_id(subscription: Dict[str, Any]) -> Optional[str]:
    price = _first_item(subscription).get("price") or {}
    return price.get("id") if isinstance(price, dict) else price


def plan_for_price(price_id: Optional[str]) -> Optional[str]:
    if not price_id:
        return None
    if price_id == settings.stripe_price_id_pro:
        return "pro"
    if price_id == settings.stripe_price_id_premium:
        return "premium"
    return None


def map_status(stripe_status: Optional[str]) -> str:
    return stripe_status if stripe_status in MIRRORED_STATUSES else "canceled"


def customer_id_of(obj: Dict[str, Any]) -> Optional[str]:
    customer = obj.get("customer")
    if isinstance(customer, dict):
        return customer.get("id")
    return customer


class SubscriptionStore:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_by_stripe_id(self, stripe_subscription_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("subscriptions")\
            .select("*")\
            .eq("stripe_subscription_id", stripe_subscription_id)\
            .limit(1)\
            .execute()
        return first_row(result)

    def get_for_user(self, user_id: str, status: Optional[str] = None) -> Optional[Dict[str, Any]]:
        query = self.supabase.table("subscriptions")\
            .select("*")\
            .eq("user_id", user_id)
        if status:
            query = query.eq("status", status)
        result = query.order("created_at", desc=True).limit(1).execute()
        return first_row(result)

    def upsert(
        self,
        user_id: str,
        subscription: Dict[str, Any],
        plan: str,
        status: str,
    ) -> Dict[str, Any]:
        """Insert or update the row keyed by stripe_subscription_id"""
        period_start, period_end = period_bounds(subscription)
        row = {
            "user_id": user_id,
            "stripe_customer_id": customer_id_of(subscription),
            "stripe_subscription_id": subscription["id"],
            "plan": plan,
            "status": status,
            "current_period_start": period_start,
            "current_period_end": period_end,
            "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
            "updated_at": utc_now_iso(),
        }
        result = self.supabase.table("subscriptions")\
            .upsert(row, on_conflict="stripe_subscription_id")\
            .execute()
        return result.data[0] if result.data else row

    def update(self, stripe_subscription_id: str, values: Dict[str, Any]) -> None:
        self.supabase.table("subscriptions")\
            .update({**values, "updated_at": utc_now_iso()})\
            .eq("stripe_subscription_id", stripe_subscription_id)\
            .execute()

    def set_profile_tier(self, user_id: str, tier: str, stripe_customer_id: Optional[str] = None) -> None:
        values: Dict[str, Any] = {"subscription_tier": tier, "updated_at": utc_now_iso()}
        if stripe_customer_id:
            values["stripe_customer_id"] = stripe_customer_id
        self.supabase.table("profiles")\
            .update(values)\
            .eq("id", user_id)\
            .execute()
        logger.info(f"Profile {user_id} tier set to {tier}")

    def find_user_by_customer(self, stripe_customer_id: str) -> Optional[str]:
        result = self.supabase.table("profiles")\
            .select("id")\
            .eq("stripe_customer_id", stripe_customer_id)\
            .limit(1)\
            .execute()
        row = first_row(result)
        return row["id"] if row else None
