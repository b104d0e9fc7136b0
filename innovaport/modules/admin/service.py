from supabase import Client
from innovaport.modules.admin.schemas import (
    AdminUserCreate,
    AdminUserUpdate,
    AdminUserResponse,
    SubscriptionSyncResponse,
)
from innovaport.modules.billing.gateway import StripeGateway
from innovaport.modules.billing.subscriptions import (
    SubscriptionStore,
    first_price_id,
    map_status,
    plan_for_price,
)
from innovaport.database.supabase_client import first_row, utc_now_iso
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging
import re

logger = logging.getLogger(__name__)


def username_from_email(email: str) -> str:
    local_part = email.split("@")[0].lower()
    return re.sub(r"[^a-z0-9]", "-", local_part)[:50] or "user"


class AdminService:
    def __init__(self, supabase: Client, gateway: Optional[StripeGateway] = None):
        self.supabase = supabase
        self.gateway = gateway
        self.store = SubscriptionStore(supabase)

    def _get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        return first_row(
            self.supabase.table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )

    def _username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        query = self.supabase.table("profiles").select("id").eq("username", username)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.limit(1).execute().data)

    def list_users(
        self,
        role: Optional[str] = None,
        tier: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[AdminUserResponse]:
        try:
            query = self.supabase.table("profiles").select("*")
            if role:
                query = query.eq("role", role)
            if tier:
                query = query.eq("subscription_tier", tier)
            result = query\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [AdminUserResponse(**u) for u in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_user(self, user_data: AdminUserCreate, admin_id: str) -> AdminUserResponse:
        """Create a confirmed auth user and its profile"""
        username = user_data.username or username_from_email(user_data.email)
        try:
            if self._username_taken(username):
                raise HTTPException(status_code=409, detail="Username already taken")

            auth_response = self.supabase.auth.admin.create_user({
                "email": user_data.email,
                "password": user_data.password,
                "email_confirm": True,
                "user_metadata": {"full_name": user_data.full_name, "username": username},
            })
            if not auth_response or not auth_response.user:
                raise HTTPException(status_code=500, detail="Failed to create user")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e))

        user = auth_response.user
        try:
            result = self.supabase.table("profiles").upsert({
                "id": user.id,
                "email": user.email or user_data.email,
                "username": username,
                "full_name": user_data.full_name,
                "role": user_data.role,
                "subscription_tier": "free",
            }, on_conflict="id").execute()
        except Exception as e:
            logger.error(f"Profile creation failed for {user.id}, removing auth user: {e}")
            self.supabase.auth.admin.delete_user(user.id)
            raise HTTPException(status_code=500, detail=str(e))

        logger.info(f"Admin {admin_id} created user {user.id} ({username}, {user_data.role})")
        row = result.data[0] if result.data else {
            "id": user.id, "email": user_data.email, "username": username,
            "full_name": user_data.full_name, "role": user_data.role,
        }
        return AdminUserResponse(**row)

    def update_user(self, user_id: str, user_data: AdminUserUpdate, admin_id: str) -> AdminUserResponse:
        try:
            update_data = user_data.model_dump(exclude_unset=True)
            if update_data.get("username") and self._username_taken(update_data["username"], exclude_id=user_id):
                raise HTTPException(status_code=409, detail="Username already taken")
            update_data["updated_at"] = utc_now_iso()

            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            logger.info(f"Admin {admin_id} updated user {user_id}: {', '.join(sorted(update_data))}")
            return AdminUserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_user(self, user_id: str, admin_id: str) -> bool:
        try:
            profile = self._get_profile(user_id)
            if not profile:
                raise HTTPException(status_code=404, detail="User not found")
            if user_id == admin_id:
                raise HTTPException(status_code=400, detail="You cannot delete your own account")
            if profile.get("role") == "admin":
                admins = self.supabase.table("profiles")\
                    .select("id", count="exact")\
                    .eq("role", "admin")\
                    .execute()
                if (admins.count or 0) <= 1:
                    raise HTTPException(status_code=400, detail="The last administrator cannot be deleted")

            try:
                self.supabase.auth.admin.delete_user(user_id)
            except Exception as e:
                if "not found" not in str(e).lower():
                    raise
                logger.warning(f"Auth user {user_id} already gone, removing profile only")

            self.supabase.table("profiles").delete().eq("id", user_id).execute()
            logger.info(f"Admin {admin_id} deleted user {user_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _find_stripe_subscription(self, profile: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        customer_id = profile.get("stripe_customer_id")
        if not customer_id and profile.get("email"):
            customer = self.gateway.find_customer_by_email(profile["email"])
            if customer:
                customer_id = customer["id"]
                self.supabase.table("profiles")\
                    .update({"stripe_customer_id": customer_id})\
                    .eq("id", profile["id"])\
                    .execute()
                profile["stripe_customer_id"] = customer_id
        if not customer_id:
            return None
        subscriptions = self.gateway.list_subscriptions(customer_id)
        return subscriptions[0] if subscriptions else None

    def sync_subscription(self, user_id: str, admin_id: str) -> SubscriptionSyncResponse:
        """Reconcile a user's tier and subscription row with what Stripe reports"""
        if self.gateway is None or not self.gateway.is_configured:
            raise HTTPException(status_code=500, detail="Stripe is not configured")

        try:
            profile = self._get_profile(user_id)
            if not profile:
                raise HTTPException(status_code=404, detail="User not found")

            previous_tier = profile.get("subscription_tier") or "free"
            subscription = self._find_stripe_subscription(profile)
            stripe_status = subscription.get("status") if subscription else None

            plan = None
            if subscription:
                plan = (
                    plan_for_price(first_price_id(subscription))
                    or (subscription.get("metadata") or {}).get("plan")
                    or "pro"
                )
            correct_tier = plan if stripe_status in ("active", "trialing") else "free"

            corrections = []
            if previous_tier != correct_tier:
                self.store.set_profile_tier(user_id, correct_tier, profile.get("stripe_customer_id"))
                corrections.append(f"Profile tier updated: {previous_tier} -> {correct_tier}")
            if subscription:
                self.store.upsert(user_id, subscription, plan, map_status(stripe_status))
                corrections.append("Subscription row synchronised from Stripe")

            logger.info(f"Admin {admin_id} synced subscription of {user_id}: {corrections or 'no changes'}")
            return SubscriptionSyncResponse(
                success=True,
                user_id=user_id,
                previous_tier=previous_tier,
                current_tier=correct_tier,
                has_stripe_subscription=subscription is not None,
                stripe_subscription_status=stripe_status,
                corrections=corrections,
                message="Corrections applied" if corrections else "No corrections needed",
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Subscription sync failed for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
