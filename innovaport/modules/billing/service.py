from supabase import Client
from innovaport.config import settings
from innovaport.config.plans_config import PAID_PLANS, PLAN_PRICES, get_plan_limits, normalize_tier
from innovaport.modules.billing.gateway import StripeGateway, StripeNotConfiguredError
from innovaport.modules.billing.subscriptions import SubscriptionStore, period_bounds
from innovaport.modules.billing.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CheckoutSessionResponse,
    SubscriptionView,
    UsageSummary,
)
from innovaport.modules.promo_codes.service import PromoCodeService
from innovaport.modules.projects.service import ProjectService
from innovaport.modules.quotes.service import count_quotes_this_month
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from fastapi import HTTPException
import logging
import stripe

logger = logging.getLogger(__name__)

STRIPE_LOCALES = {
    "fr": "fr",
    "fr-FR": "fr",
    "en": "en",
    "en-US": "en",
    "en-GB": "en",
}

PLAN_NAMES = {
    "pro": "Pro",
    "premium": "Premium",
}


class BillingService:
    def __init__(self, supabase: Client, gateway: StripeGateway):
        self.supabase = supabase
        self.gateway = gateway
        self.store = SubscriptionStore(supabase)

    def _price_id(self, plan: str) -> str:
        price_id = settings.get_price_id(plan)
        if not price_id:
            raise HTTPException(
                status_code=500,
                detail=f"Stripe price id is not configured for the {plan} plan"
            )
        return price_id

    def _upgrade_existing(self, user_id: str, subscription_row: Dict[str, Any], plan: str) -> CheckoutResponse:
        """Swap the price on a live subscription instead of opening a new checkout"""
        price_id = self._price_id(plan)
        subscription_id = subscription_row["stripe_subscription_id"]
        current = self.gateway.retrieve_subscription(subscription_id)
        items = (current.get("items") or {}).get("data") or []
        if not items:
            raise HTTPException(status_code=500, detail="Subscription has no items to update")

        self.gateway.update_subscription_price(subscription_id, items[0]["id"], price_id)
        updated = self.gateway.retrieve_subscription(subscription_id)
        period_start, period_end = period_bounds(updated)

        self.store.update(subscription_id, {
            "plan": plan,
            "current_period_start": period_start,
            "current_period_end": period_end,
        })
        self.store.set_profile_tier(user_id, plan)
        logger.info(f"Subscription {subscription_id} of {user_id} moved to {plan}")
        return CheckoutResponse(success=True, message="Subscription updated", upgraded=True)

    def _ensure_customer(self, profile: Dict[str, Any], email: Optional[str]) -> Optional[str]:
        customer_id = profile.get("stripe_customer_id")
        if customer_id:
            return customer_id

        customer = self.gateway.find_customer_by_email(email) if email else None
        if not customer:
            customer = self.gateway.create_customer(
                email=email,
                name=profile.get("full_name"),
                metadata={"user_id": profile["id"]},
            )
        customer_id = customer["id"]
        self.supabase.table("profiles")\
            .update({"stripe_customer_id": customer_id})\
            .eq("id", profile["id"])\
            .execute()
        return customer_id

    def _promo_discount(self, promo: Dict[str, Any], plan: str) -> Optional[str]:
        """Create a one-off Stripe coupon for an InnovaPort promo code; None on failure"""
        code = promo["code"]
        params: Dict[str, Any] = {
            "id": f"innovaport_{code.lower()}_{int(datetime.now(timezone.utc).timestamp() * 1000)}",
            "duration": "forever",
            "name": f"InnovaPort {code}",
        }
        if promo["discount_type"] == "percentage":
            params["percent_off"] = promo["discount_value"]
        else:
            params["amount_off"] = min(round(float(promo["discount_value"]) * 100), PLAN_PRICES[plan])
            params["currency"] = "usd"
        try:
            return self.gateway.create_coupon(**params)["id"]
        except Exception as e:
            logger.warning(f"Could not create coupon for promo code {code}: {e}")
            return None

    def create_checkout(self, profile: Dict[str, Any], user_email: Optional[str], checkout: CheckoutRequest) -> CheckoutResponse:
        plan = checkout.plan
        if plan not in PAID_PLANS:
            raise HTTPException(status_code=400, detail="Invalid plan")
        if not self.gateway.is_configured:
            raise HTTPException(status_code=500, detail="Stripe is not configured")

        user_id = profile["id"]
        language = "fr" if checkout.locale == "fr" else "en"

        try:
            active = self.store.get_for_user(user_id, status="active")
            if active and active.get("stripe_subscription_id"):
                return self._upgrade_existing(user_id, active, plan)

            price_id = self._price_id(plan)
            email = profile.get("email") or user_email
            customer_id = self._ensure_customer(profile, email)
            promo = PromoCodeService(self.supabase).usable_promo(checkout.promo_code, plan)

            base_url = settings.app_url.rstrip("/")
            metadata = {
                "user_id": user_id,
                "plan": plan,
                "language": language,
                "plan_name": PLAN_NAMES[plan],
            }
            subscription_metadata = dict(metadata)
            if promo:
                metadata.update({
                    "innovaport_promo_code": promo["code"],
                    "innovaport_discount_type": promo["discount_type"],
                    "innovaport_discount_value": str(promo["discount_value"]),
                })
                subscription_metadata["innovaport_promo_code"] = promo["code"]

            params: Dict[str, Any] = {
                "mode": "subscription",
                "payment_method_types": ["card"],
                "line_items": [{"price": price_id, "quantity": 1}],
                "locale": STRIPE_LOCALES.get(checkout.locale, "en"),
                "success_url": f"{base_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}&lang={language}&plan={plan}",
                "cancel_url": f"{base_url}/checkout/cancel?lang={language}&plan={plan}",
                "billing_address_collection": "required",
                "metadata": metadata,
                "subscription_data": {"metadata": subscription_metadata},
            }
            if customer_id:
                params["customer"] = customer_id
            elif email:
                params["customer_email"] = email

            coupon_id = self._promo_discount(promo, plan) if promo else None
            if coupon_id:
                # Stripe rejects discounts together with allow_promotion_codes
                params["discounts"] = [{"coupon": coupon_id}]
            else:
                params["allow_promotion_codes"] = True

            session = self.gateway.create_checkout_session(**params)
            logger.info(f"Checkout session {session['id']} created for {user_id} ({plan})")
            return CheckoutResponse(
                success=True,
                session_id=session["id"],
                url=session.get("url"),
                language=language,
            )
        except HTTPException:
            raise
        except StripeNotConfiguredError as e:
            raise HTTPException(status_code=500, detail=str(e))
        except stripe.StripeError as e:
            logger.error(f"Stripe error during checkout for {user_id}: {e}")
            raise HTTPException(status_code=502, detail=f"Stripe error: {e.user_message or str(e)}")
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_checkout_session(self, session_id: Optional[str]) -> CheckoutSessionResponse:
        if not session_id:
            raise HTTPException(status_code=400, detail="session_id is required")
        try:
            session = self.gateway.retrieve_checkout_session(session_id)
        except stripe.InvalidRequestError:
            raise HTTPException(status_code=404, detail="Checkout session not found")
        except stripe.StripeError as e:
            raise HTTPException(status_code=502, detail=f"Stripe error: {e.user_message or str(e)}")
        except StripeNotConfiguredError as e:
            raise HTTPException(status_code=500, detail=str(e))

        metadata = session.get("metadata") or {}
        return CheckoutSessionResponse(
            id=session["id"],
            status=session.get("status"),
            payment_status=session.get("payment_status"),
            amount_total=session.get("amount_total"),
            currency=session.get("currency"),
            customer_email=session.get("customer_email") or (session.get("customer_details") or {}).get("email"),
            plan=metadata.get("plan"),
            metadata=metadata,
        )

    def get_subscription(self, profile: Dict[str, Any]) -> SubscriptionView:
        try:
            tier = normalize_tier(profile.get("subscription_tier"))
            return SubscriptionView(
                subscription_tier=tier,
                subscription=self.store.get_for_user(profile["id"]),
                limits=get_plan_limits(tier),
                usage=UsageSummary(
                    projects=ProjectService(self.supabase).count_projects(profile["id"]),
                    quotes_this_month=count_quotes_this_month(self.supabase, profile["id"]),
                ),
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
