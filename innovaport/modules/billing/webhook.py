from supabase import Client
from innovaport.modules.billing.gateway import StripeGateway
from innovaport.modules.billing.subscriptions import (
    SubscriptionStore,
    FREE_TIER_STATUSES,
    customer_id_of,
    first_price_id,
    map_status,
    period_bounds,
    plan_for_price,
)
from innovaport.modules.promo_codes.service import PromoCodeService
from typing import Any, Callable, Dict, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _metadata(obj: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return (obj or {}).get("metadata") or {}


def invoice_subscription_id(invoice: Dict[str, Any]) -> Optional[str]:
    """Subscription id of an invoice; newer API versions nest it under parent"""
    subscription = invoice.get("subscription")
    if isinstance(subscription, dict):
        return subscription.get("id")
    if subscription:
        return subscription
    details = (invoice.get("parent") or {}).get("subscription_details") or {}
    return details.get("subscription")


class StripeWebhookHandler:
    """Applies verified Stripe events to the subscriptions table and profile tiers"""

    def __init__(self, supabase: Client, gateway: StripeGateway):
        self.supabase = supabase
        self.gateway = gateway
        self.store = SubscriptionStore(supabase)
        self.handlers: Dict[str, Callable[[Dict[str, Any]], None]] = {
            "checkout.session.completed": self.handle_checkout_completed,
            "customer.subscription.updated": self.handle_subscription_updated,
            "customer.subscription.deleted": self.handle_subscription_deleted,
            "invoice.payment_succeeded": self.handle_payment_succeeded,
            "invoice.payment_failed": self.handle_payment_failed,
        }

    def handle(self, event: Dict[str, Any]) -> Dict[str, bool]:
        event_type = event.get("type")
        handler = self.handlers.get(event_type)
        if handler is None:
            logger.info(f"Unhandled Stripe event type: {event_type}")
            return {"received": True}
        logger.info(f"Processing Stripe event {event.get('id')} ({event_type})")
        handler(event["data"]["object"])
        return {"received": True}

    def _resolve_checkout_user(self, session: Dict[str, Any], subscription: Dict[str, Any]) -> Optional[str]:
        user_id = _metadata(session).get("user_id") or _metadata(subscription).get("user_id")
        if user_id:
            return user_id

        customer_id = customer_id_of(subscription)
        if not customer_id:
            return None
        try:
            user_id = _metadata(self.gateway.retrieve_customer(customer_id)).get("user_id")
        except Exception as e:
            logger.warning(f"Could not retrieve Stripe customer {customer_id}: {e}")
        if user_id:
            return user_id
        try:
            return self.store.find_user_by_customer(customer_id)
        except Exception as e:
            logger.warning(f"Could not look up profile for customer {customer_id}: {e}")
            return None

    def handle_checkout_completed(self, session: Dict[str, Any]) -> None:
        subscription_id = session.get("subscription")
        if session.get("mode") != "subscription" or not subscription_id:
            logger.info(f"Checkout session {session.get('id')} is not a subscription, skipping")
            return
        if isinstance(subscription_id, dict):
            subscription_id = subscription_id.get("id")

        subscription = self.gateway.retrieve_subscription(subscription_id)
        user_id = self._resolve_checkout_user(session, subscription)
        if not user_id:
            logger.error(f"No user found for subscription {subscription_id}; event acknowledged without changes")
            return

        plan = _metadata(session).get("plan") or _metadata(subscription).get("plan") or "pro"
        promo_code = (
            _metadata(session).get("innovaport_promo_code")
            or _metadata(subscription).get("innovaport_promo_code")
        )
        if promo_code:
            try:
                PromoCodeService(self.supabase).increment_usage(promo_code)
            except Exception as e:
                logger.error(f"Failed to record usage of promo code {promo_code}: {e}")

        status = "active" if subscription.get("status") == "active" else "trialing"
        try:
            self.store.upsert(user_id, subscription, plan, status)
            self.store.set_profile_tier(user_id, plan, customer_id_of(subscription))
        except Exception as e:
            logger.error(f"Failed to store subscription {subscription_id} for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to process webhook")

        logger.info(f"Subscription {subscription_id} activated for {user_id} on plan {plan}")

    def handle_subscription_updated(self, subscription: Dict[str, Any]) -> None:
        existing = None
        try:
            existing = self.store.get_by_stripe_id(subscription["id"])
        except Exception as e:
            logger.warning(f"Could not load subscription row {subscription['id']}: {e}")

        user_id = _metadata(subscription).get("user_id") or (existing or {}).get("user_id")
        if not user_id:
            logger.warning(f"No user found for updated subscription {subscription['id']}")
            return

        plan = (
            _metadata(subscription).get("plan")
            or plan_for_price(first_price_id(subscription))
            or (existing or {}).get("plan")
            or "pro"
        )
        stripe_status = subscription.get("status")
        period_start, period_end = period_bounds(subscription)

        try:
            self.store.update(subscription["id"], {
                "plan": plan,
                "status": map_status(stripe_status),
                "current_period_start": period_start,
                "current_period_end": period_end,
                "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
            })
        except Exception as e:
            logger.error(f"Failed to update subscription {subscription['id']}: {e}")

        try:
            if stripe_status in FREE_TIER_STATUSES:
                self.store.set_profile_tier(user_id, "free")
            elif stripe_status in ("active", "trialing"):
                self.store.set_profile_tier(user_id, plan)
        except Exception as e:
            logger.error(f"Failed to update tier for {user_id}: {e}")

    def handle_subscription_deleted(self, subscription: Dict[str, Any]) -> None:
        user_id = _metadata(subscription).get("user_id")
        if not user_id:
            try:
                user_id = (self.store.get_by_stripe_id(subscription["id"]) or {}).get("user_id")
            except Exception as e:
                logger.warning(f"Could not load subscription row {subscription['id']}: {e}")
        if not user_id:
            logger.warning(f"No user found for deleted subscription {subscription['id']}")
            return

        self.store.update(subscription["id"], {"status": "canceled"})
        self.store.set_profile_tier(user_id, "free")
        logger.info(f"Subscription {subscription['id']} canceled; {user_id} moved to free")

    def handle_payment_succeeded(self, invoice: Dict[str, Any]) -> None:
        subscription_id = invoice_subscription_id(invoice)
        if not subscription_id:
            return
        subscription = self.gateway.retrieve_subscription(subscription_id)
        period_start, period_end = period_bounds(subscription)
        self.store.update(subscription_id, {
            "current_period_start": period_start,
            "current_period_end": period_end,
        })

    def handle_payment_failed(self, invoice: Dict[str, Any]) -> None:
        subscription_id = invoice_subscription_id(invoice)
        if not subscription_id:
            return
        self.store.update(subscription_id, {"status": "past_due"})
        logger.warning(f"Payment failed for subscription {subscription_id}")
