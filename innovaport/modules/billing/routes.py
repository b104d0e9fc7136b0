from fastapi import APIRouter, Depends, HTTPException, Request
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.billing.gateway import StripeGateway, StripeNotConfiguredError, get_stripe_gateway
from innovaport.modules.billing.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CheckoutSessionResponse,
    SubscriptionView,
    WebhookAck,
)
from innovaport.modules.billing.service import BillingService
from innovaport.modules.billing.webhook import StripeWebhookHandler
from innovaport.modules.promo_codes.schemas import PromoValidateRequest, PromoValidationResponse
from innovaport.modules.promo_codes.service import PromoCodeService
from innovaport.core.dependencies import get_current_user, get_current_profile
from supabase import Client
from typing import Dict, Optional
import logging
import stripe

logger = logging.getLogger(__name__)

router = APIRouter(tags=["billing"])


def get_billing_service(
    supabase: Client = Depends(get_supabase_admin),
    gateway: StripeGateway = Depends(get_stripe_gateway)
) -> BillingService:
    return BillingService(supabase, gateway)


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout(
    checkout: CheckoutRequest,
    current_user: Dict = Depends(get_current_user),
    profile: Dict = Depends(get_current_profile),
    service: BillingService = Depends(get_billing_service)
):
    """Start a Stripe Checkout for a paid plan, or switch the plan of a live subscription"""
    return service.create_checkout(profile, current_user.get("email"), checkout)


@router.get("/checkout/session", response_model=CheckoutSessionResponse)
async def get_checkout_session(
    session_id: Optional[str] = None,
    current_user: Dict = Depends(get_current_user),
    service: BillingService = Depends(get_billing_service)
):
    return service.get_checkout_session(session_id)


@router.get("/billing/subscription", response_model=SubscriptionView)
async def get_subscription(
    profile: Dict = Depends(get_current_profile),
    service: BillingService = Depends(get_billing_service)
):
    return service.get_subscription(profile)


@router.post("/promo-codes/validate", response_model=PromoValidationResponse)
async def validate_promo_code(
    request_data: PromoValidateRequest,
    supabase: Client = Depends(get_supabase_admin)
):
    return PromoCodeService(supabase).validate(request_data.code, request_data.plan)


@router.post("/webhooks/stripe", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    supabase: Client = Depends(get_supabase_admin),
    gateway: StripeGateway = Depends(get_stripe_gateway)
):
    """Stripe event receiver; the raw body is needed for signature verification"""
    signature = request.headers.get("stripe-signature")
    if not signature:
        raise HTTPException(status_code=400, detail="Missing Stripe-Signature header")

    payload = await request.body()
    try:
        event = gateway.verify_event(payload, signature)
    except StripeNotConfiguredError:
        logger.error("Stripe webhook received but STRIPE_WEBHOOK_SECRET is not configured")
        raise HTTPException(status_code=500, detail="Webhook secret not configured")
    except stripe.SignatureVerificationError as e:
        logger.warning(f"Stripe webhook signature verification failed: {e}")
        raise HTTPException(status_code=400, detail="Invalid signature")
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payload")

    try:
        return StripeWebhookHandler(supabase, gateway).handle(event)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error processing Stripe event {event.get('type')}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to process webhook")
