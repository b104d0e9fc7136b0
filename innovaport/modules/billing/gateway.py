"""
Thin wrapper around the Stripe API.
Every call returns plain dicts so the billing code never depends on StripeObject behaviour.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import stripe

from innovaport.config import settings

logger = logging.getLogger(__name__)


class StripeNotConfiguredError(Exception):
    pass


class StripeGateway:
    def __init__(self, api_key: Optional[str], webhook_secret: Optional[str] = None):
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _require_key(self) -> str:
        if not self.api_key:
            raise StripeNotConfiguredError("STRIPE_SECRET_KEY is not configured")
        return self.api_key

    def verify_event(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Check the Stripe-Signature header and return the decoded event.

        Raises stripe.SignatureVerificationError on a bad signature and
        ValueError on a malformed payload.
        """
        if not self.webhook_secret:
            raise StripeNotConfiguredError("STRIPE_WEBHOOK_SECRET is not configured")
        body = payload.decode("utf-8")
        stripe.WebhookSignature.verify_header(body, signature, self.webhook_secret)
        return json.loads(body)

    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return stripe.Subscription.retrieve(subscription_id, api_key=self._require_key()).to_dict()

    def list_subscriptions(self, customer_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        result = stripe.Subscription.list(
            customer=customer_id, status="all", limit=limit, api_key=self._require_key()
        )
        return [s.to_dict() for s in result.data]

    def update_subscription_price(self, subscription_id: str, item_id: str, price_id: str) -> Dict[str, Any]:
        return stripe.Subscription.modify(
            subscription_id,
            items=[{"id": item_id, "price": price_id}],
            proration_behavior="always_invoice",
            api_key=self._require_key(),
        ).to_dict()

    def retrieve_customer(self, customer_id: str) -> Dict[str, Any]:
        return stripe.Customer.retrieve(customer_id, api_key=self._require_key()).to_dict()

    def find_customer_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        result = stripe.Customer.list(email=email, limit=1, api_key=self._require_key())
        return result.data[0].to_dict() if result.data else None

    def create_customer(self, email: Optional[str], name: Optional[str], metadata: Dict[str, str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {"metadata": metadata}
        if email:
            params["email"] = email
        if name:
            params["name"] = name
        return stripe.Customer.create(api_key=self._require_key(), **params).to_dict()

    def create_coupon(self, **params) -> Dict[str, Any]:
        return stripe.Coupon.create(api_key=self._require_key(), **params).to_dict()

    def create_checkout_session(self, **params) -> Dict[str, Any]:
        return stripe.checkout.Session.create(api_key=self._require_key(), **params).to_dict()

    def retrieve_checkout_session(self, session_id: str) -> Dict[str, Any]:
        return stripe.checkout.Session.retrieve(session_id, api_key=self._require_key()).to_dict()


_gateway: Optional[StripeGateway] = None


def get_stripe_gateway() -> StripeGateway:
    global _gateway
    if _gateway is None:
        _gateway = StripeGateway(settings.stripe_secret_key, settings.stripe_webhook_secret)
    return _gateway
