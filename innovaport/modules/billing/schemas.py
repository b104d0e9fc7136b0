from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class CheckoutRequest(BaseModel):
    plan: Optional[str] = None
    locale: str = "en"
    promo_code: Optional[str] = Field(default=None, alias="promoCode", max_length=50)

    class Config:
        populate_by_name = True


class CheckoutResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    session_id: Optional[str] = None
    url: Optional[str] = None
    language: Optional[str] = None
    upgraded: bool = False


class CheckoutSessionResponse(BaseModel):
    id: str
    status: Optional[str] = None
    payment_status: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    customer_email: Optional[str] = None
    plan: Optional[str] = None
    metadata: Dict[str, Any] = {}


class UsageSummary(BaseModel):
    projects: int
    quotes_this_month: int


class SubscriptionView(BaseModel):
    subscription_tier: str
    subscription: Optional[Dict[str, Any]] = None
    limits: Dict[str, Any]
    usage: UsageSummary


class WebhookAck(BaseModel):
    received: bool = True
