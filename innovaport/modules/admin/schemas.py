from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime

Role = Literal["developer", "admin"]
Tier = Literal["free", "pro", "premium"]


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: Optional[str] = Field(default=None, max_length=100)
    username: Optional[str] = Field(default=None, min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    role: Role = "developer"


class AdminUserUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, max_length=100)
    username: Optional[str] = Field(default=None, min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    role: Optional[Role] = None
    subscription_tier: Optional[Tier] = None


class AdminUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    role: str = "developer"
    subscription_tier: str = "free"
    stripe_customer_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubscriptionSyncResponse(BaseModel):
    success: bool = True
    user_id: str
    previous_tier: str
    current_tier: str
    has_stripe_subscription: bool
    stripe_subscription_status: Optional[str] = None
    corrections: List[str] = []
    message: str
