from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List, Literal
from datetime import datetime

DiscountType = Literal["percentage", "fixed"]
PaidPlan = Literal["pro", "premium"]


def promo_values_error(
    discount_type: Optional[str],
    discount_value: Optional[float],
    valid_from: Optional[datetime],
    valid_until: Optional[datetime],
) -> Optional[str]:
    """Why a discount/validity combination is invalid; None when it is fine"""
    if discount_type == "percentage" and discount_value is not None and discount_value > 100:
        return "A percentage discount cannot exceed 100"
    if valid_from and valid_until and valid_until <= valid_from:
        return "valid_until must be after valid_from"
    return None


class PromoCodeCreate(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    discount_type: DiscountType
    discount_value: float = Field(gt=0)
    valid_from: datetime
    valid_until: datetime
    max_uses: Optional[int] = Field(default=None, ge=1)
    applicable_plans: Optional[List[PaidPlan]] = None
    is_active: bool = True

    @field_validator("applicable_plans")
    @classmethod
    def empty_plans(cls, v):
        return v or None

    @model_validator(mode="after")
    def check_values(self):
        error = promo_values_error(self.discount_type, self.discount_value, self.valid_from, self.valid_until)
        if error:
            raise ValueError(error)
        return self


class PromoCodeUpdate(BaseModel):
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, gt=0)
    valid_from: Optional[datetime] = None
    valid_until: Optional[datetime] = None
    max_uses: Optional[int] = Field(default=None, ge=1)
    applicable_plans: Optional[List[PaidPlan]] = None
    is_active: Optional[bool] = None


class PromoCodeResponse(BaseModel):
    id: str
    code: str
    discount_type: str
    discount_value: float
    valid_from: datetime
    valid_until: datetime
    max_uses: Optional[int] = None
    current_uses: int = 0
    applicable_plans: Optional[List[str]] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PromoValidateRequest(BaseModel):
    code: Optional[str] = None
    plan: Optional[str] = None


class PromoValidationResponse(BaseModel):
    valid: bool
    error: Optional[str] = None
    code: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[float] = None
    applicable_plans: Optional[List[str]] = None
