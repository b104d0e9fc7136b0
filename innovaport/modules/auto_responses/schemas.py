from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime


class BudgetRange(BaseModel):
    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_order(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("Budget minimum must not exceed the maximum")
        return self


class TemplateConditions(BaseModel):
    project_type: Optional[str] = Field(default=None, max_length=100)
    budget_range: Optional[BudgetRange] = None


class AutoResponseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    subject: str = Field(min_length=1, max_length=200)
    body_html: str = Field(min_length=1, max_length=20000)
    enabled: bool = True
    conditions: Optional[TemplateConditions] = None


class AutoResponseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    subject: Optional[str] = Field(default=None, min_length=1, max_length=200)
    body_html: Optional[str] = Field(default=None, min_length=1, max_length=20000)
    enabled: Optional[bool] = None
    conditions: Optional[TemplateConditions] = None


class AutoResponseResponse(BaseModel):
    id: str
    user_id: str
    name: str
    subject: str
    body_html: str
    enabled: bool = True
    conditions: Optional[dict] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
