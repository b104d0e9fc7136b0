from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


class TestimonialBase(BaseModel):
    client_name: str = Field(min_length=1, max_length=100)
    client_email: EmailStr
    client_company: Optional[str] = Field(default=None, max_length=100)
    client_position: Optional[str] = Field(default=None, max_length=100)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    testimonial_text: str = Field(min_length=10, max_length=1000)
    project_name: Optional[str] = Field(default=None, max_length=200)
    project_url: Optional[str] = Field(default=None, max_length=500, pattern=r"^https?://")

    @field_validator("client_name", "client_company", "client_position", "testimonial_text", "project_name", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("client_email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("project_url", mode="before")
    @classmethod
    def empty_url(cls, v):
        return None if v == "" else v


class TestimonialCreate(TestimonialBase):
    user_id: str = Field(min_length=1)
    client_avatar_url: Optional[str] = Field(default=None, max_length=500, pattern=r"^https?://")


class TestimonialUpdate(BaseModel):
    approved: Optional[bool] = None
    featured: Optional[bool] = None


class TestimonialResponse(BaseModel):
    id: str
    user_id: str
    client_name: str
    client_email: Optional[str] = None
    client_company: Optional[str] = None
    client_position: Optional[str] = None
    client_avatar_url: Optional[str] = None
    rating: Optional[int] = None
    testimonial_text: str
    project_name: Optional[str] = None
    project_url: Optional[str] = None
    approved: bool = False
    featured: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
