from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from innovaport.modules.testimonials.schemas import TestimonialBase


class PlatformTestimonialCreate(TestimonialBase):
    pass


class PlatformTestimonialModeration(BaseModel):
    approved: Optional[bool] = None
    featured: Optional[bool] = None


class PlatformTestimonialResponse(BaseModel):
    id: str
    client_name: str
    client_email: Optional[str] = None
    client_company: Optional[str] = None
    client_position: Optional[str] = None
    rating: Optional[int] = None
    testimonial_text: str
    project_name: Optional[str] = None
    project_url: Optional[str] = None
    approved: bool = False
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicPlatformTestimonial(PlatformTestimonialResponse):
    """Landing page view; the client's e-mail is never published"""

    @classmethod
    def from_row(cls, row: dict) -> "PublicPlatformTestimonial":
        return cls(**{**row, "client_email": None})
