from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

PortfolioTemplate = Literal["modern", "minimal", "bold", "corporate", "creative"]


class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    full_name: Optional[str] = Field(default=None, max_length=100)
    title: Optional[str] = Field(default=None, max_length=200)
    bio: Optional[str] = Field(default=None, max_length=5000)
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    available_for_work: Optional[bool] = None
    primary_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    secondary_color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")
    template: Optional[PortfolioTemplate] = None
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_description: Optional[str] = None
    cta_title: Optional[str] = None
    cta_subtitle: Optional[str] = None
    cta_button_text: Optional[str] = None
    about_journey: Optional[str] = None
    about_approach: Optional[str] = None
    about_why_choose: Optional[str] = None
    services: Optional[List[Dict[str, Any]]] = None
    work_process: Optional[List[Dict[str, Any]]] = None
    technologies_list: Optional[List[str]] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    facebook_url: Optional[str] = None
    tiktok_url: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    username: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str = "developer"
    subscription_tier: str = "free"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        extra = "allow"


class UsageResponse(BaseModel):
    subscription_tier: str
    limits: Dict[str, Any]
    projects_count: int
    quotes_this_month: int
    can_create_project: bool
    can_receive_quote: bool


class PortfolioResponse(BaseModel):
    profile: Dict[str, Any]
    projects: List[Dict[str, Any]]
    testimonials: List[Dict[str, Any]]
    show_branding: bool
