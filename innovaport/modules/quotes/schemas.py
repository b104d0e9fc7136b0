from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Dict, Literal
from datetime import datetime

QuoteStatus = Literal["new", "discussing", "quoted", "accepted", "rejected"]
QUOTE_STATUSES = ("new", "discussing", "quoted", "accepted", "rejected")
PENDING_STATUSES = ("new", "discussing")
DEFAULT_REMINDER_DAYS = [3, 7, 14]


class Platforms(BaseModel):
    ios: Optional[bool] = None
    android: Optional[bool] = None


class QuoteCreate(BaseModel):
    """Public quote request as posted by the portfolio contact form (camelCase keys)"""
    username: str = Field(min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20, pattern=r"^[\d\s\-+()]+$")
    company: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=100)
    project_type: str = Field(alias="projectType", min_length=1, max_length=100)
    platforms: Optional[Platforms] = None
    budget: str = Field(min_length=1, max_length=50)
    deadline: Optional[str] = Field(default=None, max_length=100)
    features: List[str] = Field(default_factory=list, max_length=50)
    design_pref: Optional[str] = Field(default=None, alias="designPref", max_length=200)
    description: str = Field(min_length=10, max_length=5000)
    has_vague_idea: bool = Field(default=False, alias="hasVagueIdea")
    contact_pref: str = Field(default="Email", alias="contactPref", max_length=50)
    consent_contact: bool = Field(default=False, alias="consentContact")
    consent_privacy: bool = Field(alias="consentPrivacy")

    @field_validator(
        "name", "company", "location", "project_type", "budget",
        "deadline", "design_pref", "description", "contact_pref",
        mode="before"
    )
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if not isinstance(v, str):
            return v
        v = v.strip().lower()
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def empty_phone(cls, v):
        return None if v == "" else v

    @field_validator("features")
    @classmethod
    def check_features(cls, v: List[str]) -> List[str]:
        for feature in v:
            if len(feature) > 200:
                raise ValueError("Each feature must be at most 200 characters")
        return v

    @field_validator("consent_privacy")
    @classmethod
    def require_privacy_consent(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("You must accept the privacy policy")
        return v

    class Config:
        populate_by_name = True


class QuoteSubmitResponse(BaseModel):
    success: bool = True
    message: str
    quote_id: str


class QuoteResponse(BaseModel):
    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    project_type: str
    platforms: Optional[Dict[str, Optional[bool]]] = None
    budget: str
    deadline: Optional[str] = None
    features: List[str] = []
    design_pref: Optional[str] = None
    description: str
    has_vague_idea: bool = False
    contact_pref: Optional[str] = None
    consent_contact: bool = False
    consent_privacy: bool = False
    status: str = "new"
    internal_notes: Optional[str] = None
    last_reminder_sent_at: Optional[datetime] = None
    reminders_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class QuoteStatusUpdate(BaseModel):
    status: QuoteStatus


class QuoteNotesUpdate(BaseModel):
    internal_notes: Optional[str] = Field(default=None, max_length=10000)


class QuoteRespondRequest(BaseModel):
    response: str = Field(min_length=1, max_length=10000)
    developer_email: Optional[EmailStr] = None

    @field_validator("response", mode="before")
    @classmethod
    def strip_response(cls, v):
        return v.strip() if isinstance(v, str) else v


class QuoteActionResponse(BaseModel):
    success: bool = True
    message: str
    quote: Optional[QuoteResponse] = None
    email_sent: Optional[bool] = None


class ReminderSettings(BaseModel):
    enabled: bool = True
    reminder_days: List[int] = Field(default_factory=lambda: list(DEFAULT_REMINDER_DAYS), max_length=20)
    notify_on_status_change: bool = True

    @field_validator("reminder_days")
    @classmethod
    def check_days(cls, v: List[int]) -> List[int]:
        for day in v:
            if not 1 <= day <= 365:
                raise ValueError("Reminder days must be between 1 and 365")
        return sorted(set(v))


class ReminderSettingsResponse(ReminderSettings):
    user_id: Optional[str] = None


class ReminderRunResponse(BaseModel):
    success: bool = True
    message: str
    reminders_sent: int = 0
    errors: List[str] = []
