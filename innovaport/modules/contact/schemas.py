from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, Literal
from datetime import datetime

MessageStatus = Literal["new", "read", "replied"]


class ContactMessageCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    subject: Optional[str] = Field(default=None, max_length=500)
    message: str = Field(min_length=10, max_length=10000)

    @field_validator("name", "subject", "message", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ContactMessageResponse(BaseModel):
    id: str
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    status: str = "new"
    replied_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContactSubmitResponse(BaseModel):
    success: bool = True
    message: str
    id: str


class NewsletterSubscribe(BaseModel):
    email: EmailStr
    source: Optional[str] = Field(default="footer", max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class NewsletterResponse(BaseModel):
    success: bool = True
    message: str
    id: Optional[str] = None


class AdminReplyRequest(BaseModel):
    reply_message: str = Field(alias="replyMessage", min_length=1, max_length=10000)

    @field_validator("reply_message", mode="before")
    @classmethod
    def strip_reply(cls, v):
        return v.strip() if isinstance(v, str) else v

    class Config:
        populate_by_name = True


class AdminReplyResponse(BaseModel):
    success: bool = True
    message: str
