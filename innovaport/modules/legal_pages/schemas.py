from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

PageStatus = Literal["draft", "published"]


class LegalPageCreate(BaseModel):
    slug: str = Field(min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)
    status: PageStatus = "draft"
    template_id: str = "default"


class LegalPageUpdate(BaseModel):
    slug: Optional[str] = Field(default=None, min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    meta_title: Optional[str] = Field(default=None, max_length=200)
    meta_description: Optional[str] = Field(default=None, max_length=500)
    status: Optional[PageStatus] = None
    template_id: Optional[str] = None


class LegalPageResponse(BaseModel):
    id: str
    slug: str
    title: str
    content: str
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    status: str = "draft"
    template_id: Optional[str] = None
    published_at: Optional[datetime] = None
    last_updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
