from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, Union
from datetime import datetime

ClientType = Literal["personal", "professional", "open_source"]
DurationUnit = Literal["weeks", "months"]

MAX_IMAGE_LENGTH = 5_000_000  # base64 data URIs


def _check_image_url(value: str) -> str:
    if not value.startswith(("http://", "https://", "data:image/")):
        raise ValueError("Image must be an http(s) URL or a base64 data:image/ URI")
    if len(value) > MAX_IMAGE_LENGTH:
        raise ValueError("Image must not exceed 5MB")
    return value


class ProjectCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    title_en: Optional[str] = Field(default=None, max_length=200)
    slug: str = Field(min_length=1, max_length=100, pattern=r"^[a-z0-9-]+$")
    category: Optional[str] = Field(default=None, max_length=50)
    short_description: Optional[str] = Field(default=None, max_length=500)
    short_description_en: Optional[str] = Field(default=None, max_length=500)
    full_description: Optional[str] = Field(default=None, max_length=10000)
    full_description_en: Optional[str] = Field(default=None, max_length=10000)
    problem: Optional[str] = Field(default=None, max_length=2000)
    technologies: List[str] = Field(default_factory=list, max_length=50)
    client_type: ClientType = "personal"
    client_name: Optional[str] = Field(default=None, max_length=100)
    duration_value: Optional[Union[int, str]] = None
    duration_unit: DurationUnit = "weeks"
    project_url: Optional[str] = Field(default=None, max_length=500, pattern=r"^https?://")
    tags: Optional[str] = Field(default=None, max_length=500)
    image_url: Optional[str] = None
    screenshots_url: Optional[List[str]] = Field(default=None, max_length=10)
    featured: bool = False
    published: bool = False

    @field_validator("title", "slug", mode="before")
    @classmethod
    def strip_required(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("technologies")
    @classmethod
    def check_technologies(cls, v: List[str]) -> List[str]:
        for tech in v:
            if len(tech) > 50:
                raise ValueError("Each technology must be at most 50 characters")
        return v

    @field_validator("duration_value")
    @classmethod
    def check_duration(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, str):
            try:
                v = int(v, 10)
            except ValueError:
                return None
        if not 1 <= v <= 1000:
            raise ValueError("Duration must be a number between 1 and 1000")
        return v

    @field_validator("image_url")
    @classmethod
    def check_image(cls, v: Optional[str]) -> Optional[str]:
        return _check_image_url(v) if v else None

    @field_validator("screenshots_url")
    @classmethod
    def check_screenshots(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if not v:
            return None
        return [_check_image_url(url) for url in v]


class ProjectUpdate(ProjectCreate):
    pass


class ProjectResponse(BaseModel):
    id: str
    user_id: str
    title: str
    title_en: Optional[str] = None
    slug: str
    category: Optional[str] = None
    short_description: Optional[str] = None
    short_description_en: Optional[str] = None
    full_description: Optional[str] = None
    full_description_en: Optional[str] = None
    problem: Optional[str] = None
    technologies: List[str] = []
    client_type: str = "personal"
    client_name: Optional[str] = None
    duration_value: Optional[int] = None
    duration_unit: str = "weeks"
    project_url: Optional[str] = None
    tags: Optional[str] = None
    image_url: Optional[str] = None
    screenshots_url: Optional[List[str]] = None
    featured: bool = False
    published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
