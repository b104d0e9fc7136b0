from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

URL_PATTERN = r"^https?://"


class SiteSettingsUpdate(BaseModel):
    social_facebook_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_tiktok_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_twitter_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_linkedin_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_instagram_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_youtube_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    social_github_url: Optional[str] = Field(default=None, max_length=500, pattern=URL_PATTERN)
    developer_testimonials_enabled: Optional[bool] = None
    maintenance_mode: Optional[bool] = None
    maintenance_message: Optional[str] = Field(default=None, max_length=1000)


class SiteSettingsResponse(BaseModel):
    social_facebook_url: Optional[str] = None
    social_tiktok_url: Optional[str] = None
    social_twitter_url: Optional[str] = None
    social_linkedin_url: Optional[str] = None
    social_instagram_url: Optional[str] = None
    social_youtube_url: Optional[str] = None
    social_github_url: Optional[str] = None
    developer_testimonials_enabled: bool = True
    maintenance_mode: bool = False
    maintenance_message: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
