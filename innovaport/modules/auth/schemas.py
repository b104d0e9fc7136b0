from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    username: str = Field(min_length=1, max_length=50, pattern=r"^[a-z0-9-]+$")
    full_name: Optional[str] = Field(default=None, max_length=100)


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    username: str
    message: str
