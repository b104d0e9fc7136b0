from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
)
from innovaport.modules.auth.service import AuthService
from innovaport.core.dependencies import (
    get_auth_service, get_bearer_token, get_current_user, get_sign_in_service, get_user_profile, is_admin
)
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_sign_in_service)
):
    """Register a new developer account"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_sign_in_service)
):
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and revoke the caller's session"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_me(
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_admin),
):
    """Current authenticated user with profile and admin flag (for frontend UI)."""
    profile = get_user_profile(current_user["id"], supabase)
    return {**current_user, "profile": profile, "is_admin": is_admin(profile)}
