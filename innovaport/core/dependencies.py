"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from innovaport.config import settings
from innovaport.database.supabase_client import get_supabase, get_supabase_admin, get_supabase_session, first_row
from innovaport.modules.auth.service import AuthService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for the caller's profile row."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Client = Depends(get_supabase_admin),
) -> AuthService:
    return AuthService(supabase, admin_client)


def get_sign_in_service(
    session_client: Client = Depends(get_supabase_session),
    admin_client: Client = Depends(get_supabase_admin),
) -> AuthService:
    """Auth service for sign-up/sign-in, which leave a session on the client they run on"""
    return AuthService(session_client, admin_client)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Bearer token from the Authorization header; 401 when absent"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_profile(user_id: str, supabase: Client, cache: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Return the profiles row for a user. Uses request-scoped cache when provided."""
    if cache is not None and "profile" in cache:
        return cache["profile"]
    try:
        result = supabase.table("profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()
        profile = first_row(result)
    except Exception as e:
        logger.error(f"Error getting profile for {user_id}: {e}")
        profile = None
    if cache is not None:
        cache["profile"] = profile
    return profile


def is_admin(profile: Optional[Dict[str, Any]]) -> bool:
    """Admins are flagged by profiles.role; is_admin is kept for older rows"""
    if not profile:
        return False
    return profile.get("role") == "admin" or profile.get("is_admin") is True


def get_current_profile(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_admin)
) -> dict:
    """Current user's profile row; 404 when the auth user has no profile"""
    profile = get_user_profile(user_data["id"], supabase, _get_request_cache(request))
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found"
        )
    return profile


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_admin)
) -> dict:
    """Dependency that lets only admins through"""
    profile = get_user_profile(user_data["id"], supabase, _get_request_cache(request))
    if not is_admin(profile):
        logger.warning(f"Non-admin user {user_data['id']} attempted an admin operation on {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return {**user_data, "profile": profile}


def require_cron_secret(request: Request) -> None:
    """Scheduled jobs authenticate with the X-Cron-Secret header"""
    provided = request.headers.get("x-cron-secret")
    if not settings.cron_secret or provided != settings.cron_secret:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized"
        )
