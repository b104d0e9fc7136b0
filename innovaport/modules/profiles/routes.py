from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.profiles.schemas import ProfileUpdate, ProfileResponse, UsageResponse, PortfolioResponse
from innovaport.modules.profiles.service import ProfileService
from innovaport.modules.projects.schemas import ProjectResponse
from innovaport.core.dependencies import get_current_profile
from supabase import Client
from typing import Dict

router = APIRouter(tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase_admin)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/profile", response_model=ProfileResponse)
async def get_my_profile(profile: Dict = Depends(get_current_profile)):
    return ProfileResponse(**profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    profile: Dict = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(profile["id"], profile_data)


@router.get("/profile/usage", response_model=UsageResponse)
async def get_my_usage(
    profile: Dict = Depends(get_current_profile),
    service: ProfileService = Depends(get_profile_service)
):
    """Plan limits and current usage for the dashboard"""
    return service.get_usage(profile)


@router.get("/portfolio/{username}", response_model=PortfolioResponse)
async def get_portfolio(
    username: str,
    service: ProfileService = Depends(get_profile_service)
):
    """Public portfolio page data"""
    return service.get_portfolio(username)


@router.get("/portfolio/{username}/projects/{slug}", response_model=ProjectResponse)
async def get_portfolio_project(
    username: str,
    slug: str,
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_public_project(username, slug)
