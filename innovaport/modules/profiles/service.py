from supabase import Client
from innovaport.modules.profiles.schemas import ProfileUpdate, ProfileResponse, UsageResponse, PortfolioResponse
from innovaport.modules.projects.service import ProjectService
from innovaport.modules.quotes.service import count_quotes_this_month
from innovaport.config.plans_config import (
    get_plan_limits,
    normalize_tier,
    can_create_project,
    can_receive_quote,
    has_feature,
)
from innovaport.database.supabase_client import first_row, utc_now_iso
from typing import Dict, Any, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

# Columns never exposed on the public portfolio
PRIVATE_PROFILE_FIELDS = {"stripe_customer_id", "role", "is_admin", "email"}


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the caller's own profile; tier and role are not editable here"""
        try:
            update_data = profile_data.model_dump(exclude_unset=True)
            if not update_data:
                return self.get_profile(user_id)

            username = update_data.get("username")
            if username:
                taken = self.supabase.table("profiles")\
                    .select("id")\
                    .eq("username", username)\
                    .neq("id", user_id)\
                    .limit(1)\
                    .execute()
                if taken.data:
                    raise HTTPException(status_code=409, detail="Username already taken")

            update_data["updated_at"] = utc_now_iso()
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            logger.info(f"Profile updated: {user_id} ({', '.join(sorted(update_data))})")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_usage(self, profile: Dict[str, Any]) -> UsageResponse:
        """Plan limits together with the current consumption"""
        try:
            tier = normalize_tier(profile.get("subscription_tier"))
            projects_count = ProjectService(self.supabase).count_projects(profile["id"])
            quotes_this_month = count_quotes_this_month(self.supabase, profile["id"])
            return UsageResponse(
                subscription_tier=tier,
                limits=get_plan_limits(tier),
                projects_count=projects_count,
                quotes_this_month=quotes_this_month,
                can_create_project=can_create_project(tier, projects_count),
                can_receive_quote=can_receive_quote(tier, quotes_this_month),
            )
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .eq("username", username.lower())\
            .limit(1)\
            .execute()
        return first_row(result)

    def get_portfolio(self, username: str) -> PortfolioResponse:
        """Public portfolio: profile, published projects and approved testimonials"""
        try:
            profile = self.get_by_username(username)
            if not profile:
                raise HTTPException(status_code=404, detail="Portfolio not found")

            projects = self.supabase.table("projects")\
                .select("*")\
                .eq("user_id", profile["id"])\
                .eq("published", True)\
                .order("featured", desc=True)\
                .order("created_at", desc=True)\
                .execute()

            testimonials = self.supabase.table("testimonials")\
                .select("*")\
                .eq("user_id", profile["id"])\
                .eq("approved", True)\
                .order("featured", desc=True)\
                .order("created_at", desc=True)\
                .execute()

            public_profile = {k: v for k, v in profile.items() if k not in PRIVATE_PROFILE_FIELDS}
            tier = normalize_tier(profile.get("subscription_tier"))
            return PortfolioResponse(
                profile=public_profile,
                projects=projects.data or [],
                testimonials=[
                    {k: v for k, v in t.items() if k != "client_email"}
                    for t in (testimonials.data or [])
                ],
                show_branding=not has_feature(tier, "remove_branding"),
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_public_project(self, username: str, slug: str) -> Dict[str, Any]:
        """Published project detail page of a portfolio"""
        try:
            profile = self.get_by_username(username)
            if not profile:
                raise HTTPException(status_code=404, detail="Portfolio not found")
            return ProjectService(self.supabase).get_public_project(profile["id"], slug)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
