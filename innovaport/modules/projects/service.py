from supabase import Client
from innovaport.modules.projects.schemas import ProjectCreate, ProjectUpdate, ProjectResponse
from innovaport.config.plans_config import can_create_project, get_plan_limits, normalize_tier
from innovaport.database.supabase_client import first_row, utc_now_iso
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _slug_taken(self, user_id: str, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.supabase.table("projects")\
            .select("id")\
            .eq("user_id", user_id)\
            .eq("slug", slug)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.limit(1).execute().data)

    def count_projects(self, user_id: str) -> int:
        result = self.supabase.table("projects")\
            .select("id", count="exact")\
            .eq("user_id", user_id)\
            .execute()
        return result.count or 0

    def create_project(self, project_data: ProjectCreate, user_id: str, tier: Optional[str]) -> ProjectResponse:
        """Create a project, enforcing the plan's project limit"""
        try:
            tier = normalize_tier(tier)
            if not can_create_project(tier, self.count_projects(user_id)):
                max_projects = get_plan_limits(tier)["max_projects"]
                raise HTTPException(
                    status_code=403,
                    detail=f"Project limit reached. The {tier} plan allows {max_projects} projects. Upgrade to Pro for unlimited projects."
                )
            if self._slug_taken(user_id, project_data.slug):
                raise HTTPException(status_code=409, detail="A project with this slug already exists")

            result = self.supabase.table("projects").insert({
                **project_data.model_dump(),
                "user_id": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create project")

            return ProjectResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_project(self, project_id: str, user_id: str) -> ProjectResponse:
        """Get one of the user's projects"""
        try:
            result = self.supabase.table("projects")\
                .select("*")\
                .eq("id", project_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Project not found")
            return ProjectResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_project(self, project_id: str, project_data: ProjectUpdate, user_id: str) -> ProjectResponse:
        """Replace a project's editable fields"""
        try:
            if self._slug_taken(user_id, project_data.slug, exclude_id=project_id):
                raise HTTPException(status_code=409, detail="A project with this slug already exists")

            result = self.supabase.table("projects")\
                .update({**project_data.model_dump(), "updated_at": utc_now_iso()})\
                .eq("id", project_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Project not found")

            return ProjectResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_projects(
        self,
        user_id: str,
        published_only: bool = False,
        limit: int = 50,
        offset: int = 0
    ) -> List[ProjectResponse]:
        """List a user's projects, featured first then newest"""
        try:
            query = self.supabase.table("projects")\
                .select("*")\
                .eq("user_id", user_id)
            if published_only:
                query = query.eq("published", True)
            result = query\
                .order("featured", desc=True)\
                .order("created_at", desc=True)\
                .range(offset, offset + limit - 1)\
                .execute()
            return [ProjectResponse(**p) for p in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_project(self, project_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("projects")\
                .delete()\
                .eq("id", project_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Project not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_public_project(self, user_id: str, slug: str) -> Dict[str, Any]:
        """Published project by slug for the public portfolio"""
        result = self.supabase.table("projects")\
            .select("*")\
            .eq("user_id", user_id)\
            .eq("slug", slug)\
            .eq("published", True)\
            .limit(1)\
            .execute()
        row = first_row(result)
        if not row:
            raise HTTPException(status_code=404, detail="Project not found")
        return row
