from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.projects.schemas import ProjectCreate, ProjectUpdate, ProjectResponse
from innovaport.modules.projects.service import ProjectService
from innovaport.core.dependencies import get_current_profile
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(supabase: Client = Depends(get_supabase_admin)) -> ProjectService:
    return ProjectService(supabase)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    published: Optional[bool] = None,
    limit: int = 50,
    offset: int = 0,
    profile: Dict = Depends(get_current_profile),
    service: ProjectService = Depends(get_project_service)
):
    """List own projects (drafts included unless published=true)"""
    return service.list_projects(profile["id"], published_only=bool(published), limit=limit, offset=offset)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    profile: Dict = Depends(get_current_profile),
    service: ProjectService = Depends(get_project_service)
):
    """Create a project (subject to the plan's project limit)"""
    return service.create_project(project_data, profile["id"], profile.get("subscription_tier"))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    profile: Dict = Depends(get_current_profile),
    service: ProjectService = Depends(get_project_service)
):
    return service.get_project(project_id, profile["id"])


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    profile: Dict = Depends(get_current_profile),
    service: ProjectService = Depends(get_project_service)
):
    return service.update_project(project_id, project_data, profile["id"])


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    profile: Dict = Depends(get_current_profile),
    service: ProjectService = Depends(get_project_service)
):
    service.delete_project(project_id, profile["id"])
    return None
