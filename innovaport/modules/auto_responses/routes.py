from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.auto_responses.schemas import AutoResponseCreate, AutoResponseUpdate, AutoResponseResponse
from innovaport.modules.auto_responses.service import AutoResponseService
from innovaport.core.dependencies import get_current_profile
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/auto-responses", tags=["auto-responses"])


def get_auto_response_service(supabase: Client = Depends(get_supabase_admin)) -> AutoResponseService:
    return AutoResponseService(supabase)


@router.get("", response_model=List[AutoResponseResponse])
async def list_templates(
    profile: Dict = Depends(get_current_profile),
    service: AutoResponseService = Depends(get_auto_response_service)
):
    return service.list_templates(profile["id"])


@router.post("", response_model=AutoResponseResponse, status_code=201)
async def create_template(
    template_data: AutoResponseCreate,
    profile: Dict = Depends(get_current_profile),
    service: AutoResponseService = Depends(get_auto_response_service)
):
    return service.create_template(template_data, profile["id"])


@router.put("/{template_id}", response_model=AutoResponseResponse)
async def update_template(
    template_id: str,
    template_data: AutoResponseUpdate,
    profile: Dict = Depends(get_current_profile),
    service: AutoResponseService = Depends(get_auto_response_service)
):
    return service.update_template(template_id, template_data, profile["id"])


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    profile: Dict = Depends(get_current_profile),
    service: AutoResponseService = Depends(get_auto_response_service)
):
    service.delete_template(template_id, profile["id"])
    return None
