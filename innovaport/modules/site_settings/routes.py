from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.site_settings.schemas import SiteSettingsUpdate, SiteSettingsResponse
from innovaport.modules.site_settings.service import SiteSettingsService
from innovaport.core.dependencies import require_admin
from supabase import Client

router = APIRouter(prefix="/site-settings", tags=["site-settings"])


def get_site_settings_service(supabase: Client = Depends(get_supabase_admin)) -> SiteSettingsService:
    return SiteSettingsService(supabase)


@router.get("", response_model=SiteSettingsResponse)
async def get_site_settings(service: SiteSettingsService = Depends(get_site_settings_service)):
    return service.get_settings()


@router.put("", response_model=SiteSettingsResponse)
async def update_site_settings(
    settings_data: SiteSettingsUpdate,
    admin: dict = Depends(require_admin),
    service: SiteSettingsService = Depends(get_site_settings_service)
):
    return service.update_settings(settings_data, admin["id"])
