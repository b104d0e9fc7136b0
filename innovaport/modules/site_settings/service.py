from supabase import Client
from innovaport.modules.site_settings.schemas import SiteSettingsUpdate, SiteSettingsResponse
from innovaport.database.supabase_client import first_row, utc_now_iso
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


class SiteSettingsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_settings(self) -> SiteSettingsResponse:
        """The settings row, or defaults when it was never saved"""
        try:
            row = first_row(
                self.supabase.table("site_settings")
                .select("*")
                .eq("id", SETTINGS_ROW_ID)
                .limit(1)
                .execute()
            )
            return SiteSettingsResponse(**(row or {}))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_settings(self, settings_data: SiteSettingsUpdate, admin_id: str) -> SiteSettingsResponse:
        try:
            update_data = settings_data.model_dump(exclude_unset=True)
            result = self.supabase.table("site_settings").upsert({
                **update_data,
                "id": SETTINGS_ROW_ID,
                "updated_by": admin_id,
                "updated_at": utc_now_iso(),
            }, on_conflict="id").execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save site settings")

            logger.info(f"Admin {admin_id} updated site settings: {', '.join(sorted(update_data))}")
            return SiteSettingsResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
