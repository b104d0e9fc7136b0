from supabase import Client
from innovaport.modules.auto_responses.schemas import AutoResponseCreate, AutoResponseUpdate, AutoResponseResponse
from innovaport.modules.auto_responses.matching import select_template
from innovaport.database.supabase_client import utc_now_iso
from typing import List, Dict, Any, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AutoResponseService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_templates(self, user_id: str) -> List[AutoResponseResponse]:
        try:
            result = self.supabase.table("auto_response_templates")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at")\
                .execute()
            return [AutoResponseResponse(**t) for t in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_template(self, template_data: AutoResponseCreate, user_id: str) -> AutoResponseResponse:
        try:
            result = self.supabase.table("auto_response_templates").insert({
                **template_data.model_dump(exclude={"conditions"}),
                "conditions": template_data.conditions.model_dump(exclude_none=True) if template_data.conditions else None,
                "user_id": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create template")

            return AutoResponseResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_template(self, template_id: str, template_data: AutoResponseUpdate, user_id: str) -> AutoResponseResponse:
        try:
            update_data = template_data.model_dump(exclude_unset=True, exclude={"conditions"})
            if "conditions" in template_data.model_fields_set:
                conditions = template_data.conditions
                update_data["conditions"] = conditions.model_dump(exclude_none=True) if conditions else None
            update_data["updated_at"] = utc_now_iso()

            result = self.supabase.table("auto_response_templates")\
                .update(update_data)\
                .eq("id", template_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Template not found")

            return AutoResponseResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_template(self, template_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("auto_response_templates")\
                .delete()\
                .eq("id", template_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Template not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def find_matching_template(self, user_id: str, quote: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Best enabled template for a new quote; lookup errors mean no auto-response"""
        try:
            result = self.supabase.table("auto_response_templates")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("enabled", True)\
                .order("created_at")\
                .execute()
        except Exception as e:
            logger.error(f"Error loading auto-response templates for {user_id}: {e}")
            return None
        return select_template(result.data or [], quote)
