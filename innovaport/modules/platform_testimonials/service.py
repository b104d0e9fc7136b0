from supabase import Client
from innovaport.modules.platform_testimonials.schemas import (
    PlatformTestimonialCreate,
    PlatformTestimonialModeration,
    PlatformTestimonialResponse,
    PublicPlatformTestimonial,
)
from innovaport.database.supabase_client import utc_now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PlatformTestimonialService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_testimonial(self, testimonial_data: PlatformTestimonialCreate) -> PlatformTestimonialResponse:
        """Public submission, pending admin approval"""
        try:
            result = self.supabase.table("platform_testimonials").insert({
                **testimonial_data.model_dump(),
                "approved": False,
                "featured": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save testimonial")

            return PlatformTestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_public(self, featured_only: bool = False, limit: int = 20) -> List[PublicPlatformTestimonial]:
        try:
            query = self.supabase.table("platform_testimonials")\
                .select("*")\
                .eq("approved", True)
            if featured_only:
                query = query.eq("featured", True)
            result = query\
                .order("featured", desc=True)\
                .order("created_at", desc=True)\
                .limit(limit)\
                .execute()
            return [PublicPlatformTestimonial.from_row(t) for t in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_all(self, approved: Optional[bool] = None) -> List[PlatformTestimonialResponse]:
        """Admin moderation queue"""
        try:
            query = self.supabase.table("platform_testimonials").select("*")
            if approved is not None:
                query = query.eq("approved", approved)
            result = query.order("created_at", desc=True).execute()
            return [PlatformTestimonialResponse(**t) for t in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def moderate(self, testimonial_id: str, moderation: PlatformTestimonialModeration, admin_id: str) -> PlatformTestimonialResponse:
        try:
            update_data = moderation.model_dump(exclude_none=True)
            if not update_data:
                raise HTTPException(status_code=400, detail="Nothing to update")
            update_data["updated_at"] = utc_now_iso()

            result = self.supabase.table("platform_testimonials")\
                .update(update_data)\
                .eq("id", testimonial_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")

            logger.info(f"Admin {admin_id} moderated platform testimonial {testimonial_id}: {update_data}")
            return PlatformTestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete(self, testimonial_id: str, admin_id: str) -> bool:
        try:
            result = self.supabase.table("platform_testimonials")\
                .delete()\
                .eq("id", testimonial_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")
            logger.info(f"Admin {admin_id} deleted platform testimonial {testimonial_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
