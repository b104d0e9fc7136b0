from supabase import Client
from innovaport.modules.testimonials.schemas import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from innovaport.database.supabase_client import first_row
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class TestimonialService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_testimonial(self, testimonial_data: TestimonialCreate) -> TestimonialResponse:
        """Public submission; stays hidden until the developer approves it"""
        try:
            developer = first_row(
                self.supabase.table("profiles")
                .select("id")
                .eq("id", testimonial_data.user_id)
                .limit(1)
                .execute()
            )
            if not developer:
                raise HTTPException(status_code=404, detail="User not found")

            result = self.supabase.table("testimonials").insert({
                **testimonial_data.model_dump(),
                "approved": False,
                "featured": False,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save testimonial")

            logger.info(f"Testimonial submitted for {testimonial_data.user_id}")
            return TestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_testimonials(self, user_id: str) -> List[TestimonialResponse]:
        try:
            result = self.supabase.table("testimonials")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [TestimonialResponse(**t) for t in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_testimonial(self, testimonial_id: str, update: TestimonialUpdate, user_id: str) -> TestimonialResponse:
        try:
            update_data = update.model_dump(exclude_none=True)
            if not update_data:
                raise HTTPException(status_code=400, detail="Nothing to update")

            result = self.supabase.table("testimonials")\
                .update(update_data)\
                .eq("id", testimonial_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")

            return TestimonialResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_testimonial(self, testimonial_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("testimonials")\
                .delete()\
                .eq("id", testimonial_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Testimonial not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
