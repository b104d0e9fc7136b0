from fastapi import APIRouter, Depends, Query
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.platform_testimonials.schemas import (
    PlatformTestimonialCreate,
    PlatformTestimonialModeration,
    PlatformTestimonialResponse,
    PublicPlatformTestimonial,
)
from innovaport.modules.platform_testimonials.service import PlatformTestimonialService
from innovaport.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional

router = APIRouter(tags=["platform-testimonials"])


def get_platform_testimonial_service(supabase: Client = Depends(get_supabase_admin)) -> PlatformTestimonialService:
    return PlatformTestimonialService(supabase)


@router.post("/platform-testimonials", response_model=PlatformTestimonialResponse, status_code=201)
async def create_platform_testimonial(
    testimonial_data: PlatformTestimonialCreate,
    service: PlatformTestimonialService = Depends(get_platform_testimonial_service)
):
    return service.create_testimonial(testimonial_data)


@router.get("/platform-testimonials", response_model=List[PublicPlatformTestimonial])
async def list_platform_testimonials(
    featured_only: bool = False,
    limit: int = Query(default=20, ge=1, le=100),
    service: PlatformTestimonialService = Depends(get_platform_testimonial_service)
):
    return service.list_public(featured_only=featured_only, limit=limit)


@router.get("/admin/platform-testimonials", response_model=List[PlatformTestimonialResponse])
async def admin_list_platform_testimonials(
    approved: Optional[bool] = None,
    admin: dict = Depends(require_admin),
    service: PlatformTestimonialService = Depends(get_platform_testimonial_service)
):
    return service.list_all(approved=approved)


@router.patch("/admin/platform-testimonials/{testimonial_id}", response_model=PlatformTestimonialResponse)
async def admin_moderate_platform_testimonial(
    testimonial_id: str,
    moderation: PlatformTestimonialModeration,
    admin: dict = Depends(require_admin),
    service: PlatformTestimonialService = Depends(get_platform_testimonial_service)
):
    return service.moderate(testimonial_id, moderation, admin["id"])


@router.delete("/admin/platform-testimonials/{testimonial_id}", status_code=204)
async def admin_delete_platform_testimonial(
    testimonial_id: str,
    admin: dict = Depends(require_admin),
    service: PlatformTestimonialService = Depends(get_platform_testimonial_service)
):
    service.delete(testimonial_id, admin["id"])
    return None
