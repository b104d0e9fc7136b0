from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.testimonials.schemas import TestimonialCreate, TestimonialUpdate, TestimonialResponse
from innovaport.modules.testimonials.service import TestimonialService
from innovaport.core.dependencies import get_current_profile
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/testimonials", tags=["testimonials"])


def get_testimonial_service(supabase: Client = Depends(get_supabase_admin)) -> TestimonialService:
    return TestimonialService(supabase)


@router.post("", response_model=TestimonialResponse, status_code=201)
async def create_testimonial(
    testimonial_data: TestimonialCreate,
    service: TestimonialService = Depends(get_testimonial_service)
):
    """Public: a client leaves a testimonial for a developer"""
    return service.create_testimonial(testimonial_data)


@router.get("", response_model=List[TestimonialResponse])
async def list_testimonials(
    profile: Dict = Depends(get_current_profile),
    service: TestimonialService = Depends(get_testimonial_service)
):
    return service.list_testimonials(profile["id"])


@router.patch("/{testimonial_id}", response_model=TestimonialResponse)
async def update_testimonial(
    testimonial_id: str,
    update: TestimonialUpdate,
    profile: Dict = Depends(get_current_profile),
    service: TestimonialService = Depends(get_testimonial_service)
):
    """Approve or feature a testimonial"""
    return service.update_testimonial(testimonial_id, update, profile["id"])


@router.delete("/{testimonial_id}", status_code=204)
async def delete_testimonial(
    testimonial_id: str,
    profile: Dict = Depends(get_current_profile),
    service: TestimonialService = Depends(get_testimonial_service)
):
    service.delete_testimonial(testimonial_id, profile["id"])
    return None
