from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.promo_codes.schemas import PromoCodeCreate, PromoCodeUpdate, PromoCodeResponse
from innovaport.modules.promo_codes.service import PromoCodeService
from innovaport.core.dependencies import require_admin
from supabase import Client
from typing import List

router = APIRouter(prefix="/admin/promo-codes", tags=["promo-codes"])


def get_promo_code_service(supabase: Client = Depends(get_supabase_admin)) -> PromoCodeService:
    return PromoCodeService(supabase)


@router.get("", response_model=List[PromoCodeResponse])
async def list_promo_codes(
    admin: dict = Depends(require_admin),
    service: PromoCodeService = Depends(get_promo_code_service)
):
    return service.list_promo_codes()


@router.post("", response_model=PromoCodeResponse, status_code=201)
async def create_promo_code(
    promo_data: PromoCodeCreate,
    admin: dict = Depends(require_admin),
    service: PromoCodeService = Depends(get_promo_code_service)
):
    return service.create_promo_code(promo_data, admin["id"])


@router.put("/{promo_id}", response_model=PromoCodeResponse)
async def update_promo_code(
    promo_id: str,
    promo_data: PromoCodeUpdate,
    admin: dict = Depends(require_admin),
    service: PromoCodeService = Depends(get_promo_code_service)
):
    return service.update_promo_code(promo_id, promo_data, admin["id"])


@router.delete("/{promo_id}", status_code=204)
async def delete_promo_code(
    promo_id: str,
    admin: dict = Depends(require_admin),
    service: PromoCodeService = Depends(get_promo_code_service)
):
    service.delete_promo_code(promo_id, admin["id"])
    return None
