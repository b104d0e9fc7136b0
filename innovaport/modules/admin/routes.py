from fastapi import APIRouter, Depends, Query
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.admin.schemas import (
    AdminUserCreate,
    AdminUserUpdate,
    AdminUserResponse,
    SubscriptionSyncResponse,
    Role,
    Tier,
)
from innovaport.modules.admin.service import AdminService
from innovaport.modules.billing.gateway import StripeGateway, get_stripe_gateway
from innovaport.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/admin/users", tags=["admin"])


def get_admin_service(
    supabase: Client = Depends(get_supabase_admin),
    gateway: StripeGateway = Depends(get_stripe_gateway)
) -> AdminService:
    return AdminService(supabase, gateway)


@router.get("", response_model=List[AdminUserResponse])
async def list_users(
    role: Optional[Role] = None,
    tier: Optional[Tier] = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    admin: dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.list_users(role=role, tier=tier, limit=limit, offset=offset)


@router.post("", response_model=AdminUserResponse, status_code=201)
async def create_user(
    user_data: AdminUserCreate,
    admin: dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.create_user(user_data, admin["id"])


@router.put("/{user_id}", response_model=AdminUserResponse)
async def update_user(
    user_id: str,
    user_data: AdminUserUpdate,
    admin: dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    return service.update_user(user_id, user_data, admin["id"])


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    admin: dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    service.delete_user(user_id, admin["id"])
    return None


@router.post("/{user_id}/sync-subscription", response_model=SubscriptionSyncResponse)
async def sync_subscription(
    user_id: str,
    admin: dict = Depends(require_admin),
    service: AdminService = Depends(get_admin_service)
):
    """Re-read the user's subscription from Stripe and fix the stored tier"""
    return service.sync_subscription(user_id, admin["id"])
