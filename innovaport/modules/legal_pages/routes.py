from fastapi import APIRouter, Depends
from innovaport.database.supabase_client import get_supabase_admin
from innovaport.modules.legal_pages.schemas import LegalPageCreate, LegalPageUpdate, LegalPageResponse
from innovaport.modules.legal_pages.service import LegalPageService
from innovaport.core.dependencies import require_admin
from supabase import Client
from typing import List

router = APIRouter(tags=["legal-pages"])


def get_legal_page_service(supabase: Client = Depends(get_supabase_admin)) -> LegalPageService:
    return LegalPageService(supabase)


@router.get("/legal/{slug}", response_model=LegalPageResponse)
async def get_published_page(
    slug: str,
    service: LegalPageService = Depends(get_legal_page_service)
):
    return service.get_published(slug)


@router.get("/legal-pages", response_model=List[LegalPageResponse])
async def list_pages(
    admin: dict = Depends(require_admin),
    service: LegalPageService = Depends(get_legal_page_service)
):
    return service.list_pages()


@router.post("/legal-pages", response_model=LegalPageResponse, status_code=201)
async def create_page(
    page_data: LegalPageCreate,
    admin: dict = Depends(require_admin),
    service: LegalPageService = Depends(get_legal_page_service)
):
    return service.create_page(page_data, admin["id"])


@router.get("/legal-pages/{page_id}", response_model=LegalPageResponse)
async def get_page(
    page_id: str,
    admin: dict = Depends(require_admin),
    service: LegalPageService = Depends(get_legal_page_service)
):
    return service.get_page(page_id)


@router.put("/legal-pages/{page_id}", response_model=LegalPageResponse)
async def update_page(
    page_id: str,
    page_data: LegalPageUpdate,
    admin: dict = Depends(require_admin),
    service: LegalPageService = Depends(get_legal_page_service)
):
    return service.update_page(page_id, page_data, admin["id"])


@router.delete("/legal-pages/{page_id}", status_code=204)
async def delete_page(
    page_id: str,
    admin: dict = Depends(require_admin),
    service: LegalPageService = Depends(get_legal_page_service)
):
    service.delete_page(page_id, admin["id"])
    return None
