from supabase import Client
from innovaport.modules.legal_pages.schemas import LegalPageCreate, LegalPageUpdate, LegalPageResponse
from innovaport.database.supabase_client import first_row, utc_now_iso
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class LegalPageService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        query = self.supabase.table("legal_pages").select("id").eq("slug", slug)
        if exclude_id:
            query = query.neq("id", exclude_id)
        return bool(query.limit(1).execute().data)

    def list_pages(self) -> List[LegalPageResponse]:
        try:
            result = self.supabase.table("legal_pages")\
                .select("*")\
                .order("updated_at", desc=True)\
                .execute()
            return [LegalPageResponse(**p) for p in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_page(self, page_id: str) -> LegalPageResponse:
        try:
            page = first_row(
                self.supabase.table("legal_pages")
                .select("*")
                .eq("id", page_id)
                .limit(1)
                .execute()
            )
            if not page:
                raise HTTPException(status_code=404, detail="Legal page not found")
            return LegalPageResponse(**page)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_published(self, slug: str) -> LegalPageResponse:
        """Public read; drafts are invisible"""
        try:
            page = first_row(
                self.supabase.table("legal_pages")
                .select("*")
                .eq("slug", slug)
                .eq("status", "published")
                .limit(1)
                .execute()
            )
            if not page:
                raise HTTPException(status_code=404, detail="Legal page not found")
            return LegalPageResponse(**page)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_page(self, page_data: LegalPageCreate, admin_id: str) -> LegalPageResponse:
        try:
            if self._slug_taken(page_data.slug):
                raise HTTPException(status_code=409, detail="A legal page with this slug already exists")

            now = utc_now_iso()
            result = self.supabase.table("legal_pages").insert({
                **page_data.model_dump(),
                "last_updated_by": admin_id,
                "published_at": now if page_data.status == "published" else None,
                "updated_at": now,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create legal page")

            logger.info(f"Admin {admin_id} created legal page {page_data.slug}")
            return LegalPageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_page(self, page_id: str, page_data: LegalPageUpdate, admin_id: str) -> LegalPageResponse:
        try:
            current = self.get_page(page_id)
            update_data = page_data.model_dump(exclude_unset=True)
            if update_data.get("slug") and self._slug_taken(update_data["slug"], exclude_id=page_id):
                raise HTTPException(status_code=409, detail="A legal page with this slug already exists")

            now = utc_now_iso()
            if update_data.get("status") == "published" and current.status != "published":
                update_data["published_at"] = now
            update_data["last_updated_by"] = admin_id
            update_data["updated_at"] = now

            result = self.supabase.table("legal_pages")\
                .update(update_data)\
                .eq("id", page_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Legal page not found")

            logger.info(f"Admin {admin_id} updated legal page {page_id}")
            return LegalPageResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_page(self, page_id: str, admin_id: str) -> bool:
        try:
            result = self.supabase.table("legal_pages")\
                .delete()\
                .eq("id", page_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Legal page not found")
            logger.info(f"Admin {admin_id} deleted legal page {page_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
