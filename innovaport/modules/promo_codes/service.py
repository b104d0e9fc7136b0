from supabase import Client
from innovaport.modules.promo_codes.schemas import (
    PromoCodeCreate,
    PromoCodeUpdate,
    PromoCodeResponse,
    PromoValidationResponse,
    promo_values_error,
)
from innovaport.config.plans_config import PAID_PLANS
from innovaport.database.supabase_client import first_row, utc_now_iso
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any
from fastapi import HTTPException
import logging
import re

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    """Promo codes are stored as upper-case alphanumerics"""
    return re.sub(r"[^A-Z0-9]", "", (code or "").upper())


def _as_datetime(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def promo_rejection_reason(promo: Dict[str, Any], plan: str, now: Optional[datetime] = None) -> Optional[str]:
    """Why a promo code cannot be used for a plan right now; None when usable"""
    now = now or datetime.now(timezone.utc)
    valid_from = _as_datetime(promo.get("valid_from"))
    valid_until = _as_datetime(promo.get("valid_until"))
    if (valid_from and now < valid_from) or (valid_until and now > valid_until):
        return "Promo code expired"
    max_uses = promo.get("max_uses")
    if max_uses and (promo.get("current_uses") or 0) >= max_uses:
        return "Promo code exhausted"
    applicable_plans = promo.get("applicable_plans")
    if applicable_plans and plan not in applicable_plans:
        return f"This promo code is not valid for the {plan} plan"
    return None


class PromoCodeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find_active(self, code: str) -> Optional[Dict[str, Any]]:
        normalized = normalize_code(code)
        if not normalized:
            return None
        result = self.supabase.table("promo_codes")\
            .select("*")\
            .eq("code", normalized)\
            .eq("is_active", True)\
            .limit(1)\
            .execute()
        return first_row(result)

    def validate(self, code: Optional[str], plan: Optional[str]) -> PromoValidationResponse:
        if not code or not isinstance(code, str):
            raise HTTPException(status_code=400, detail="Promo code is required")
        if plan not in PAID_PLANS:
            raise HTTPException(status_code=400, detail="Invalid plan")

        try:
            promo = self.find_active(code)
        except Exception as e:
            logger.error(f"Error looking up promo code: {e}")
            raise HTTPException(status_code=500, detail="Failed to validate promo code")

        if not promo:
            return PromoValidationResponse(valid=False, error="Invalid promo code")

        reason = promo_rejection_reason(promo, plan)
        if reason:
            return PromoValidationResponse(valid=False, error=reason)

        return PromoValidationResponse(
            valid=True,
            code=promo["code"],
            discount_type=promo["discount_type"],
            discount_value=promo["discount_value"],
            applicable_plans=promo.get("applicable_plans"),
        )

    def usable_promo(self, code: Optional[str], plan: str) -> Optional[Dict[str, Any]]:
        """Promo row if it can be applied at checkout; lookup failures just skip the discount"""
        if not code:
            return None
        try:
            promo = self.find_active(code)
        except Exception as e:
            logger.warning(f"Promo code lookup failed: {e}")
            return None
        if promo and promo_rejection_reason(promo, plan) is None:
            return promo
        return None

    def increment_usage(self, code: str) -> None:
        row = first_row(
            self.supabase.table("promo_codes")
            .select("id, current_uses")
            .eq("code", code)
            .limit(1)
            .execute()
        )
        if not row:
            logger.warning(f"Promo code {code} not found when recording usage")
            return
        self.supabase.table("promo_codes")\
            .update({"current_uses": (row.get("current_uses") or 0) + 1})\
            .eq("id", row["id"])\
            .execute()

    # Admin CRUD

    def list_promo_codes(self) -> List[PromoCodeResponse]:
        try:
            result = self.supabase.table("promo_codes")\
                .select("*")\
                .order("created_at", desc=True)\
                .execute()
            return [PromoCodeResponse(**p) for p in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_promo_code(self, promo_data: PromoCodeCreate, admin_id: str) -> PromoCodeResponse:
        try:
            code = normalize_code(promo_data.code)
            if not code:
                raise HTTPException(status_code=400, detail="Promo code must contain letters or digits")

            existing = self.supabase.table("promo_codes")\
                .select("id")\
                .eq("code", code)\
                .limit(1)\
                .execute()
            if existing.data:
                raise HTTPException(status_code=409, detail="Promo code already exists")

            result = self.supabase.table("promo_codes").insert({
                **promo_data.model_dump(mode="json"),
                "code": code,
                "current_uses": 0,
                "created_by": admin_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create promo code")

            logger.info(f"Admin {admin_id} created promo code {code}")
            return PromoCodeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_promo_code(self, promo_id: str, promo_data: PromoCodeUpdate, admin_id: str) -> PromoCodeResponse:
        try:
            current = first_row(
                self.supabase.table("promo_codes")
                .select("*")
                .eq("id", promo_id)
                .limit(1)
                .execute()
            )
            if not current:
                raise HTTPException(status_code=404, detail="Promo code not found")

            update_data = promo_data.model_dump(mode="json", exclude_unset=True)
            if "applicable_plans" in update_data and not update_data["applicable_plans"]:
                update_data["applicable_plans"] = None

            merged = {**current, **update_data}
            error = promo_values_error(
                merged.get("discount_type"),
                merged.get("discount_value"),
                _as_datetime(merged.get("valid_from")),
                _as_datetime(merged.get("valid_until")),
            )
            if error:
                raise HTTPException(status_code=400, detail=error)
            update_data["updated_at"] = utc_now_iso()

            result = self.supabase.table("promo_codes")\
                .update(update_data)\
                .eq("id", promo_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Promo code not found")

            logger.info(f"Admin {admin_id} updated promo code {promo_id}")
            return PromoCodeResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_promo_code(self, promo_id: str, admin_id: str) -> bool:
        try:
            result = self.supabase.table("promo_codes")\
                .delete()\
                .eq("id", promo_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Promo code not found")
            logger.info(f"Admin {admin_id} deleted promo code {promo_id}")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
