"""
Subscription plan configuration
Single source of truth for what each tier (free, pro, premium) may do.
A limit of None means unlimited.
"""

from typing import Any, Dict, Optional

DEFAULT_TIER = "free"
PAID_PLANS = ("pro", "premium")

PLAN_LIMITS: Dict[str, Dict[str, Any]] = {
    "free": {
        "max_projects": 3,
        "max_quotes_per_month": 3,
        "custom_domain": False,
        "custom_slug": False,
        "max_custom_domains": 0,
        "max_subdomains": 0,
        "multi_domain_dashboard": False,
        "remove_branding": False,
        "export_pdf": False,
        "export_excel": False,
        "electronic_signatures": False,
        "analytics_reports": False,
        "priority_support": False,
        "multi_users": False,
        "custom_client_portal": False,
        "accounting_integration": False,
        "advanced_automations": False,
        "custom_reports": False,
    },
    "pro": {
        "max_projects": None,
        "max_quotes_per_month": None,
        "custom_domain": True,
        "custom_slug": True,
        "max_custom_domains": 1,
        "max_subdomains": 0,
        "multi_domain_dashboard": False,
        "remove_branding": True,
        "export_pdf": True,
        "export_excel": True,
        "electronic_signatures": True,
        "analytics_reports": True,
        "priority_support": True,
        "multi_users": False,
        "custom_client_portal": False,
        "accounting_integration": False,
        "advanced_automations": False,
        "custom_reports": False,
    },
    "premium": {
        "max_projects": None,
        "max_quotes_per_month": None,
        "custom_domain": True,
        "custom_slug": True,
        "max_custom_domains": None,
        "max_subdomains": None,
        "multi_domain_dashboard": True,
        "remove_branding": True,
        "export_pdf": True,
        "export_excel": True,
        "electronic_signatures": True,
        "analytics_reports": True,
        "priority_support": True,
        "multi_users": True,
        "custom_client_portal": True,
        "accounting_integration": True,
        "advanced_automations": True,
        "custom_reports": True,
    },
}

# Checkout display prices in cents (USD), used to size fixed-amount promo coupons
PLAN_PRICES = {
    "pro": 1900,
    "premium": 3900,
}


def normalize_tier(tier: Optional[str]) -> str:
    """Unknown or missing tiers are treated as free"""
    return tier if tier in PLAN_LIMITS else DEFAULT_TIER


def get_plan_limits(tier: Optional[str]) -> Dict[str, Any]:
    return PLAN_LIMITS[normalize_tier(tier)]


def _under_limit(limit: Optional[int], current: int) -> bool:
    if limit is None:
        return True
    return current < limit


def can_create_project(tier: Optional[str], current_project_count: int) -> bool:
    return _under_limit(get_plan_limits(tier)["max_projects"], current_project_count)


def can_receive_quote(tier: Optional[str], current_month_quote_count: int) -> bool:
    return _under_limit(get_plan_limits(tier)["max_quotes_per_month"], current_month_quote_count)


def has_feature(tier: Optional[str], feature: str) -> bool:
    return get_plan_limits(tier).get(feature) is True
