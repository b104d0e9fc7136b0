# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Sets test environment variables before innovaport.config is imported
# (settings are read at import time), then wires the FastAPI app to the
# in-memory fakes through dependency overrides.
# =============================================================================

import os

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-key")
os.environ.setdefault("STRIPE_PRICE_ID_PRO", "price_pro_test")
os.environ.setdefault("STRIPE_PRICE_ID_PREMIUM", "price_premium_test")
os.environ.setdefault("CRON_SECRET", "test-cron-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("APP_URL", "https://innovaport.test")

import pytest
from fastapi.testclient import TestClient

from innovaport.main import app
from innovaport.core.rate_limit import limiter
from innovaport.database.supabase_client import get_supabase, get_supabase_admin, get_supabase_session
from innovaport.modules.auth.service import clear_auth_cache
from innovaport.modules.billing.gateway import get_stripe_gateway
from innovaport.modules.notifications.email_client import get_email_client
from tests.fakes import FakeEmailClient, FakeStripeGateway, FakeSupabase


# =============================================================================
# Fakes
# =============================================================================

@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def email_client():
    return FakeEmailClient()


@pytest.fixture
def stripe_gateway():
    return FakeStripeGateway()


@pytest.fixture
def client(fake_db, email_client, stripe_gateway):
    """TestClient with Supabase, e-mail and Stripe replaced by fakes"""
    app.dependency_overrides[get_supabase] = lambda: fake_db
    app.dependency_overrides[get_supabase_admin] = lambda: fake_db
    app.dependency_overrides[get_supabase_session] = lambda: fake_db.session_client()
    app.dependency_overrides[get_email_client] = lambda: email_client
    app.dependency_overrides[get_stripe_gateway] = lambda: stripe_gateway
    limiter.reset()
    clear_auth_cache()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    clear_auth_cache()


# =============================================================================
# Users
# =============================================================================

def create_account(fake_db, username="alice", tier="free", role="developer", email=None, **profile_fields):
    """Auth user + profile row; returns the profile with its bearer headers under 'headers'"""
    email = email or f"{username}@example.com"
    user = fake_db.auth.make_user(email, {"username": username})
    token = fake_db.auth.issue_token(user)
    profile = fake_db.seed(
        "profiles",
        id=user.id,
        email=email,
        username=username,
        full_name=username.title(),
        subscription_tier=tier,
        role=role,
        **profile_fields,
    )
    return {**profile, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def developer(fake_db):
    return create_account(fake_db, username="alice")


@pytest.fixture
def pro_developer(fake_db):
    return create_account(fake_db, username="bob", tier="pro")


@pytest.fixture
def admin_user(fake_db):
    return create_account(fake_db, username="root-admin", role="admin")


@pytest.fixture
def quote_payload():
    """Portfolio contact form body, camelCase as sent by the frontend"""
    return {
        "username": "alice",
        "name": "Claire Martin",
        "email": "Claire@Example.com ",
        "projectType": "Mobile app",
        "platforms": {"ios": True, "android": False},
        "budget": "10k-20k",
        "deadline": "3 months",
        "features": ["Login", "Payments"],
        "description": "A booking app for a small chain of hair salons.",
        "consentContact": True,
        "consentPrivacy": True,
    }
